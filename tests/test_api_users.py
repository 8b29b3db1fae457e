import unittest

from storefront_common.security import verify_password
from tests.helpers import bearer, make_client, make_context


class TestUserEndpoints(unittest.TestCase):
    def setUp(self):
        self.ctx = make_context()
        self.client = make_client(self.ctx)

    def register(self, name="A", email="a@x.com", password="secret"):
        resp = self.client.post(
            "/api/users", json={"name": name, "email": email, "password": password}
        )
        self.client.cookies.clear()
        return resp

    def test_register_login_and_duplicate(self):
        resp = self.register()
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["name"], "A")
        self.assertEqual(data["email"], "a@x.com")
        self.assertFalse(data["is_admin"])
        self.assertTrue(data["token"])
        self.assertNotIn("password_hash", data)
        self.assertNotIn("password", data)

        resp = self.client.post("/api/users/login", json={"email": "a@x.com", "password": "secret"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], data["id"])
        self.assertIn("access_token", resp.cookies)

        resp = self.client.post("/api/users/login", json={"email": "a@x.com", "password": "wrong"})
        self.assertEqual(resp.status_code, 401)

        resp = self.register(name="Other")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("already exists", resp.json()["detail"])
        self.assertEqual(self.ctx.db.users.count_documents({}), 1)

    def test_login_unknown_email_looks_like_wrong_password(self):
        self.register()
        unknown = self.client.post("/api/users/login", json={"email": "b@x.com", "password": "secret"})
        wrong = self.client.post("/api/users/login", json={"email": "a@x.com", "password": "nope"})
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(unknown.json(), wrong.json())

    def test_login_with_corrupted_hash_is_server_error(self):
        self.register()
        self.ctx.db.users.update_one({"email": "a@x.com"}, {"$set": {"password_hash": "secret"}})
        resp = self.client.post("/api/users/login", json={"email": "a@x.com", "password": "secret"})
        self.assertEqual(resp.status_code, 500)

    def test_register_validates_input(self):
        self.assertEqual(self.register(email="not-an-email").status_code, 422)
        self.assertEqual(self.register(name="").status_code, 422)
        self.assertEqual(self.register(password="").status_code, 422)

    def test_token_from_register_authenticates(self):
        resp = self.client.post(
            "/api/users", json={"name": "A", "email": "a@x.com", "password": "secret"}
        )
        token = resp.json()["token"]
        self.client.cookies.clear()
        resp = self.client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "a@x.com")

    def test_profile_update_without_password_keeps_hash(self):
        user = self.ctx.users.create("A", "a@x.com", "secret")
        resp = self.client.put(
            "/api/users/profile", json={"name": "Renamed"}, headers=bearer(self.ctx, user)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Renamed")
        self.assertEqual(self.ctx.users.find_by_id(user.id).password_hash, user.password_hash)

    def test_profile_password_change(self):
        user = self.ctx.users.create("A", "a@x.com", "secret")
        resp = self.client.put(
            "/api/users/profile", json={"password": "changed"}, headers=bearer(self.ctx, user)
        )
        self.assertEqual(resp.status_code, 200)
        stored = self.ctx.users.find_by_id(user.id)
        self.assertTrue(verify_password("changed", stored.password_hash))

        resp = self.client.post("/api/users/login", json={"email": "a@x.com", "password": "changed"})
        self.assertEqual(resp.status_code, 200)

    def test_rejected_password_leaves_profile_untouched(self):
        user = self.ctx.users.create("A", "a@x.com", "secret")
        already_hashed = self.ctx.users.create("B", "b@x.com", "other").password_hash
        resp = self.client.put(
            "/api/users/profile",
            json={"name": "Changed", "email": "new@x.com", "password": already_hashed},
            headers=bearer(self.ctx, user),
        )
        self.assertEqual(resp.status_code, 400)

        stored = self.ctx.users.find_by_id(user.id)
        self.assertEqual(stored.name, "A")
        self.assertEqual(stored.email, "a@x.com")
        self.assertEqual(stored.password_hash, user.password_hash)

    def test_profile_email_collision_keeps_password(self):
        self.ctx.users.create("B", "b@x.com", "secret")
        user = self.ctx.users.create("A", "a@x.com", "secret")
        resp = self.client.put(
            "/api/users/profile",
            json={"email": "b@x.com", "password": "changed"},
            headers=bearer(self.ctx, user),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.ctx.users.find_by_id(user.id).password_hash, user.password_hash)

    def test_profile_email_collision(self):
        self.ctx.users.create("B", "b@x.com", "secret")
        user = self.ctx.users.create("A", "a@x.com", "secret")
        resp = self.client.put(
            "/api/users/profile", json={"email": "B@x.com"}, headers=bearer(self.ctx, user)
        )
        self.assertEqual(resp.status_code, 400)

    def test_admin_can_promote_and_list_users(self):
        admin = self.ctx.users.create("Admin", "admin@x.com", "secret", is_admin=True)
        user = self.ctx.users.create("A", "a@x.com", "secret")
        headers = bearer(self.ctx, admin)

        resp = self.client.put(f"/api/users/{user.id}", json={"is_admin": True}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["is_admin"])
        self.assertEqual(self.ctx.users.find_by_id(user.id).password_hash, user.password_hash)

        resp = self.client.get("/api/users", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 2)

    def test_non_admin_cannot_promote_self(self):
        user = self.ctx.users.create("A", "a@x.com", "secret")
        resp = self.client.put(
            f"/api/users/{user.id}", json={"is_admin": True}, headers=bearer(self.ctx, user)
        )
        self.assertEqual(resp.status_code, 403)
        resp = self.client.put(
            "/api/users/profile", json={"is_admin": True}, headers=bearer(self.ctx, user)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(self.ctx.users.find_by_id(user.id).is_admin)

    def test_admin_delete_user(self):
        admin = self.ctx.users.create("Admin", "admin@x.com", "secret", is_admin=True)
        user = self.ctx.users.create("A", "a@x.com", "secret")
        headers = bearer(self.ctx, admin)

        self.assertEqual(self.client.delete(f"/api/users/{user.id}", headers=headers).status_code, 204)
        self.assertIsNone(self.ctx.users.find_by_id(user.id))
        self.assertEqual(self.client.get(f"/api/users/{user.id}", headers=headers).status_code, 404)
        self.assertEqual(self.client.delete(f"/api/users/{admin.id}", headers=headers).status_code, 400)

    def test_logout_clears_cookie(self):
        self.client.post("/api/users", json={"name": "A", "email": "a@x.com", "password": "secret"})
        self.assertEqual(self.client.get("/api/users/profile").status_code, 200)
        self.assertEqual(self.client.post("/api/users/logout").status_code, 204)
        self.assertEqual(self.client.get("/api/users/profile").status_code, 401)


if __name__ == "__main__":
    unittest.main()
