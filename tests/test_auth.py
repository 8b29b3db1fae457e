import unittest
from datetime import timedelta
from types import SimpleNamespace

from fastapi import Depends, Request
from fastapi.testclient import TestClient
from jose import jwt

from app.main import create_app
from app.middleware.auth import extract_token, get_current_user, require_admin
from app.services.auth_service import create_access_token, decode_access_token
from storefront_common.exceptions import UnauthorizedError
from storefront_common.models import User
from tests.helpers import bearer, make_client, make_context, make_settings


class TestAccessTokens(unittest.TestCase):
    def setUp(self):
        self.settings = make_settings()

    def test_round_trip_carries_subject(self):
        token = create_access_token(self.settings, subject="abc123")
        payload = decode_access_token(self.settings, token)
        self.assertEqual(payload["sub"], "abc123")
        self.assertEqual(payload["type"], "access")

    def test_expired_token_rejected(self):
        token = create_access_token(
            self.settings, subject="abc123", expires_delta=timedelta(minutes=-1)
        )
        with self.assertRaises(UnauthorizedError):
            decode_access_token(self.settings, token)

    def test_token_signed_with_other_secret_rejected(self):
        token = create_access_token(make_settings(JWT_SECRET="other"), subject="abc123")
        with self.assertRaises(UnauthorizedError):
            decode_access_token(self.settings, token)

    def test_wrong_token_type_rejected(self):
        token = jwt.encode(
            {"sub": "abc123", "type": "refresh"}, "test-secret", algorithm="HS256"
        )
        with self.assertRaises(UnauthorizedError):
            decode_access_token(self.settings, token)

    def test_missing_subject_rejected(self):
        token = jwt.encode({"type": "access"}, "test-secret", algorithm="HS256")
        with self.assertRaises(UnauthorizedError):
            decode_access_token(self.settings, token)

    def test_garbage_rejected(self):
        with self.assertRaises(UnauthorizedError):
            decode_access_token(self.settings, "not-a-jwt")


class TestExtractToken(unittest.TestCase):
    def test_bearer_header(self):
        self.assertEqual(extract_token("Bearer abc", None), "abc")
        self.assertEqual(extract_token("bearer abc", None), "abc")

    def test_header_wins_over_cookie(self):
        self.assertEqual(extract_token("Bearer abc", "cookie"), "abc")

    def test_cookie_fallback(self):
        self.assertEqual(extract_token(None, "cookie"), "cookie")
        self.assertIsNone(extract_token(None, None))

    def test_malformed_header(self):
        for header in ("Basic abc", "Bearer", "Bearer   ", "abc"):
            with self.subTest(header=header):
                with self.assertRaises(UnauthorizedError):
                    extract_token(header, None)


class TestRouteAuthorization(unittest.TestCase):
    def setUp(self):
        self.ctx = make_context()
        self.client = make_client(self.ctx)
        self.customer = self.ctx.users.create("Customer", "c@x.com", "secret")
        self.admin = self.ctx.users.create("Admin", "admin@x.com", "secret", is_admin=True)
        self.product = {"name": "Phone", "price": 599.99, "count_in_stock": 3}

    def test_admin_route_without_credential_is_unauthorized(self):
        resp = self.client.post("/api/products", json=self.product)
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers["WWW-Authenticate"], "Bearer")

    def test_admin_route_with_malformed_header_is_unauthorized(self):
        resp = self.client.post(
            "/api/products", json=self.product, headers={"Authorization": "Token abc"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_admin_route_with_invalid_token_is_unauthorized(self):
        resp = self.client.post(
            "/api/products", json=self.product, headers={"Authorization": "Bearer junk"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_admin_route_for_non_admin_is_forbidden(self):
        resp = self.client.post(
            "/api/products", json=self.product, headers=bearer(self.ctx, self.customer)
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.ctx.db.products.count_documents({}), 0)

    def test_admin_route_for_admin_is_authorized(self):
        resp = self.client.post(
            "/api/products", json=self.product, headers=bearer(self.ctx, self.admin)
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["user"], str(self.admin.id))

    def test_token_for_deleted_user_is_unauthorized(self):
        headers = bearer(self.ctx, self.customer)
        self.ctx.users.delete(self.customer.id)
        resp = self.client.get("/api/users/profile", headers=headers)
        self.assertEqual(resp.status_code, 401)

    def test_cookie_credential_is_accepted(self):
        token = bearer(self.ctx, self.customer)["Authorization"].split()[1]
        self.client.cookies.set("access_token", token)
        resp = self.client.get("/api/users/profile")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "c@x.com")

    def test_request_id_is_echoed(self):
        resp = self.client.get("/health", headers={"X-Request-ID": "req-1"})
        self.assertEqual(resp.headers["X-Request-ID"], "req-1")

    def test_blank_bearer_credential_is_unauthorized(self):
        for header in ("Bearer ", "Bearer \xa0", "Bearer \x85"):
            with self.subTest(header=header):
                self.client.cookies.clear()
                resp = self.client.get(
                    "/api/users/profile", headers=[("Authorization", header.encode("latin-1"))]
                )
                self.assertEqual(resp.status_code, 401)

    def test_authenticated_user_is_attached_to_request_state(self):
        app = create_app(self.ctx)
        seen = {}

        @app.get("/whoami")
        def whoami(request: Request, user: User = Depends(get_current_user)):
            seen["state_user"] = request.state.user
            seen["user"] = user
            return {"email": request.state.user.email}

        client = TestClient(app)
        resp = client.get("/whoami", headers=bearer(self.ctx, self.customer))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"email": "c@x.com"})
        self.assertIs(seen["state_user"], seen["user"])
        self.assertEqual(seen["state_user"].id, self.customer.id)

    def test_get_current_user_sets_request_state(self):
        request = SimpleNamespace(state=SimpleNamespace())
        user = get_current_user(request, user_id=str(self.admin.id), ctx=self.ctx)
        self.assertEqual(user.id, self.admin.id)
        self.assertIs(request.state.user, user)
        self.assertTrue(require_admin(user).is_admin)

    def test_get_current_user_leaves_state_empty_when_user_missing(self):
        request = SimpleNamespace(state=SimpleNamespace())
        self.ctx.users.delete(self.customer.id)
        with self.assertRaises(UnauthorizedError):
            get_current_user(request, user_id=str(self.customer.id), ctx=self.ctx)
        self.assertFalse(hasattr(request.state, "user"))


if __name__ == "__main__":
    unittest.main()
