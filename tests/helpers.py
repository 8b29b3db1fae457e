import mongomock
from fastapi.testclient import TestClient

from app.config import Settings
from app.context import AppContext
from app.main import create_app
from app.services.auth_service import create_access_token


def make_settings(**overrides) -> Settings:
    values = {
        "MONGO_URI": "mongodb://localhost:27017",
        "JWT_SECRET": "test-secret",
        "BCRYPT_ROUNDS": 4,
        "NODE_ENV": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_context(**overrides) -> AppContext:
    db = mongomock.MongoClient(tz_aware=True)["storefront_test"]
    return AppContext(settings=make_settings(**overrides), db=db)


def make_client(ctx: AppContext) -> TestClient:
    return TestClient(create_app(ctx))


def bearer(ctx: AppContext, user) -> dict:
    token = create_access_token(ctx.settings, subject=user.id)
    return {"Authorization": f"Bearer {token}"}
