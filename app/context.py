"""Process-wide application context.

Built once when the app is created and stored on ``app.state.ctx``; request
handlers reach it through :func:`app.api.deps.get_context`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pymongo.database import Database
from starlette.requests import Request

from app.config import Settings
from storefront_common.mongo import get_database, ping
from storefront_common.repositories import (
    OrderRepository,
    ProductRepository,
    UserRepository,
)


@dataclass
class AppContext:
    settings: Settings
    db: Database
    users: UserRepository = field(init=False)
    products: ProductRepository = field(init=False)
    orders: OrderRepository = field(init=False)

    def __post_init__(self) -> None:
        self.users = UserRepository(self.db, bcrypt_rounds=self.settings.BCRYPT_ROUNDS)
        self.products = ProductRepository(self.db)
        self.orders = OrderRepository(self.db)

    @classmethod
    def from_settings(
        cls, settings: Settings, db: Optional[Database] = None
    ) -> "AppContext":
        if db is None:
            db = connect(settings)
        return cls(settings=settings, db=db)


def connect(settings: Settings) -> Database:
    """Open the configured database and make sure the server answers."""
    db = get_database(
        settings.MONGO_URI or "mongodb://localhost:27017",
        settings.MONGO_DB_NAME,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
    )
    ping(db)
    return db


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context the app was started with."""
    ctx = getattr(request.app.state, "ctx", None)
    if ctx is None:
        raise RuntimeError("Application context is not initialised")
    return ctx
