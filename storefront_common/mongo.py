"""Shared MongoDB helpers for the storefront services."""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .exceptions import ConnectionFailureError

logger = logging.getLogger(__name__)

_clients: Dict[Tuple[str, frozenset], MongoClient] = {}


def get_client(uri: str, **kwargs: Any) -> MongoClient:
    """
    Return a cached MongoClient keyed by URI and options.
    PyMongo pools connections per client, so one client per URI is enough.
    """
    key = (uri, frozenset(kwargs.items()))
    if key not in _clients:
        _clients[key] = MongoClient(uri, **kwargs)
    return _clients[key]


def get_database(uri: str, db_name: str, **kwargs: Any) -> Database:
    """Convenience helper to fetch a database handle."""
    client = get_client(uri, **kwargs)
    return client[db_name]


def ping(db: Database) -> None:
    """Round-trip to the server; raise ConnectionFailureError if it is unreachable."""
    try:
        db.command("ping")
    except PyMongoError as exc:
        logger.error("MongoDB ping failed", extra={"database": db.name, "error": str(exc)})
        raise ConnectionFailureError(f"Could not connect to MongoDB: {exc}") from exc


def close_clients() -> None:
    for client in _clients.values():
        client.close()
    _clients.clear()
