"""Shared building blocks for the storefront API."""

from .logging import OTelJSONFormatter, setup_logging
from .mongo import close_clients, get_client, get_database, ping
from .exceptions import (
    StorefrontError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    DuplicateEmailError,
    ValidationError,
    DataIntegrityError,
    ConnectionFailureError,
)
from .security import hash_password, is_password_hash, verify_password

__all__ = [
    "OTelJSONFormatter",
    "setup_logging",
    "close_clients",
    "get_client",
    "get_database",
    "ping",
    "StorefrontError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "DuplicateEmailError",
    "ValidationError",
    "DataIntegrityError",
    "ConnectionFailureError",
    "hash_password",
    "is_password_hash",
    "verify_password",
]
