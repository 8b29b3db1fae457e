"""Common dependency aliases for API endpoints."""

from app.context import get_context
from app.middleware.auth import (
    get_current_user,
    get_current_user_id,
    require_admin,
)

__all__ = [
    "get_context",
    "get_current_user",
    "get_current_user_id",
    "require_admin",
]
