"""Authentication and authorization dependencies for FastAPI.

A request moves through three states: no usable credential (401), a bearer
token that must resolve to a stored user (401 on any failure), and an
authenticated user that admin-only routes additionally check for
``is_admin`` (403).
"""

from __future__ import annotations

from typing import Optional

from fastapi import Cookie, Depends, Header, Request

from app.context import AppContext, get_context
from app.services.auth_service import decode_access_token
from storefront_common.exceptions import ForbiddenError, UnauthorizedError
from storefront_common.models import User


def extract_token(
    authorization: Optional[str], access_token: Optional[str]
) -> Optional[str]:
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() != "bearer" or not credentials.strip():
            raise UnauthorizedError("Malformed Authorization header")
        return credentials.strip()
    return access_token or None


async def get_current_user_id(
    access_token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
    ctx: AppContext = Depends(get_context),
) -> str:
    token = extract_token(authorization, access_token)
    if not token:
        raise UnauthorizedError("Not authorized, no token")

    payload = decode_access_token(ctx.settings, token)
    return payload["sub"]


def get_current_user(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
) -> User:
    user = ctx.users.find_by_id(user_id)
    if user is None:
        raise UnauthorizedError("Not authorized, user not found")
    request.state.user = user
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise ForbiddenError("Not authorized as an admin")
    return current_user
