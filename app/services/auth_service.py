from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from app.config import Settings
from storefront_common.exceptions import UnauthorizedError

ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    settings: Settings,
    subject: str | int,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not configured")
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(subject),
        "exp": now + expires_delta,
        "iat": now,
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """Validate signature, expiry and token type; return the claims."""
    if not settings.JWT_SECRET:
        raise UnauthorizedError("Token signing is not configured")
    try:
        # jose checks `exp` itself and raises ExpiredSignatureError (a JWTError)
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        raise UnauthorizedError(f"Could not validate credentials: {e}")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise UnauthorizedError("Invalid token type")
    if not payload.get("sub"):
        raise UnauthorizedError("Invalid authentication credentials")
    return payload
