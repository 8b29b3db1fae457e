"""Request logging middleware to trace requests, durations and identity.

- Adds a unique X-Request-ID header to responses (and uses any incoming header)
- Logs method, path, status, duration, client IP, user subject (from cookie/jwt)
- Does not log request/response bodies to avoid leaking passwords or tokens
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Optional

from jose import jwt
from jose.exceptions import JWTError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.auth import extract_token
from storefront_common.exceptions import UnauthorizedError
from storefront_common.logging import bind_request_id, reset_request_id


logger = logging.getLogger("app.request")


def _token_subject(request: Request) -> Optional[str]:
    ctx = getattr(request.app.state, "ctx", None)
    if ctx is None or not ctx.settings.JWT_SECRET:
        return None

    try:
        jwt_token = extract_token(
            request.headers.get("Authorization"), request.cookies.get("access_token")
        )
    except UnauthorizedError:
        # Malformed header; the auth dependency answers 401 for it
        return None
    if not jwt_token:
        return None

    try:
        payload = jwt.decode(
            jwt_token, ctx.settings.JWT_SECRET, algorithms=[ctx.settings.JWT_ALGORITHM]
        )
    except JWTError:
        # Rejected later by the auth dependency; tracing only needs a best effort
        return None
    return payload.get("sub")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log request/response metadata for tracing."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        start = time.monotonic()

        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        # Every record logged while serving this request carries request_id
        bound = bind_request_id(request_id)
        try:
            user_sub = _token_subject(request)
            try:
                response = await call_next(request)
            except Exception:  # pragma: no cover - we still want to log then reraise
                duration_ms = int((time.monotonic() - start) * 1000)
                logger.exception(
                    "Unhandled exception during request",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "client_ip": request.client.host if request.client else None,
                        "duration_ms": duration_ms,
                        "user_sub": user_sub,
                    },
                )
                raise

            duration_ms = int((time.monotonic() - start) * 1000)
            logger.info(
                "Request finished",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                    "client_ip": request.client.host if request.client else None,
                    "user_sub": user_sub,
                },
            )
        finally:
            reset_request_id(bound)

        response.headers.setdefault("X-Request-ID", request_id)
        return response
