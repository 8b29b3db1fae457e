"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from app.api import health, orders, products, users
from app.config import Settings, get_settings
from app.context import AppContext
from app.middleware.request_logging import RequestLoggingMiddleware
from storefront_common.exceptions import StorefrontError, UnauthorizedError
from storefront_common.mongo import close_clients

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.ctx is None:
        app.state.ctx = AppContext.from_settings(app.state.settings)
    log_startup(app.state.ctx.settings)
    try:
        yield
    finally:
        close_clients()


def log_startup(settings: Settings) -> None:
    base = f"http://localhost:{settings.PORT}"
    logger.info(
        "Server is running",
        extra={
            "port": settings.PORT,
            "environment": settings.NODE_ENV,
            "users_api": f"{base}/api/users",
            "products_api": f"{base}/api/products",
            "orders_api": f"{base}/api/orders",
            "health_check": f"{base}/health",
        },
    )


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "error": exc.message},
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code, content={"detail": exc.message}, headers=headers
    )


def mount_frontend(app: FastAPI, settings: Settings) -> None:
    """Serve the built SPA in production, a plain banner otherwise."""
    if not settings.is_production:

        @app.get("/", include_in_schema=False, response_class=PlainTextResponse)
        async def root():
            return "API is running..."

        return

    dist = Path(settings.FRONTEND_DIST).resolve()
    index = dist / "index.html"
    if not index.is_file():
        logger.warning("Frontend build not found", extra={"frontend_dist": str(dist)})
        return

    if (dist / "assets").is_dir():
        app.mount("/assets", StaticFiles(directory=dist / "assets"), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa(full_path: str):
        candidate = (dist / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(dist):
            return FileResponse(candidate)
        return FileResponse(index)


def create_app(ctx: Optional[AppContext] = None) -> FastAPI:
    settings = ctx.settings if ctx is not None else get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="REST API for users, products and orders",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ctx = ctx

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Trace middleware for request logging and correlation
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(StorefrontError, storefront_error_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, prefix="/api")
    app.include_router(products.router, prefix="/api")
    app.include_router(orders.router, prefix="/api")

    # Registered last so the SPA catch-all never shadows the API
    mount_frontend(app, settings)
    return app


app = create_app()
