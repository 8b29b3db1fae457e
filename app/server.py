"""Process entry point.

Connects to MongoDB before accepting traffic and treats any unhandled
exception, on any thread or on the event loop, as fatal.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import threading

import uvicorn

from app.config import get_settings
from app.context import AppContext, connect
from app.main import create_app
from storefront_common.exceptions import ConnectionFailureError
from storefront_common.logging import setup_logging

logger = logging.getLogger(__name__)


def _fatal(message: str, exc: BaseException | None) -> None:
    logger.critical(
        message,
        exc_info=(type(exc), exc, exc.__traceback__) if exc is not None else None,
    )
    logging.shutdown()
    os._exit(1)


def _excepthook(exc_type, exc, tb) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    _fatal("Uncaught exception, shutting down", exc)


def _thread_excepthook(args: threading.ExceptHookArgs) -> None:
    if args.exc_type is SystemExit:
        return
    _fatal(f"Uncaught exception in thread {args.thread.name}, shutting down", args.exc_value)


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    exc = context.get("exception")
    if exc is None or isinstance(exc, asyncio.CancelledError):
        loop.default_exception_handler(context)
        return
    _fatal(f"Unhandled async fault: {context.get('message')}", exc)


def install_fatal_handlers() -> None:
    sys.excepthook = _excepthook
    threading.excepthook = _thread_excepthook


async def serve(config: uvicorn.Config) -> None:
    asyncio.get_running_loop().set_exception_handler(_loop_exception_handler)
    await uvicorn.Server(config).serve()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    install_fatal_handlers()

    logger.info("Attempting MongoDB connection", extra={"database": settings.MONGO_DB_NAME})
    try:
        db = connect(settings)
    except ConnectionFailureError as exc:
        logger.error(
            "Error connecting to MongoDB, check MONGO_URI",
            extra={"error": exc.message},
        )
        sys.exit(1)
    logger.info("Connected to MongoDB")

    app = create_app(AppContext.from_settings(settings, db=db))
    config = uvicorn.Config(app, host="0.0.0.0", port=settings.PORT, log_config=None)
    asyncio.run(serve(config))


if __name__ == "__main__":
    main()
