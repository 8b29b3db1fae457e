"""JSON logging for the storefront services.

Records carry the OpenTelemetry trace/span ids when a span is active and the
id of the HTTP request being served, bound by the request logging middleware.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar, Token
from typing import Any, Optional

from pythonjsonlogger import jsonlogger
from opentelemetry import trace

_request_id: ContextVar[Optional[str]] = ContextVar("storefront_request_id", default=None)


def bind_request_id(request_id: str) -> Token:
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def current_request_id() -> Optional[str]:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Copy the bound request id onto each record as ``request_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = current_request_id()
        return True


class OTelJSONFormatter(jsonlogger.JsonFormatter):
    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        ctx = trace.get_current_span().get_span_context()
        if ctx.is_valid:
            log_record["trace_id"] = trace.format_trace_id(ctx.trace_id)
            log_record["span_id"] = trace.format_span_id(ctx.span_id)

        request_id = getattr(record, "request_id", None) or current_request_id()
        if request_id:
            log_record["request_id"] = request_id
        else:
            log_record.pop("request_id", None)

        log_record["level"] = str(log_record.get("level") or record.levelname).upper()


def setup_logging(level: str = "INFO") -> None:
    """Send JSON records from the root logger to stdout, replacing any handlers."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        OTelJSONFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    )
    handler.addFilter(RequestIdFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # RequestLoggingMiddleware covers access logs
    logging.getLogger("uvicorn.access").disabled = True
    logging.getLogger("pymongo").setLevel("WARNING")
