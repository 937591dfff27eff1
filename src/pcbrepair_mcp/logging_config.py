"""Logging infrastructure for the pcbrepair tools and MCP server.

Provides configurable levels and per-tool-call request tracking. The
decode/parse/interpret core never logs; only the outer layers do.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

LOG_LEVEL_ENV = "PCBREPAIR_LOG_LEVEL"

# Request ID tracking for tool-call correlation
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Get the current request ID if available."""
    return request_id_ctx.get()


@contextmanager
def request_scope() -> Iterator[str]:
    """Tag every log record emitted inside the block with a fresh request ID.

    Nested scopes keep the outer ID.
    """
    current = request_id_ctx.get()
    if current is not None:
        yield current
        return
    request_id = uuid.uuid4().hex[:8]
    token = request_id_ctx.set(request_id)
    try:
        yield request_id
    finally:
        request_id_ctx.reset(token)


class _RequestIdFilter(logging.Filter):
    """Guarantee every record has a ``request_id`` attribute for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
    stream: Any = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to PCBREPAIR_LOG_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.
        stream: Output stream for the handler. Defaults to stdout.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = level.upper()

    if format_string is None:
        format_string = (
            "%(asctime)s [%(levelname)s] [%(name)s] [request=%(request_id)s] %(message)s"
        )

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    handler.addFilter(_RequestIdFilter())
    logger.addHandler(handler)

    # fastmcp and its transport stack are chatty at INFO
    for noisy in ("httpx", "asyncio", "mcp", "fastmcp"):
        logging.getLogger(noisy).setLevel("WARNING")

    return logger


class RequestLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that automatically adds request ID to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        request_id = get_request_id()
        if request_id is not None:
            extra["request_id"] = request_id
        kwargs["extra"] = extra
        return msg, kwargs


def create_logger(name: str) -> RequestLoggerAdapter:
    """Create and return a logger for a module.

    Args:
        name: The module name (typically __name__).

    Returns:
        A configured logger with request context support.
    """
    return RequestLoggerAdapter(logging.getLogger(name), {})
