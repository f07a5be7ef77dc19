"""
Logging utilities for the Call Notifier service.

Provides:
- Request ID tracking across async contexts
- Request ID middleware for FastAPI
- Root logger configuration driven by settings
"""

import logging
import sys
import uuid
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from config import Settings, get_settings

# Context variable to track request_id across async contexts
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """
    Logging filter that injects request_id into every log record.

    If no request_id is set in the context, defaults to "-".
    This allows the formatter to safely use %(request_id)s.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")
        return True


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware that generates and tracks request IDs.

    - Reuses an inbound X-Request-ID header (webhook platforms often send one)
    - Otherwise generates a UUID for the request
    - Echoes the id back in the X-Request-ID response header
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        token = request_id_var.set(request_id)

        try:
            response: Response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_var.reset(token)


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure the root logger with request_id-aware formatting.

    Sets up:
    - Request ID injection via RequestIdFilter
    - Structured log format with timestamp, level, module, function, request_id
    - Output to stdout (container/serverless-friendly)
    - Log level from settings
    """
    settings = settings or get_settings()

    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s | %(request_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()  # Avoid duplicate handlers on reload
    root.setLevel(level)
    root.addHandler(handler)

    # The email client logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
