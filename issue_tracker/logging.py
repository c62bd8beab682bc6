"""
Structured logging for the Issue Tracker.

structlog is layered over stdlib logging so that uvicorn and SQLAlchemy
output lands on the same stream. Development gets the colored console
renderer; any other ENV gets one JSON object per line.

Usage:
    from issue_tracker.logging import get_logger

    logger = get_logger("issue_tracker.issues")
    logger.info("issue_created", project="apitest", issue_id=issue.id)
"""

import logging
import os
import sys
import time
import uuid
from typing import Any

import structlog
from structlog.types import EventDict, Processor

SERVICE_NAME = "issue_tracker"
REQUEST_ID_HEADER = "x-request-id"


def _tag_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _wants_json() -> bool:
    return os.getenv("ENV", "development") != "development"


def build_processors(json_logs: bool) -> list[Processor]:
    """Processor chain: shared enrichment steps followed by one renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _tag_service,
    ]
    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    return processors


def configure_logging(level: str = "INFO", json_logs: bool | None = None) -> None:
    """
    Set up stdlib logging and structlog.

    Safe to call again: the root level is always reset to ``level``, even
    when an earlier call (or a logger created at import time) already
    installed the handler.

    Args:
        level: Root log level name
        json_logs: Force the JSON renderer on or off; by default it is used
            whenever ENV is something other than "development"
    """
    if json_logs is None:
        json_logs = _wants_json()

    root_level = logging.getLevelName(level.upper())
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=root_level,
    )
    # basicConfig leaves an already configured root logger untouched
    logging.getLogger().setLevel(root_level)
    structlog.configure(
        processors=build_processors(json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = SERVICE_NAME) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


# -----------------------------------------------------------------------------
# Request context
# -----------------------------------------------------------------------------


def bind_context(**values: Any) -> None:
    """Attach values to every log entry emitted by the current task."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_context_value(key: str, default: str = "-") -> str:
    """Read a bound context variable, e.g. the current request id."""
    return structlog.contextvars.get_contextvars().get(key, default)


def _incoming_request_id(scope) -> str:
    for name, value in scope.get("headers", []):
        if name.decode("latin-1").lower() == REQUEST_ID_HEADER:
            return value.decode("latin-1")
    return uuid.uuid4().hex[:8]


class RequestLoggingMiddleware:
    """
    ASGI middleware that logs every HTTP request.

    Each request gets an id, taken from X-Request-ID when the client sends
    one. The id is bound to the log context while the request runs, stored
    on ``request.state.request_id`` and returned in the X-Request-ID header.
    """

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request_id = _incoming_request_id(scope)
        scope.setdefault("state", {})["request_id"] = request_id
        bind_context(request_id=request_id)

        method, path = scope.get("method", ""), scope.get("path", "")
        self.logger.info("request_started", method=method, path=path)

        started = time.perf_counter()
        response_status = 500

        async def send_with_request_id(message):
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message.get("status", 500)
                message.setdefault("headers", []).append(
                    (REQUEST_ID_HEADER.encode(), request_id.encode())
                )
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            if response_status >= 500:
                emit = self.logger.error
            elif response_status >= 400:
                emit = self.logger.warning
            else:
                emit = self.logger.info
            emit(
                "request_complete",
                method=method,
                path=path,
                status_code=response_status,
                duration_seconds=round(time.perf_counter() - started, 3),
            )
            clear_context()


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
    "bind_context",
    "build_processors",
    "clear_context",
    "configure_logging",
    "get_context_value",
    "get_logger",
]
