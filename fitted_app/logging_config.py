"""Structured JSON logging for the outfit engine and its HTTP surface.

Every record is rendered as one JSON object carrying the correlation id of
the request or operation that produced it. Fields attached through
:func:`log_event` are scrubbed first: inline image payloads, coordinates and
free-text garment descriptions never reach the log stream.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import time
import uuid
from typing import Any, Dict, Iterator, Mapping

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
}
REDACTED_KEYS = frozenset({"image", "latitude", "longitude", "lat", "lon", "description", "user_notes"})
MAX_LOGGED_TEXT = 512
_DATA_URI = re.compile(r"^data:[\w/+.-]+;base64,", re.IGNORECASE)
_HANDLER_MARKER = "_fitted_json_handler"


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", message),
            "message": message,
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        payload.update(
            (key, redact_for_log(value))
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in payload
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Install the JSON handler on the root logger.

    Calling it again only adjusts the level; the handler is never duplicated.
    """

    root = logging.getLogger()
    root.setLevel(level or os.getenv("LOG_LEVEL", "INFO"))
    if not any(getattr(handler, _HANDLER_MARKER, False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _scrub_text(value: str) -> str:
    if _DATA_URI.match(value):
        return "[redacted-image]"
    if len(value) > MAX_LOGGED_TEXT:
        return value[:MAX_LOGGED_TEXT] + "...[truncated]"
    return value


def redact_for_log(payload: Any) -> Any:
    """Return a JSON-friendly copy of ``payload`` with sensitive values masked."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _scrub_text(payload)
    if isinstance(payload, Mapping):
        return {
            key: "[redacted]" if key in REDACTED_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(item) for item in payload]
    return str(payload)


def get_logger(name: str) -> logging.Logger:
    """Module logger; installs the JSON handler if nothing is configured yet."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id``, keep the active one, or mint a new one."""

    if not correlation_id:
        correlation_id = CORRELATION_ID.get() or uuid.uuid4().hex
    CORRELATION_ID.set(correlation_id)
    return correlation_id


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id to the ``with`` block, restoring the previous one."""

    token = CORRELATION_ID.set(correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with scrubbed structured fields and the active correlation id."""

    correlation_id = fields.pop("correlation_id", None) or ensure_correlation_id()
    exc_info = fields.pop("exc_info", None)
    extra = {"event": event, "correlation_id": correlation_id}
    extra.update(redact_for_log(fields))
    logger.log(level, event, exc_info=exc_info, extra=extra)


@contextlib.contextmanager
def operation_context(name: str, **attributes: Any) -> Iterator[str]:
    """Scope a correlation id around ``name`` and log its start and duration at DEBUG."""

    logger = logging.getLogger(__name__)
    with correlation_context(attributes.pop("correlation_id", None)) as correlation_id:
        started = time.perf_counter()
        log_event(logger, logging.DEBUG, "operation_started", operation=name, correlation_id=correlation_id, **attributes)
        try:
            yield correlation_id
        finally:
            log_event(
                logger,
                logging.DEBUG,
                "operation_finished",
                operation=name,
                correlation_id=correlation_id,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
