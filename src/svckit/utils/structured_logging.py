r"""Structured logging and correlation ids.

svckit never installs logging handlers. This module provides an opt-in
JSON formatter and a context-local correlation id. The id is attached to
every formatted record and forwarded by ``HttpClient`` to downstream
services in the ``x-correlation-id`` header.

Example:
    ```python
    import logging

    from svckit import configure
    from svckit.utils import StructuredFormatter, clear_correlation_id, set_correlation_id

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.getLogger("svckit").addHandler(handler)

    set_correlation_id("request-123")
    try:
        result = configure(timeout=2).set_url("https://api.example.com/data").send_get()
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "CORRELATION_ID_HEADER",
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

CORRELATION_ID_HEADER = "x-correlation-id"

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

# Attributes every LogRecord carries; anything else came from ``extra``
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


def get_correlation_id() -> str | None:
    """Get the correlation id of the current context.

    Returns:
        The current correlation id, or None if not set.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id of the current context.

    The value lives in a context variable, so it is isolated between
    threads and asyncio tasks.

    Args:
        correlation_id: The correlation id (e.g. the id of the inbound
            request being served).

    Example:
        ```pycon
        >>> from svckit.utils import get_correlation_id, set_correlation_id
        >>> set_correlation_id("request-456")
        >>> get_correlation_id()
        'request-456'

        ```
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation id of the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Standard fields: ``timestamp`` (ISO 8601, UTC), ``level``, ``logger``,
    ``message``, ``module``, ``function``, ``line``, ``thread`` and
    ``process``. ``correlation_id`` is added when one is set, ``exception``
    when the record carries exception info, and any field passed through
    ``extra`` is copied as is (non JSON-serialisable values are rendered
    with ``str``).

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from svckit.utils import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Fetched", extra={"status_code": 200})
        >>> '"status_code": 200' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002, N802
        """Format the record timestamp as ISO 8601 with milliseconds.

        ``datefmt`` is ignored.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with structured fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g. ``logging.INFO``).
        message: Log message.
        **extra: Fields included in the JSON output of
            ``StructuredFormatter``.
    """
    logger.log(level, message, extra=extra)
