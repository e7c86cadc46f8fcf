r"""Helpers shared by the svckit packages."""

from __future__ import annotations

__all__ = [
    "CORRELATION_ID_HEADER",
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "parse_retry_after",
    "set_correlation_id",
]

from svckit.utils.retry_after import parse_retry_after
from svckit.utils.structured_logging import (
    CORRELATION_ID_HEADER,
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
