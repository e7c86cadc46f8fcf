r"""Configuration defaults and validation shared by the HTTP client."""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_FACTOR",
    "DEFAULT_HEADERS",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_TIMEOUT",
    "RETRYABLE_STATUS_CODES",
    "ClientOptions",
    "validate_retry_params",
    "validate_timeout",
]

from svckit.core.config import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_HEADERS,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    RETRYABLE_STATUS_CODES,
    ClientOptions,
)
from svckit.core.validation import validate_retry_params, validate_timeout
