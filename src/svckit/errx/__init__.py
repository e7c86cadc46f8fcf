r"""Error annotation helpers: codes, caller locations, details and
cause chaining."""

from __future__ import annotations

__all__ = [
    "AppError",
    "ErrorCode",
    "get_app_error",
    "get_caller",
    "get_code",
    "get_details",
    "is_app_error",
    "set_separator",
    "to_log_dict",
]

from svckit.errx.errors import (
    AppError,
    ErrorCode,
    get_app_error,
    get_caller,
    get_code,
    get_details,
    is_app_error,
    set_separator,
    to_log_dict,
)
