r"""Application errors carrying a code, a caller location and details.

An ``AppError`` is enriched through chained calls and wraps the error
that caused it. Metadata found on a wrapped ``AppError`` is inherited
without overwriting what the outer error already carries, so the code
and details set deep in the stack survive re-wrapping.

Example:
    ```pycon
    >>> from svckit.errx import AppError, ErrorCode, get_code
    >>> inner = AppError("user not found").with_code(ErrorCode.NOT_FOUND)
    >>> outer = AppError("cannot load profile").with_error(inner)
    >>> str(outer)
    'cannot load profile -> user not found'
    >>> get_code(outer)
    <ErrorCode.NOT_FOUND: 'NOT_FOUND'>

    ```
"""

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

import sys
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Self

DEFAULT_SEPARATOR = "->"

_separator = DEFAULT_SEPARATOR


class ErrorCode(str, Enum):
    """Category of an application error."""

    INTERNAL = "INTERNAL"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


def set_separator(separator: str) -> None:
    """Set the separator placed between an error and its cause in
    ``str(error)``."""
    global _separator  # noqa: PLW0603
    _separator = separator


class AppError(Exception):
    r"""Application error with chainable enrichment.

    Args:
        message: The error message.

    Attributes:
        message: The error message.
        code: The error category, ``None`` until set.
        cause: The wrapped error, if any.
        caller: ``[file:line function]`` of the place that called
            ``with_caller``, if any.
        details: Extra diagnostic data.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.code: ErrorCode | None = None
        self.cause: BaseException | None = None
        self.caller: str | None = None
        self.details: dict[str, Any] = {}

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} {_separator} {self.cause}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(message={self.message!r}, code={self.code}, "
            f"caller={self.caller!r}, details={self.details!r})"
        )

    def with_code(self, code: ErrorCode) -> Self:
        """Set the code unless one is already set."""
        if self.code is None:
            self.code = code
        return self

    def with_error(self, error: BaseException | None) -> Self:
        """Wrap ``error`` as the cause of this error.

        If ``error`` is or wraps an ``AppError``, its code and caller are
        copied when this error has none, and its details are merged for
        the keys this error does not have yet.

        Args:
            error: The cause. ``None`` leaves the error unchanged.
        """
        if error is None:
            return self

        inner = get_app_error(error)
        if inner is not None:
            if self.code is None and inner.code is not None:
                self.code = inner.code
            if self.caller is None and inner.caller is not None:
                self.caller = inner.caller
            for key, value in inner.details.items():
                self.details.setdefault(key, value)

        self.cause = error
        self.__cause__ = error
        return self

    def with_caller(self) -> Self:
        """Record where this method was called from, unless already set."""
        if self.caller is not None:
            return self
        frame = sys._getframe(1)  # noqa: SLF001
        self.caller = f"[{frame.f_code.co_filename}:{frame.f_lineno} {frame.f_code.co_name}]"
        return self

    def with_details(self, details: Mapping[str, Any]) -> Self:
        """Merge ``details`` into the error details, overwriting existing
        keys."""
        self.details.update(details)
        return self


def get_app_error(error: BaseException | None) -> AppError | None:
    """Return the first ``AppError`` in the cause chain of ``error``.

    The chain is followed through ``AppError.cause`` and ``__cause__``.

    Args:
        error: The error to inspect.

    Returns:
        The ``AppError``, or ``None`` if the chain does not contain one.
    """
    seen: set[int] = set()
    while error is not None and id(error) not in seen:
        if isinstance(error, AppError):
            return error
        seen.add(id(error))
        error = error.__cause__
    return None


def is_app_error(error: BaseException | None) -> bool:
    return get_app_error(error) is not None


def get_code(error: BaseException | None) -> ErrorCode:
    """Return the code of the ``AppError`` in the chain, defaulting to
    ``ErrorCode.INTERNAL``."""
    app_error = get_app_error(error)
    if app_error is None or app_error.code is None:
        return ErrorCode.INTERNAL
    return app_error.code


def get_caller(error: BaseException | None) -> str | None:
    app_error = get_app_error(error)
    return None if app_error is None else app_error.caller


def get_details(error: BaseException | None) -> dict[str, Any] | None:
    app_error = get_app_error(error)
    return None if app_error is None else app_error.details


def to_log_dict(error: BaseException | None) -> dict[str, Any] | None:
    """Return a JSON-serialisable view of the ``AppError`` in the chain.

    Empty fields are omitted except ``message`` and ``code``.

    Returns:
        A dictionary with ``message``, ``code``, ``caller`` and
        ``details``, or ``None`` if the chain holds no ``AppError``.

    Example:
        ```pycon
        >>> from svckit.errx import AppError, ErrorCode, to_log_dict
        >>> to_log_dict(AppError("boom").with_code(ErrorCode.CONFLICT))
        {'message': 'boom', 'code': 'CONFLICT'}

        ```
    """
    app_error = get_app_error(error)
    if app_error is None:
        return None
    log_dict: dict[str, Any] = {
        "message": str(app_error),
        "code": app_error.code.value if app_error.code is not None else None,
    }
    if app_error.caller:
        log_dict["caller"] = app_error.caller
    if app_error.details:
        log_dict["details"] = dict(app_error.details)
    return log_dict
