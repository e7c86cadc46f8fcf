r"""Outcome of an HTTP request execution."""

from __future__ import annotations

__all__ = ["HttpResult"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

    from svckit.exceptions import HttpClientError


@dataclass(frozen=True)
class HttpResult:
    r"""Body, status code and error produced by ``HttpClient.send_get``.

    A result is either a success (``body`` set, ``error`` is ``None``) or
    a failure (``body`` is ``None``, ``error`` set). A success may carry
    any status code, 4xx and 5xx included: interpreting the status is up
    to the caller.

    The result unpacks as a ``(body, status_code, error)`` triple.

    Args:
        body: The full response body, or ``None`` on failure.
        status_code: The response status code, or ``500`` when no
            response could be obtained.
        error: The failure, or ``None`` on success.
        attempts: The number of requests sent.

    Example:
        ```pycon
        >>> from svckit.httpclient import HttpResult
        >>> result = HttpResult(body=b"ok", status_code=200)
        >>> body, status, err = result
        >>> body, status, err
        (b'ok', 200, None)
        >>> result.ok
        True

        ```
    """

    body: bytes | None
    status_code: int
    error: HttpClientError | None = None
    attempts: int = 1

    def __iter__(self) -> Iterator[Any]:
        return iter((self.body, self.status_code, self.error))

    @property
    def ok(self) -> bool:
        """``True`` if a response body was obtained."""
        return self.error is None

    def raise_for_error(self) -> HttpResult:
        """Raise the carried error, if any.

        Returns:
            The result itself when it is a success.

        Raises:
            HttpClientError: The carried error.
        """
        if self.error is not None:
            raise self.error
        return self
