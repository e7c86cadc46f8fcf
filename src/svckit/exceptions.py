r"""Exceptions describing why an outbound HTTP request failed.

Only failures that prevent the client from obtaining a complete response
are modelled here. A response carrying a 4xx or 5xx status is a normal
result, not an error.
"""

from __future__ import annotations

__all__ = [
    "HttpClientError",
    "RequestConstructionError",
    "ResponseReadError",
    "TransportError",
]


class HttpClientError(Exception):
    """Base class of the HTTP client errors.

    Args:
        method: The HTTP method of the failed request.
        url: The target URL.
        message: A human readable description of the failure.
        status_code: The status code reported alongside the error.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from svckit.exceptions import HttpClientError
        >>> err = HttpClientError(method="GET", url="http://x", message="boom", status_code=500)
        >>> err.status_code
        500
        >>> str(err)
        'boom'

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code}, message={self.message!r})"
        )


class RequestConstructionError(HttpClientError):
    """The request could not be built (malformed URL, invalid header).

    Never retried.
    """


class TransportError(HttpClientError):
    """No response was received (connection refused, DNS failure,
    timeout).

    Retried until the attempts or the time budget run out; ``cause`` is
    the last transport exception.
    """


class ResponseReadError(HttpClientError):
    """A response was received but its body could not be read.

    ``status_code`` is the status of that response.
    """
