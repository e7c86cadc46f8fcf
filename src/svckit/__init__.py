r"""svckit - Building blocks for HTTP backend services.

This package bundles small utilities shared by HTTP services:

- ``svckit.httpclient``: a retry-aware HTTP client configured through
  chained calls. Transient status codes (408, 429, 500, 502, 503, 504)
  and transport failures are retried with exponential backoff inside a
  single time budget.
- ``svckit.errx``: application errors enriched with a code, the caller
  location and details, chained to their cause.
- ``svckit.tracing``: a thin OpenTelemetry shim to start, tag and finish
  spans.
- ``svckit.utils``: Retry-After parsing, JSON log formatting and
  correlation ids.

Example:
    ```pycon
    >>> from svckit import configure
    >>> body, status, err = (
    ...     configure(timeout=2, retry_count=5)
    ...     .set_url("https://httpbin.org/get")
    ...     .set_bearer_token("secret")
    ...     .send_get()
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ClientOptions",
    "HttpClient",
    "HttpClientError",
    "HttpResult",
    "RequestConstructionError",
    "ResponseReadError",
    "RetryPolicy",
    "TransportError",
    "__version__",
    "configure",
]

from importlib.metadata import PackageNotFoundError, version

from svckit.core.config import ClientOptions
from svckit.exceptions import (
    HttpClientError,
    RequestConstructionError,
    ResponseReadError,
    TransportError,
)
from svckit.httpclient import HttpClient, HttpResult, RetryPolicy, configure

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
