r"""Retry-aware HTTP client.

Example:
    ```pycon
    >>> from svckit.httpclient import configure
    >>> result = (
    ...     configure(timeout=2, retry_count=5)
    ...     .set_url("https://httpbin.org/get")
    ...     .set_header("test", "val1")
    ...     .send_get()
    ... )  # doctest: +SKIP
    >>> result.status_code  # doctest: +SKIP
    200

    ```
"""

from __future__ import annotations

__all__ = ["FAILURE_STATUS_CODE", "HttpClient", "HttpResult", "RetryPolicy", "configure"]

from svckit.httpclient.client import FAILURE_STATUS_CODE, HttpClient, configure
from svckit.httpclient.policy import RetryPolicy
from svckit.httpclient.result import HttpResult
