r"""Retry-aware HTTP client built through chained configuration calls."""

from __future__ import annotations

__all__ = ["HttpClient", "configure"]

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from svckit.core.config import (
    DEFAULT_HEADERS,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    ClientOptions,
)
from svckit.exceptions import (
    RequestConstructionError,
    ResponseReadError,
    TransportError,
)
from svckit.httpclient.policy import RetryPolicy
from svckit.httpclient.result import HttpResult
from svckit.tracing import finish_span, set_span_error, set_span_tag
from svckit.utils.structured_logging import CORRELATION_ID_HEADER, get_correlation_id

if TYPE_CHECKING:
    from typing import Self

    from svckit.tracing import Tracer

logger: logging.Logger = logging.getLogger(__name__)

# Status reported when no response could be obtained
FAILURE_STATUS_CODE = 500


class HttpClient:
    r"""Build and send one outbound HTTP request with retries.

    The client accumulates the target URL and the headers through chained
    calls, then ``send_get`` executes the request:

    - a request that cannot be built is reported immediately with status
      500 and a ``RequestConstructionError``;
    - transport failures (timeouts, connection errors) and responses whose
      status is in ``options.retryable_status`` are retried, up to
      ``options.retry_count`` times, with a backoff delay in between;
    - any response that is not retried is returned as is, whatever its
      status code;
    - when transport failures exhaust the retries, the result carries
      status 500 and a ``TransportError`` wrapping the last failure.

    ``options.timeout`` is a budget for the whole ``send_get`` call: each
    attempt gets the time that is left, and no retry starts if the
    backoff delay would not fit in it. The budget also covers reading
    the body: a response still arriving when it runs out is dropped and
    reported like a transport timeout.

    An instance is meant to be configured and sent by a single thread.
    Headers are not protected against concurrent mutation.

    Args:
        options: The client options. Defaults to ``ClientOptions()``.
        client: Optional ``httpx.Client`` used to send the request (to
            share a connection pool, or to plug in a transport). It is not
            closed by this object. When omitted, a client is created for
            each send and closed right after it.

    Example:
        ```pycon
        >>> from svckit.httpclient import configure
        >>> body, status, err = (
        ...     configure(timeout=2, retry_count=5)
        ...     .set_url("https://httpbin.org/get")
        ...     .set_header("X-Request-Source", "billing")
        ...     .set_bearer_token("secret")
        ...     .send_get()
        ... )  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        options: ClientOptions | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._options: ClientOptions = options or ClientOptions()
        self._policy = RetryPolicy.from_options(self._options)
        self._client = client
        self._url = ""
        self._headers = httpx.Headers(dict(DEFAULT_HEADERS))
        self._tracer: Tracer | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(url={self._url!r}, options={self._options!r})"

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def url(self) -> str:
        return self._url

    @property
    def headers(self) -> httpx.Headers:
        """A copy of the configured headers (case-insensitive)."""
        return self._headers.copy()

    def set_url(self, url: str) -> Self:
        self._url = url
        return self

    def set_header(self, key: str, value: str) -> Self:
        """Set a header, replacing any previous value for ``key``."""
        self._headers[key] = value
        return self

    def set_bearer_token(self, token: str) -> Self:
        return self.set_header("Authorization", f"Bearer {token}")

    def set_tracer(self, tracer: Tracer | None) -> Self:
        """Trace each send in a ``http.<method>`` span of ``tracer``."""
        self._tracer = tracer
        return self

    def send_get(self) -> HttpResult:
        r"""Send a GET request to the configured URL.

        Returns:
            The result: ``(body, status_code, None)`` when a response was
            obtained, ``(None, 500, error)`` when the request could not be
            built or no response was received, and
            ``(None, status_code, ResponseReadError)`` when the body could
            not be read.
        """
        return self._send("GET")

    def send_post(self) -> HttpResult:
        r"""Placeholder for POST support.

        Unlike ``send_get``, nothing is sent and no ``HttpResult`` is
        returned: the call always fails so that it cannot be mistaken
        for a request that went out.

        Raises:
            NotImplementedError: Always.
        """
        # TODO: accept a request body and send POST through the same retry loop.
        msg = "HttpClient.send_post is not implemented, only GET is supported"
        raise NotImplementedError(msg)

    def _send(self, method: str) -> HttpResult:
        if self._tracer is None:
            return self._send_with_client(method)

        span, _ = self._tracer.start_span(
            f"http.{method.lower()}",
            attributes={"http.method": method, "http.url": self._url},
        )
        try:
            result = self._send_with_client(method)
            set_span_tag(span, "http.status_code", result.status_code)
            set_span_tag(span, "http.attempts", result.attempts)
            set_span_error(span, result.error)
            return result
        except BaseException as exc:
            set_span_error(span, exc)
            raise
        finally:
            finish_span(span)

    def _send_with_client(self, method: str) -> HttpResult:
        if self._client is not None:
            return self._execute(self._client, method)
        with httpx.Client() as client:
            return self._execute(client, method)

    def _execute(self, client: httpx.Client, method: str) -> HttpResult:
        url = self._url
        retry_count = self._options.retry_count
        deadline = time.monotonic() + self._options.timeout
        last_error: Exception | None = None

        for attempt in range(retry_count + 1):
            try:
                request = self._build_request(client, method, timeout=deadline - time.monotonic())
            except RequestConstructionError as err:
                logger.debug(f"Could not build {method} request to {url!r}: {err}")
                return HttpResult(None, FAILURE_STATUS_CODE, err, attempts=attempt)

            logger.debug(f"Sending {method} request to {url} (attempt {attempt + 1}/{retry_count + 1})")
            try:
                response = client.send(request, stream=True)
            except httpx.TransportError as exc:
                if not self._policy.is_retryable_exception(exc):
                    error = RequestConstructionError(
                        method=method,
                        url=url,
                        message=f"{method} request to {url} is invalid: {exc}",
                        status_code=FAILURE_STATUS_CODE,
                        cause=exc,
                    )
                    return HttpResult(None, FAILURE_STATUS_CODE, error, attempts=attempt + 1)
                logger.debug(
                    f"{method} request to {url} encountered {type(exc).__name__} on attempt "
                    f"{attempt + 1}/{retry_count + 1}: {exc}"
                )
                last_error = exc
                if self._wait_before_retry(attempt, deadline):
                    continue
                return self._transport_failure(method, url, last_error, attempts=attempt + 1)

            if time.monotonic() >= deadline:
                response.close()
                timeout_error = httpx.ReadTimeout(
                    f"{method} request to {url} exceeded the time budget", request=request
                )
                return self._transport_failure(method, url, timeout_error, attempts=attempt + 1)

            try:
                body = self._read_body(response, deadline)
            except httpx.TimeoutException as exc:
                logger.debug(f"Timed out reading {method} response body from {url}: {exc}")
                return self._transport_failure(method, url, exc, attempts=attempt + 1)
            except (httpx.HTTPError, httpx.StreamError) as exc:
                logger.debug(f"Failed to read {method} response body from {url}: {exc}")
                error = ResponseReadError(
                    method=method,
                    url=url,
                    message=f"Failed to read the body of the {method} response from {url}: {exc}",
                    status_code=response.status_code,
                    cause=exc,
                )
                return HttpResult(None, response.status_code, error, attempts=attempt + 1)

            if self._policy.is_retryable_status(response.status_code):
                logger.debug(
                    f"{method} request to {url} returned retryable status {response.status_code} "
                    f"(attempt {attempt + 1}/{retry_count + 1})"
                )
                if self._wait_before_retry(attempt, deadline, response):
                    continue
            elif attempt > 0:
                logger.debug(f"{method} request to {url} succeeded on attempt {attempt + 1}")
            return HttpResult(body, response.status_code, attempts=attempt + 1)

        # Unreachable: the last attempt always returns.
        return self._transport_failure(method, url, last_error, attempts=retry_count + 1)  # pragma: no cover

    def _build_request(self, client: httpx.Client, method: str, timeout: float) -> httpx.Request:
        headers = self._headers.copy()
        correlation_id = get_correlation_id()
        if correlation_id is not None and CORRELATION_ID_HEADER not in headers:
            headers[CORRELATION_ID_HEADER] = correlation_id

        try:
            request = client.build_request(
                method, self._url, headers=headers, timeout=httpx.Timeout(max(timeout, 0.0))
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError, TypeError) as exc:
            raise RequestConstructionError(
                method=method,
                url=self._url,
                message=f"Invalid {method} request to {self._url!r}: {exc}",
                status_code=FAILURE_STATUS_CODE,
                cause=exc,
            ) from exc

        if request.url.scheme not in {"http", "https"} or not request.url.host:
            raise RequestConstructionError(
                method=method,
                url=self._url,
                message=f"Invalid {method} request URL {self._url!r}: an absolute http(s) URL is required",
                status_code=FAILURE_STATUS_CODE,
            )
        return request

    @staticmethod
    def _read_body(response: httpx.Response, deadline: float) -> bytes:
        """Read and close the response, failing with ``httpx.ReadTimeout``
        once ``deadline`` has passed."""
        try:
            chunks = []
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                if time.monotonic() >= deadline:
                    msg = f"Reading the response body from {response.request.url} exceeded the time budget"
                    raise httpx.ReadTimeout(msg, request=response.request)
            return b"".join(chunks)
        finally:
            response.close()

    def _wait_before_retry(
        self, attempt: int, deadline: float, response: httpx.Response | None = None
    ) -> bool:
        """Sleep before the next attempt if one is allowed.

        Returns:
            ``True`` if the caller should send another attempt.
        """
        if attempt >= self._options.retry_count:
            return False
        delay = self._policy.calculate_delay(attempt, response)
        if time.monotonic() + delay >= deadline:
            logger.debug(
                f"Not retrying request to {self._url}: a {delay:.2f}s delay exceeds the "
                f"{self._options.timeout:.2f}s time budget"
            )
            return False
        logger.debug(f"Waiting {delay:.2f}s before retry {attempt + 1}/{self._options.retry_count}")
        time.sleep(delay)
        return True

    @staticmethod
    def _transport_failure(
        method: str, url: str, exc: Exception | None, attempts: int
    ) -> HttpResult:
        error = TransportError(
            method=method,
            url=url,
            message=f"{method} request to {url} failed after {attempts} attempts: {exc}",
            status_code=FAILURE_STATUS_CODE,
            cause=exc,
        )
        return HttpResult(None, FAILURE_STATUS_CODE, error, attempts=attempts)


def configure(
    timeout: float = DEFAULT_TIMEOUT,
    retry_count: int = DEFAULT_RETRY_COUNT,
    *,
    client: httpx.Client | None = None,
    **options: Any,
) -> HttpClient:
    r"""Create a client with the default ``Content-Type:
    application/json`` header.

    Args:
        timeout: Time budget in seconds for one send, retries included.
        retry_count: Number of retries after the initial attempt.
        client: Optional ``httpx.Client`` to send the request with.
        **options: Other ``ClientOptions`` fields (``backoff_strategy``,
            ``jitter_factor``, ``max_wait_time``, ``retryable_status``).

    Returns:
        A new ``HttpClient``.

    Raises:
        ValueError: If the options are invalid.

    Example:
        ```pycon
        >>> from svckit.httpclient import configure
        >>> client = configure(timeout=2, retry_count=5).set_url("https://api.example.com")
        >>> client.headers["Content-Type"]
        'application/json'
        >>> client.options.retry_count
        5

        ```
    """
    return HttpClient(
        ClientOptions(timeout=timeout, retry_count=retry_count, **options), client=client
    )
