r"""Retry decisions and delays for the HTTP client.

This module provides the RetryPolicy class that decides whether a
response or a transport exception is worth another attempt, and how long
to wait before it.
"""

from __future__ import annotations

__all__ = ["RetryPolicy"]

import logging
import random
from typing import TYPE_CHECKING

import httpx

from svckit.backoff import ExponentialBackoff
from svckit.core.config import RETRYABLE_STATUS_CODES
from svckit.utils.retry_after import parse_retry_after

if TYPE_CHECKING:
    from collections.abc import Iterable

    from svckit.backoff import BaseBackoffStrategy
    from svckit.core.config import ClientOptions

logger: logging.Logger = logging.getLogger(__name__)

# Transport errors caused by the request itself; sending it again cannot help
_NON_TRANSIENT_ERRORS = (httpx.UnsupportedProtocol, httpx.LocalProtocolError)


class RetryPolicy:
    """Decide what to retry and how long to wait between attempts.

    Args:
        retryable_status: Status codes considered transient.
        backoff_strategy: Strategy computing the delay between attempts.
            Defaults to ``ExponentialBackoff()``.
        jitter_factor: Adds ``random.uniform(0, jitter_factor)`` times the
            delay on top of it. ``0`` disables jitter.
        max_wait_time: Optional cap in seconds on a single delay.

    Example:
        ```pycon
        >>> from svckit.httpclient import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.is_retryable_status(503)
        True
        >>> policy.is_retryable_status(404)
        False
        >>> policy.calculate_delay(attempt=1)
        0.6

        ```
    """

    def __init__(
        self,
        retryable_status: Iterable[int] = RETRYABLE_STATUS_CODES,
        backoff_strategy: BaseBackoffStrategy | None = None,
        jitter_factor: float = 0.0,
        max_wait_time: float | None = None,
    ) -> None:
        self.retryable_status = frozenset(retryable_status)
        self.backoff_strategy: BaseBackoffStrategy = (
            backoff_strategy if backoff_strategy is not None else ExponentialBackoff()
        )
        self.jitter_factor = jitter_factor
        self.max_wait_time = max_wait_time

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(retryable_status={sorted(self.retryable_status)}, "
            f"backoff_strategy={self.backoff_strategy!r}, jitter_factor={self.jitter_factor}, "
            f"max_wait_time={self.max_wait_time})"
        )

    @classmethod
    def from_options(cls, options: ClientOptions) -> RetryPolicy:
        """Build the policy described by client options."""
        return cls(
            retryable_status=options.retryable_status,
            backoff_strategy=options.backoff_strategy,
            jitter_factor=options.jitter_factor,
            max_wait_time=options.max_wait_time,
        )

    def is_retryable_status(self, status_code: int) -> bool:
        return status_code in self.retryable_status

    def is_retryable_exception(self, exc: BaseException) -> bool:
        """Return ``True`` for transient transport failures.

        Timeouts, connection and network errors are transient. Errors
        raised because the request itself is invalid (unsupported scheme,
        malformed header) are not.
        """
        if isinstance(exc, _NON_TRANSIENT_ERRORS):
            return False
        return isinstance(exc, httpx.TransportError)

    def calculate_delay(self, attempt: int, response: httpx.Response | None = None) -> float:
        """Calculate the delay before the attempt following ``attempt``.

        The delay is computed as follows:
        1. The ``Retry-After`` header of ``response``, when present and
           valid, otherwise ``backoff_strategy.calculate(attempt)``.
        2. Capped at ``max_wait_time`` if set.
        3. Increased by the jitter if ``jitter_factor > 0``.

        Args:
            attempt: The 0-indexed number of the attempt that just failed.
            response: The response of that attempt, if any.

        Returns:
            The delay in seconds.
        """
        retry_after: float | None = None
        if response is not None:
            retry_after = parse_retry_after(response.headers.get("Retry-After"))

        if retry_after is not None:
            delay = retry_after
            logger.debug(f"Using Retry-After header value: {delay:.2f}s")
        else:
            delay = self.backoff_strategy.calculate(attempt)

        if self.max_wait_time is not None and delay > self.max_wait_time:
            logger.debug(f"Capping delay from {delay:.2f}s to {self.max_wait_time:.2f}s")
            delay = self.max_wait_time

        if self.jitter_factor > 0:
            delay += random.uniform(0, self.jitter_factor) * delay  # noqa: S311
        return delay
