r"""Configuration dataclass and defaults for the HTTP client.

This module provides the configuration constants and the dataclass
holding the options an ``HttpClient`` is built from.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_FACTOR",
    "DEFAULT_HEADERS",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_TIMEOUT",
    "RETRYABLE_STATUS_CODES",
    "ClientOptions",
]

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from svckit.core.validation import validate_retry_params, validate_timeout

if TYPE_CHECKING:
    from svckit.backoff import BaseBackoffStrategy


# Default time budget in seconds for a whole send, retries included
DEFAULT_TIMEOUT = 10.0

# Default number of retries
# Total attempts = retry_count + 1 (initial attempt)
DEFAULT_RETRY_COUNT = 3

# Default base delay for exponential backoff
# Wait time = backoff_factor * (2 ** attempt)
DEFAULT_BACKOFF_FACTOR = 0.3

# HTTP status codes considered transient
# 408: Request Timeout
# 429: Too Many Requests
# 500: Internal Server Error
# 502: Bad Gateway
# 503: Service Unavailable
# 504: Gateway Timeout
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})

# Headers every new client starts with
DEFAULT_HEADERS = MappingProxyType({"Content-Type": "application/json"})


@dataclass(frozen=True)
class ClientOptions:
    """Options an ``HttpClient`` is built from.

    Args:
        timeout: Time budget in seconds for one ``send_get`` call, all
            attempts and backoff delays included. Must be > 0.
        retry_count: Number of retries after the initial attempt.
            Must be >= 0.
        retryable_status: Status codes that trigger a retry.
        backoff_strategy: Optional backoff strategy. Defaults to
            ``ExponentialBackoff(base_delay=DEFAULT_BACKOFF_FACTOR)``.
        jitter_factor: Factor for adding random jitter to backoff delays.
            Must be >= 0.
        max_wait_time: Optional cap in seconds on a single backoff delay.
            Must be > 0 if provided.

    Example:
        ```pycon
        >>> from svckit.core.config import ClientOptions
        >>> options = ClientOptions(retry_count=5, timeout=2)
        >>> options.retry_count
        5
        >>> options.merge(retry_count=0).retry_count
        0
        >>> options.retry_count
        5

        ```
    """

    timeout: float = DEFAULT_TIMEOUT
    retry_count: int = DEFAULT_RETRY_COUNT
    retryable_status: frozenset[int] = field(default_factory=lambda: RETRYABLE_STATUS_CODES)
    backoff_strategy: BaseBackoffStrategy | None = None
    jitter_factor: float = 0.0
    max_wait_time: float | None = None

    def __post_init__(self) -> None:
        """Validate the options.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_timeout(self.timeout)
        validate_retry_params(
            retry_count=self.retry_count,
            jitter_factor=self.jitter_factor,
            max_wait_time=self.max_wait_time,
        )
        if not isinstance(self.retryable_status, frozenset):
            object.__setattr__(self, "retryable_status", frozenset(self.retryable_status))

    def merge(self, **overrides: Any) -> ClientOptions:
        """Create new options with the given parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientOptions instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the options to a dictionary.

        Returns:
            Dictionary with the option values.
        """
        return {
            "timeout": self.timeout,
            "retry_count": self.retry_count,
            "retryable_status": self.retryable_status,
            "backoff_strategy": self.backoff_strategy,
            "jitter_factor": self.jitter_factor,
            "max_wait_time": self.max_wait_time,
        }
