r"""Parameter validation utilities for the HTTP client options.

This module provides validation functions used to reject invalid retry
and timeout settings before a client is built.
"""

from __future__ import annotations

__all__ = ["validate_retry_params", "validate_timeout"]


def validate_timeout(timeout: float) -> None:
    """Validate the timeout budget.

    Args:
        timeout: Maximum number of seconds a ``send_get`` call may take,
            retries included. Must be > 0.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from svckit.core.validation import validate_timeout
        >>> validate_timeout(2)
        >>> validate_timeout(0.5)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(
    retry_count: int,
    jitter_factor: float = 0.0,
    max_wait_time: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        retry_count: Number of retries after the initial attempt.
            Must be >= 0. A value of 0 means a single attempt.
        jitter_factor: Factor for adding random jitter to backoff delays.
            Must be >= 0.
        max_wait_time: Maximum backoff delay cap in seconds.
            Must be > 0 if provided.

    Raises:
        ValueError: If retry_count or jitter_factor are negative,
            or if max_wait_time is non-positive.

    Example:
        ```pycon
        >>> from svckit.core.validation import validate_retry_params
        >>> validate_retry_params(retry_count=5)
        >>> validate_retry_params(retry_count=0, jitter_factor=0.1)
        >>> validate_retry_params(retry_count=-1)  # doctest: +SKIP

        ```
    """
    if retry_count < 0:
        msg = f"retry_count must be >= 0, got {retry_count}"
        raise ValueError(msg)
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)
    if max_wait_time is not None and max_wait_time <= 0:
        msg = f"max_wait_time must be > 0, got {max_wait_time}"
        raise ValueError(msg)
