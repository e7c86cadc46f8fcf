r"""Exponential backoff strategy, the client's default."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from svckit.backoff.base import BaseBackoffStrategy
from svckit.core.config import DEFAULT_BACKOFF_FACTOR


class ExponentialBackoff(BaseBackoffStrategy):
    """Double the delay after every failed attempt.

    The delay is ``base_delay * (2 ** attempt)``, optionally capped at
    ``max_delay``.

    Args:
        base_delay: The delay in seconds before the first retry.
        max_delay: Optional cap in seconds.

    Example:
        ```pycon
        >>> from svckit.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.3)
        >>> backoff.calculate(0)
        0.3
        >>> backoff.calculate(2)
        1.2
        >>> ExponentialBackoff(base_delay=1.0, max_delay=5.0).calculate(10)
        5.0

        ```
    """

    def __init__(
        self, base_delay: float = DEFAULT_BACKOFF_FACTOR, max_delay: float | None = None
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        delay = self.base_delay * (2**attempt)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
