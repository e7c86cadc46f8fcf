r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Base class of the strategies computing the delay before a retry."""

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Return the delay in seconds to wait before the next attempt.

        Args:
            attempt: The 0-indexed number of the attempt that just failed.
                ``0`` is the initial request, so its delay precedes the
                first retry.
        """
