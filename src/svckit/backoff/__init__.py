r"""Backoff strategies used to space out retry attempts."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ConstantBackoff", "ExponentialBackoff"]

from svckit.backoff.base import BaseBackoffStrategy
from svckit.backoff.constant import ConstantBackoff
from svckit.backoff.exponential import ExponentialBackoff
