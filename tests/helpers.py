r"""Shared test helpers for the HTTP client tests."""

from __future__ import annotations

__all__ = ["TEST_URL", "FakeClock", "RecordingHandler", "create_client"]

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

TEST_URL = "https://api.example.com/data"


class FakeClock:
    """Stand-in for the ``time`` module: ``sleep`` advances
    ``monotonic``."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingHandler:
    """MockTransport handler replaying a sequence of outcomes.

    Each outcome is either a status code, an ``httpx.Response`` or an
    exception class/instance to raise. The last outcome repeats once the
    sequence is exhausted.
    """

    def __init__(self, outcomes: Sequence[int | httpx.Response | Exception], body: bytes = b"ok") -> None:
        self.outcomes = list(outcomes)
        self.body = body
        self.requests: list[httpx.Request] = []

    @property
    def attempts(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes[min(len(self.requests), len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(outcome, content=self.body)


def create_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    """Create an ``httpx.Client`` answering through ``handler``."""
    return httpx.Client(transport=httpx.MockTransport(handler))
