from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from svckit.utils import clear_correlation_id
from tests.helpers import FakeClock

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def fake_clock() -> Generator[FakeClock, None, None]:
    """Replace the clock and sleep of the HTTP client with a fake
    clock."""
    clock = FakeClock()
    with patch("svckit.httpclient.client.time", clock):
        yield clock


@pytest.fixture(autouse=True)
def _reset_correlation_id() -> Generator[None, None, None]:
    yield
    clear_correlation_id()
