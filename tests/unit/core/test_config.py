r"""Unit tests for ClientOptions and the configuration defaults."""

from __future__ import annotations

import pytest
from coola.equality import objects_are_equal

from svckit.backoff import ConstantBackoff
from svckit.core import (
    DEFAULT_HEADERS,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    RETRYABLE_STATUS_CODES,
    ClientOptions,
)

###################################
#     Tests for ClientOptions     #
###################################


def test_retryable_status_codes() -> None:
    assert RETRYABLE_STATUS_CODES == frozenset({408, 429, 500, 502, 503, 504})


def test_default_headers_are_read_only() -> None:
    assert dict(DEFAULT_HEADERS) == {"Content-Type": "application/json"}
    with pytest.raises(TypeError):
        DEFAULT_HEADERS["X-Other"] = "1"  # type: ignore[index]


def test_client_options_defaults() -> None:
    options = ClientOptions()
    assert options.timeout == DEFAULT_TIMEOUT
    assert options.retry_count == DEFAULT_RETRY_COUNT
    assert options.retryable_status == RETRYABLE_STATUS_CODES
    assert options.backoff_strategy is None
    assert options.jitter_factor == 0.0
    assert options.max_wait_time is None


@pytest.mark.parametrize("retry_count", [0, 2, 5])
def test_client_options_retry_count(retry_count: int) -> None:
    assert ClientOptions(retry_count=retry_count).retry_count == retry_count


def test_client_options_retryable_status_is_frozen() -> None:
    options = ClientOptions(retryable_status={503, 429})
    assert options.retryable_status == frozenset({429, 503})
    assert isinstance(options.retryable_status, frozenset)


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"timeout": 0}, r"timeout must be > 0"),
        ({"timeout": -1.5}, r"timeout must be > 0"),
        ({"retry_count": -1}, r"retry_count must be >= 0"),
        ({"jitter_factor": -0.1}, r"jitter_factor must be >= 0"),
        ({"max_wait_time": 0}, r"max_wait_time must be > 0"),
    ],
)
def test_client_options_invalid(kwargs: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        ClientOptions(**kwargs)


def test_client_options_is_frozen() -> None:
    options = ClientOptions()
    with pytest.raises(AttributeError):
        options.retry_count = 1  # type: ignore[misc]


def test_client_options_merge() -> None:
    options = ClientOptions(timeout=2, retry_count=5)
    merged = options.merge(retry_count=1, max_wait_time=None)
    assert merged == ClientOptions(timeout=2, retry_count=1)
    assert options.retry_count == 5


def test_client_options_merge_validates() -> None:
    with pytest.raises(ValueError, match=r"retry_count must be >= 0"):
        ClientOptions().merge(retry_count=-2)


def test_client_options_to_dict() -> None:
    backoff = ConstantBackoff(delay=0.5)
    options = ClientOptions(timeout=2, retry_count=5, backoff_strategy=backoff)
    assert objects_are_equal(
        options.to_dict(),
        {
            "timeout": 2,
            "retry_count": 5,
            "retryable_status": RETRYABLE_STATUS_CODES,
            "backoff_strategy": backoff,
            "jitter_factor": 0.0,
            "max_wait_time": None,
        },
    )
