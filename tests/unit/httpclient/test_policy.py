r"""Unit tests for RetryPolicy."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from svckit.backoff import ConstantBackoff, ExponentialBackoff
from svckit.core.config import RETRYABLE_STATUS_CODES, ClientOptions
from svckit.httpclient import RetryPolicy

#################################
#     Tests for RetryPolicy     #
#################################


def test_retry_policy_defaults() -> None:
    policy = RetryPolicy()
    assert policy.retryable_status == RETRYABLE_STATUS_CODES
    assert isinstance(policy.backoff_strategy, ExponentialBackoff)
    assert policy.jitter_factor == 0.0
    assert policy.max_wait_time is None


def test_retry_policy_from_options() -> None:
    backoff = ConstantBackoff(delay=0.1)
    policy = RetryPolicy.from_options(
        ClientOptions(
            retryable_status=frozenset({503}),
            backoff_strategy=backoff,
            jitter_factor=0.2,
            max_wait_time=4.0,
        )
    )
    assert policy.retryable_status == frozenset({503})
    assert policy.backoff_strategy is backoff
    assert policy.jitter_factor == 0.2
    assert policy.max_wait_time == 4.0


@pytest.mark.parametrize("status_code", [408, 429, 500, 502, 503, 504])
def test_retry_policy_retryable_status(status_code: int) -> None:
    assert RetryPolicy().is_retryable_status(status_code)


@pytest.mark.parametrize("status_code", [200, 204, 301, 400, 401, 403, 404, 409, 501, 505])
def test_retry_policy_non_retryable_status(status_code: int) -> None:
    assert not RetryPolicy().is_retryable_status(status_code)


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("refused"),
        httpx.ConnectTimeout("timeout"),
        httpx.ReadTimeout("timeout"),
        httpx.PoolTimeout("timeout"),
        httpx.ReadError("reset"),
        httpx.RemoteProtocolError("disconnected"),
        httpx.ProxyError("proxy"),
    ],
)
def test_retry_policy_retryable_exception(exc: Exception) -> None:
    assert RetryPolicy().is_retryable_exception(exc)


@pytest.mark.parametrize(
    "exc",
    [
        httpx.UnsupportedProtocol("ftp"),
        httpx.LocalProtocolError("bad header"),
        httpx.InvalidURL("bad url"),
        ValueError("boom"),
    ],
)
def test_retry_policy_non_retryable_exception(exc: Exception) -> None:
    assert not RetryPolicy().is_retryable_exception(exc)


@pytest.mark.parametrize(("attempt", "delay"), [(0, 0.3), (1, 0.6), (2, 1.2), (3, 2.4)])
def test_retry_policy_calculate_delay_exponential(attempt: int, delay: float) -> None:
    assert RetryPolicy().calculate_delay(attempt) == pytest.approx(delay)


def test_retry_policy_calculate_delay_custom_backoff() -> None:
    policy = RetryPolicy(backoff_strategy=ConstantBackoff(delay=0.7))
    assert policy.calculate_delay(5) == 0.7


def test_retry_policy_calculate_delay_retry_after() -> None:
    response = httpx.Response(429, headers={"Retry-After": "7"})
    assert RetryPolicy().calculate_delay(0, response) == 7.0


def test_retry_policy_calculate_delay_invalid_retry_after() -> None:
    response = httpx.Response(503, headers={"Retry-After": "later"})
    assert RetryPolicy().calculate_delay(1, response) == pytest.approx(0.6)


def test_retry_policy_calculate_delay_max_wait_time() -> None:
    policy = RetryPolicy(max_wait_time=1.0)
    assert policy.calculate_delay(10) == 1.0


def test_retry_policy_calculate_delay_jitter() -> None:
    policy = RetryPolicy(backoff_strategy=ConstantBackoff(delay=2.0), jitter_factor=0.5)
    with patch("svckit.httpclient.policy.random.uniform", return_value=0.25) as mock_uniform:
        assert policy.calculate_delay(0) == 2.5
    mock_uniform.assert_called_once_with(0, 0.5)
