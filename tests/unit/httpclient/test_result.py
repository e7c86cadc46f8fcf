r"""Unit tests for HttpResult."""

from __future__ import annotations

import pytest

from svckit.exceptions import TransportError
from svckit.httpclient import HttpResult

##################################
#     Tests for HttpResult       #
##################################


def test_http_result_unpacks_as_triple() -> None:
    body, status, err = HttpResult(body=b"payload", status_code=404)
    assert body == b"payload"
    assert status == 404
    assert err is None


def test_http_result_success() -> None:
    result = HttpResult(body=b"ok", status_code=200, attempts=2)
    assert result.ok
    assert result.attempts == 2
    assert result.raise_for_error() is result


def test_http_result_failure() -> None:
    error = TransportError(method="GET", url="https://x", message="refused", status_code=500)
    result = HttpResult(body=None, status_code=500, error=error)
    assert not result.ok
    with pytest.raises(TransportError, match=r"refused"):
        result.raise_for_error()


def test_http_result_is_frozen() -> None:
    result = HttpResult(body=b"ok", status_code=200)
    with pytest.raises(AttributeError):
        result.status_code = 500  # type: ignore[misc]
