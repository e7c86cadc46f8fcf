from __future__ import annotations

import logging
import sys

import svckit
from svckit.errx import AppError, ErrorCode, get_code

logger: logging.Logger = logging.getLogger(__name__)

# Use httpbin.org for real HTTP testing
HTTPBIN_URL = "https://httpbin.org"


def check_send_get() -> None:
    logger.info("Checking send_get...")
    body, status, err = (
        svckit.configure(timeout=10, retry_count=5)
        .set_url(f"{HTTPBIN_URL}/get")
        .set_header("test", "val1")
        .set_header("test2", "val2")
        .send_get()
    )
    assert err is None, err
    assert status == 200
    assert b'"Test": "val1"' in body


def check_errx() -> None:
    logger.info("Checking errx...")
    err = AppError("outer").with_error(AppError("inner").with_code(ErrorCode.NOT_FOUND))
    assert get_code(err) == ErrorCode.NOT_FOUND


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_errx()
        check_send_get()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
