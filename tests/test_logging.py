"""Tests for log helpers"""
import pytest
from storefront.logging import (
    ANONYMOUS_LABEL,
    get_logger,
    sanitize_id_for_logging,
    sanitize_string_for_logging,
)


@pytest.mark.parametrize("user_id", [None, ""])
def test_missing_id_is_anonymous(user_id):
    assert sanitize_id_for_logging(user_id) == ANONYMOUS_LABEL


def test_id_is_escaped_and_truncated():
    assert sanitize_id_for_logging("0123456789abcdef") == "01234567"
    assert sanitize_id_for_logging("ab\ncd") == "ab\\ncd"


def test_string_is_truncated():
    assert sanitize_string_for_logging(None) == "N/A"
    assert sanitize_string_for_logging("x" * 60, max_length=10) == "x" * 10 + "..."
    assert sanitize_string_for_logging("line\r\nforged") == "line\\r\\nforged"


def test_loggers_share_package_namespace():
    logger = get_logger("storefront.cart.service")

    assert logger is get_logger("storefront.cart.service")
    assert logger.name.startswith("storefront.")
