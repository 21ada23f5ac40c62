import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
import validator
from errors import ErrorCode, ValidationError


@pytest.mark.parametrize(
    "check, good, bad",
    [
        (validator.is_valid_merchant_id, "M1", "M 1"),
        (validator.is_valid_access_token, "TOK1", ""),
        (validator.is_valid_encryption_key, "KEY1", "KEY 1"),
        (validator.is_valid_order_number, "ORD-1", "O" * 31),
        (validator.is_valid_purpose, "Widget", "   "),
        (validator.is_valid_url, "https://s", "ftp://example.com"),
        (validator.is_valid_amount, "100.00", "100.001"),
        (validator.is_valid_email, "j@x.com", "j@x"),
        (validator.is_valid_phone, "+91 98765-43210", "55"),
        (validator.is_valid_postal_code, "411001", "4"),
    ],
)
def test_checks(check, good, bad):
    assert check(good) is True
    assert check(bad) is False


def test_non_strings_are_invalid():
    assert not validator.is_valid_merchant_id(None)
    assert not validator.is_valid_url(123)
    assert not validator.is_valid_amount(True)
    assert not validator.is_valid_amount("abc")
    assert not validator.is_valid_amount(0)


def test_url_with_whitespace_is_invalid():
    assert not validator.is_valid_url("https://example.com/a b")


def test_require_raises_coded_error():
    with pytest.raises(ValidationError) as exc:
        validator.require(validator.is_valid_url, "nope", ErrorCode.INVALID_SUCCESS_URL)
    assert exc.value.code == ErrorCode.INVALID_SUCCESS_URL
    assert exc.value.message == "Invalid success url"


def test_require_passes_valid_value():
    assert validator.require(validator.is_valid_url, "https://s", ErrorCode.INVALID_SUCCESS_URL) is None
