"""Format checks for checkout fields.

Every ``is_valid_*`` helper returns ``True`` when the value is acceptable.
Only the credential, order number, purpose and URL checks are enforced by
:class:`payment.Payment`; the others are provided for callers that want
stricter input handling of customer and address fields.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable
from urllib.parse import urlparse

from errors import ErrorCode, ValidationError

_MERCHANT_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
_ACCESS_TOKEN_RE = re.compile(r"^[A-Za-z0-9._-]{1,128}$")
_ENCRYPTION_KEY_RE = re.compile(r"^[A-Za-z0-9+/=._-]{1,128}$")
_ORDER_NUMBER_RE = re.compile(r"^[A-Za-z0-9_-]{1,30}$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\+?[0-9]{3,15}$")
_POSTAL_CODE_RE = re.compile(r"^[A-Za-z0-9 -]{3,10}$")

PURPOSE_MAX_LENGTH = 255


def _matches(pattern: re.Pattern, value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def is_valid_merchant_id(value: Any) -> bool:
    return _matches(_MERCHANT_ID_RE, value)


def is_valid_access_token(value: Any) -> bool:
    return _matches(_ACCESS_TOKEN_RE, value)


def is_valid_encryption_key(value: Any) -> bool:
    return _matches(_ENCRYPTION_KEY_RE, value)


def is_valid_order_number(value: Any) -> bool:
    return _matches(_ORDER_NUMBER_RE, value)


def is_valid_purpose(value: Any) -> bool:
    return isinstance(value, str) and 0 < len(value.strip()) <= PURPOSE_MAX_LENGTH


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str) or any(ch.isspace() for ch in value):
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_valid_amount(value: Any) -> bool:
    """Positive amount with at most two decimal places."""
    if isinstance(value, bool):
        return False
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return False
    return amount.is_finite() and amount > 0 and amount.as_tuple().exponent >= -2


def is_valid_email(value: Any) -> bool:
    return _matches(_EMAIL_RE, value)


def is_valid_phone(value: Any) -> bool:
    if isinstance(value, str):
        value = value.replace(" ", "").replace("-", "")
    return _matches(_PHONE_RE, value)


def is_valid_postal_code(value: Any) -> bool:
    return _matches(_POSTAL_CODE_RE, value)


def require(check: Callable[[Any], bool], value: Any, code: ErrorCode) -> None:
    """Raise the coded :class:`ValidationError` if ``check(value)`` fails."""
    if not check(value):
        raise ValidationError.from_code(code)


__all__ = [
    "is_valid_merchant_id",
    "is_valid_access_token",
    "is_valid_encryption_key",
    "is_valid_order_number",
    "is_valid_purpose",
    "is_valid_url",
    "is_valid_amount",
    "is_valid_email",
    "is_valid_phone",
    "is_valid_postal_code",
    "require",
]
