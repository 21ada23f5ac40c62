"""Utilities for the hosted checkout gateway.

This module turns an order's field mapping into the canonical string the
gateway expects, and wraps an encrypted payload into the fields of the
auto-submitting checkout form. The canonical string is built as follows:

1. Drop every field whose value is empty (``None``, ``False``, ``""``,
   ``"0"`` or any numeric zero such as ``0``, ``0.0`` or ``Decimal("0")``).
2. Sort the remaining fields alphabetically by their names.
3. Concatenate them as ``name::value;``.
4. Remove the final character (the trailing ``;``).

Whole-number floats are written without a fractional part (``100.0`` is
sent as ``100``). Values are not escaped; a value containing ``::`` or
``;`` is sent as is.
"""

from __future__ import annotations

import numbers
from dataclasses import asdict, dataclass
from typing import Any, Mapping

GATEWAY_URL_PROD = "https://checkout.paykun.com/payment"
GATEWAY_URL_DEV = "https://sandbox.paykun.com/payment"
PAGE_TITLE = "Processing Payment..."

FIELD_SEPARATOR = "::"
ENTRY_TERMINATOR = ";"


def is_empty_value(value: Any) -> bool:
    """Return True for values the gateway treats as unset."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, numbers.Number):
        return value == 0
    return False


def _format_value(value: Any) -> str:
    if value is True:
        return "1"
    # Whole floats are sent without a fractional part: 100.0 -> "100".
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def canonicalize(fields: Mapping[str, Any]) -> str:
    """Return the canonical payload string for ``fields``.

    Parameters
    ----------
    fields:
        Field name to value. Empty values are skipped and the rest are
        ordered by field name.
    """

    filtered = {k: v for k, v in fields.items() if not is_empty_value(v)}
    joined = "".join(
        f"{k}{FIELD_SEPARATOR}{_format_value(v)}{ENTRY_TERMINATOR}"
        for k, v in sorted(filtered.items())
    )
    # Only the terminator is removed, not the separator.
    return joined[:-1]


def gateway_url(is_live: bool) -> str:
    return GATEWAY_URL_PROD if is_live else GATEWAY_URL_DEV


@dataclass(frozen=True)
class FormPayload:
    encrypted_request: str
    merchant_id: str
    access_token: str
    gateway_url: str
    page_title: str = PAGE_TITLE

    def as_dict(self) -> dict[str, str]:
        """Template parameters for the auto-submit form."""
        return asdict(self)

    def form_fields(self) -> dict[str, str]:
        """The hidden inputs posted to :attr:`gateway_url`."""
        return {
            "encrypted_request": self.encrypted_request,
            "merchant_id": self.merchant_id,
            "access_token": self.access_token,
        }


def build_form_payload(
    encrypted_request: str, merchant_id: str, access_token: str, is_live: bool
) -> FormPayload:
    return FormPayload(
        encrypted_request=encrypted_request,
        merchant_id=merchant_id,
        access_token=access_token,
        gateway_url=gateway_url(is_live),
    )


__all__ = [
    "GATEWAY_URL_PROD",
    "GATEWAY_URL_DEV",
    "PAGE_TITLE",
    "FormPayload",
    "build_form_payload",
    "canonicalize",
    "gateway_url",
    "is_empty_value",
]
