"""Error codes raised while preparing a checkout request.

Callers should branch on :attr:`ValidationError.code`; the message is for
humans and may change.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    INVALID_MERCHANT_ID = 1
    INVALID_ACCESS_TOKEN = 2
    INVALID_ENCRYPTION_KEY = 3
    INVALID_ORDER_ID = 4
    INVALID_PURPOSE = 5
    # Reserved: amount checks are disabled in the order stage.
    INVALID_AMOUNT = 6
    INVALID_SUCCESS_URL = 7
    INVALID_FAILURE_URL = 8
    INVALID_DATA_PROVIDED = 9


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_MERCHANT_ID: "Invalid merchant id",
    ErrorCode.INVALID_ACCESS_TOKEN: "Invalid access token",
    ErrorCode.INVALID_ENCRYPTION_KEY: "Invalid encryption key",
    ErrorCode.INVALID_ORDER_ID: "Invalid order id",
    ErrorCode.INVALID_PURPOSE: "Invalid purpose",
    ErrorCode.INVALID_AMOUNT: "Invalid amount",
    ErrorCode.INVALID_SUCCESS_URL: "Invalid success url",
    ErrorCode.INVALID_FAILURE_URL: "Invalid failure url",
    ErrorCode.INVALID_DATA_PROVIDED: (
        "Incomplete data provided, set order, customer, shipping and billing details before submitting"
    ),
}


class ValidationError(Exception):
    """Input rejected before anything is sent to the gateway."""

    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.message = message
        self.code = code

    @classmethod
    def from_code(cls, code: ErrorCode) -> "ValidationError":
        return cls(ERROR_MESSAGES[code], code)

    def __repr__(self) -> str:
        return f"ValidationError(code={int(self.code)}, message={self.message!r})"


__all__ = ["ErrorCode", "ERROR_MESSAGES", "ValidationError"]
