"""Staged builder for a hosted checkout request.

Typical use::

    payment = Payment(merchant_id, access_token, encryption_key, is_live=False)
    payment.set_order("ORD1", "Widget", "100.00", success_url, failure_url)
    payment.set_customer("Jane", "jane@example.com", "5550100")
    payment.set_shipping_address("IN", "MH", "Pune", "411001", "1 Main St")
    payment.set_billing_address("IN", "MH", "Pune", "411001", "1 Main St")
    form = payment.submit()

``submit()`` refuses to run until the order, customer, shipping and billing
stages have all been set. A builder is meant for a single request and is
not safe to share between threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Flag, auto
from typing import Any, Mapping, Optional

import crypto
from errors import ErrorCode, ValidationError
from payment_gateway import FormPayload, build_form_payload, canonicalize
from renderer import FormRenderer
from validator import (
    is_valid_access_token,
    is_valid_encryption_key,
    is_valid_merchant_id,
    is_valid_order_number,
    is_valid_purpose,
    is_valid_url,
    require,
)

log = logging.getLogger(__name__)

DEFAULT_CURRENCY = "INR"
CUSTOM_FIELD_NAMES = ("udf_1", "udf_2", "udf_3", "udf_4", "udf_5")


class Stage(Flag):
    NONE = 0
    CONSTRUCTOR = auto()
    ORDER = auto()
    CUSTOMER = auto()
    SHIPPING = auto()
    BILLING = auto()
    ALL = CONSTRUCTOR | ORDER | CUSTOMER | SHIPPING | BILLING


@dataclass(frozen=True)
class MerchantCredentials:
    merchant_id: str
    access_token: str
    encryption_key: str
    is_live: bool = True

    def __repr__(self) -> str:
        return f"MerchantCredentials(merchant_id={self.merchant_id!r}, is_live={self.is_live!r})"


@dataclass(frozen=True)
class OrderDetails:
    order_id: str
    purpose: str
    amount: Any
    success_url: str
    failure_url: str
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class Address:
    country: str
    state: str
    city: str
    postal_code: str
    address_line: str


class Payment:
    """Collects a checkout request and produces the gateway form payload."""

    def __init__(
        self,
        merchant_id: str,
        access_token: str,
        encryption_key: str,
        is_live: bool = True,
        custom_renderer: bool = False,
        renderer: Optional[FormRenderer] = None,
        logger: Optional[logging.Logger] = None,
    ):
        require(is_valid_merchant_id, merchant_id, ErrorCode.INVALID_MERCHANT_ID)
        require(is_valid_access_token, access_token, ErrorCode.INVALID_ACCESS_TOKEN)
        require(is_valid_encryption_key, encryption_key, ErrorCode.INVALID_ENCRYPTION_KEY)

        self.credentials = MerchantCredentials(merchant_id, access_token, encryption_key, bool(is_live))
        self.order: Optional[OrderDetails] = None
        self.customer: Optional[CustomerInfo] = None
        self.shipping: Optional[Address] = None
        self.billing: Optional[Address] = None
        self.custom_fields: dict[str, Any] = {}
        self.logger = logger or log

        self.is_custom_renderer = custom_renderer
        if renderer is None and not custom_renderer:
            renderer = FormRenderer()
        self.renderer = renderer

        self._stages = Stage.CONSTRUCTOR

    @property
    def completed_stages(self) -> Stage:
        return self._stages

    @property
    def is_complete(self) -> bool:
        return self._stages == Stage.ALL

    @property
    def is_live(self) -> bool:
        return self.credentials.is_live

    def set_order(
        self,
        order_id: str,
        purpose: str,
        amount: Any,
        success_url: str,
        failure_url: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> "Payment":
        require(is_valid_order_number, order_id, ErrorCode.INVALID_ORDER_ID)
        require(is_valid_purpose, purpose, ErrorCode.INVALID_PURPOSE)
        # amount is passed through unchecked.
        require(is_valid_url, success_url, ErrorCode.INVALID_SUCCESS_URL)
        require(is_valid_url, failure_url, ErrorCode.INVALID_FAILURE_URL)

        self.order = OrderDetails(order_id, purpose, amount, success_url, failure_url, currency)
        self._stages |= Stage.ORDER
        return self

    def set_customer(self, name: str, email: str, phone: str) -> "Payment":
        self.customer = CustomerInfo(name, email, phone)
        self._stages |= Stage.CUSTOMER
        return self

    def set_shipping_address(
        self, country: str, state: str, city: str, postal_code: str, address_line: str
    ) -> "Payment":
        self.shipping = Address(country, state, city, postal_code, address_line)
        self._stages |= Stage.SHIPPING
        return self

    def set_billing_address(
        self, country: str, state: str, city: str, postal_code: str, address_line: str
    ) -> "Payment":
        self.billing = Address(country, state, city, postal_code, address_line)
        self._stages |= Stage.BILLING
        return self

    def set_custom_fields(self, fields: Optional[Mapping[str, Any]] = None) -> "Payment":
        """Store ``udf_1`` .. ``udf_5`` from ``fields``; other keys are ignored."""
        if fields:
            for name in CUSTOM_FIELD_NAMES:
                if fields.get(name) is not None:
                    self.custom_fields[name] = fields[name]
        return self

    def _require_complete(self) -> None:
        if not self.is_complete:
            raise ValidationError.from_code(ErrorCode.INVALID_DATA_PROVIDED)

    def to_fields(self) -> dict[str, Any]:
        """The full field mapping sent to the gateway, before filtering."""
        self._require_complete()
        order, customer, shipping, billing = self.order, self.customer, self.shipping, self.billing
        fields = {
            "order_no": order.order_id,
            "product_name": order.purpose,
            "amount": order.amount,
            "success_url": order.success_url,
            "failure_url": order.failure_url,
            "customer_name": customer.name,
            "customer_email": customer.email,
            "customer_phone": customer.phone,
            "shipping_address": shipping.address_line,
            "shipping_city": shipping.city,
            "shipping_state": shipping.state,
            "shipping_country": shipping.country,
            "shipping_zip": shipping.postal_code,
            "billing_address": billing.address_line,
            "billing_city": billing.city,
            "billing_state": billing.state,
            "billing_country": billing.country,
            "billing_zip": billing.postal_code,
        }
        for name in CUSTOM_FIELD_NAMES:
            fields[name] = self.custom_fields.get(name) or ""
        fields["currency"] = order.currency
        return fields

    def canonical_payload(self) -> str:
        return canonicalize(self.to_fields())

    def submit(self) -> FormPayload:
        """Encrypt the request and return the fields for the checkout form.

        Raises :class:`ValidationError` with ``INVALID_DATA_PROVIDED`` if any
        stage is missing. The error does not say which one.
        """
        payload = self.canonical_payload()
        encrypted = crypto.encrypt(payload, self.credentials.encryption_key)
        self.logger.info(
            "checkout prepared for order %s (%s)",
            self.order.order_id,
            "live" if self.is_live else "sandbox",
        )
        return build_form_payload(
            encrypted,
            self.credentials.merchant_id,
            self.credentials.access_token,
            self.is_live,
        )

    def render(self, template_name: str, parameters: Optional[Mapping[str, Any]] = None) -> str:
        if self.renderer is None:
            raise RuntimeError("no renderer configured; render the FormPayload yourself")
        return self.renderer.render(template_name, parameters)


__all__ = [
    "Address",
    "CustomerInfo",
    "DEFAULT_CURRENCY",
    "MerchantCredentials",
    "OrderDetails",
    "Payment",
    "Stage",
]
