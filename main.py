import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

import config
from errors import ValidationError
from payment import Payment
from renderer import DEFAULT_TEMPLATE

# ---------------------------
# Basic setup
# ---------------------------
app = FastAPI()
logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(message)s")


# ---------------------------
# Request schema
# ---------------------------
class OrderIn(BaseModel):
    order_id: str
    purpose: str
    amount: str
    currency: Optional[str] = None
    success_url: Optional[str] = None
    failure_url: Optional[str] = None


class CustomerIn(BaseModel):
    name: str
    email: str
    phone: str


class AddressIn(BaseModel):
    country: str
    state: str
    city: str
    postal_code: str
    address_line: str


class CheckoutIn(BaseModel):
    order: OrderIn
    customer: CustomerIn
    shipping: AddressIn
    billing: Optional[AddressIn] = None
    custom_fields: Optional[dict[str, str]] = None


# ---------------------------
# Helpers
# ---------------------------
def build_payment(body: CheckoutIn) -> Payment:
    """Stage every part of ``body`` onto a new Payment."""
    payment = Payment(
        config.PAYKUN_MERCHANT_ID,
        config.PAYKUN_ACCESS_TOKEN,
        config.PAYKUN_ENCRYPTION_KEY,
        is_live=config.PAYKUN_IS_LIVE,
    )
    order = body.order
    payment.set_order(
        order.order_id,
        order.purpose,
        order.amount,
        order.success_url or config.PAYKUN_SUCCESS_URL,
        order.failure_url or config.PAYKUN_FAILURE_URL,
        order.currency or config.PAYKUN_CURRENCY,
    )
    c = body.customer
    payment.set_customer(c.name, c.email, c.phone)
    s = body.shipping
    payment.set_shipping_address(s.country, s.state, s.city, s.postal_code, s.address_line)
    b = body.billing or body.shipping
    payment.set_billing_address(b.country, b.state, b.city, b.postal_code, b.address_line)
    payment.set_custom_fields(body.custom_fields)
    return payment


# ---------------------------
# FastAPI Endpoints
# ---------------------------
@app.exception_handler(ValidationError)
async def on_validation_error(req: Request, exc: ValidationError):
    logging.warning("checkout rejected: %s (code %d)", exc.message, exc.code)
    return JSONResponse(status_code=400, content={"error": exc.message, "code": int(exc.code)})


@app.post("/checkout", response_class=HTMLResponse)
async def checkout(body: CheckoutIn):
    payment = build_payment(body)
    form = payment.submit()
    return HTMLResponse(payment.render(DEFAULT_TEMPLATE, form.as_dict()))


@app.get("/health")
async def health():
    return {"status": "ok"}


# ---------------------------
# Run FastAPI
# ---------------------------
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, log_level="warning")
