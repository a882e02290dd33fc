from typing import Any

from pydantic import BaseModel, ConfigDict

DEFAULT_CURRENCY = "NGN"
DEFAULT_COUNTRY = "NG"


class PaymentRequest(BaseModel):
    """Body of POST /api/bills/pay. Required fields are checked by the handler."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    biller_code: str | None = None
    item_code: str | None = None
    amount: int | float | str | None = None
    customer: str | int | float | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    tx_ref: str | None = None
    currency: str | None = None
    country: str | None = None
    callback_url: str | None = None
    metadata: dict[str, Any] | None = None

    def missing_required(self) -> bool:
        return not (self.biller_code and self.item_code and self.amount and self.tx_ref)


class FlutterwaveEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    event: str | None = None
    data: dict[str, Any] | None = None
    meta_data: dict[str, Any] | None = None


def _amount_str(amount: int | float | str) -> str:
    # 1500.0 -> "1500", same as JS Number#toString
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def build_payment_payload(req: PaymentRequest, default_callback_url: str = "") -> dict[str, Any]:
    """Build the upstream payment body, inserting only keys that have a value."""
    payload: dict[str, Any] = {
        "amount": _amount_str(req.amount),
        "tx_ref": req.tx_ref,
        "currency": req.currency or DEFAULT_CURRENCY,
        "country": req.country or DEFAULT_COUNTRY,
    }

    customer: dict[str, Any] = {"name": req.customer_name or req.customer or "Customer"}
    if req.customer_email:
        customer["email"] = req.customer_email
    payload["customer"] = customer

    if req.customer:
        payload["customer_number"] = req.customer

    callback_url = req.callback_url or default_callback_url
    if callback_url:
        payload["callback_url"] = callback_url

    if req.metadata is not None:
        payload["metadata"] = req.metadata

    return payload
