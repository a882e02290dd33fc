"""Bill-payment endpoints. Each call is relayed to Flutterwave as-is."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.deps import get_app_settings, get_flutterwave
from core.config import Settings
from core.errors import ValidationFailed
from models.payment import DEFAULT_COUNTRY, PaymentRequest, build_payment_payload
from services.flutterwave import FlutterwaveClient, UpstreamResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/bills", tags=["bills"])


def _relay(resp: UpstreamResponse) -> JSONResponse:
    return JSONResponse(status_code=resp.status_code, content=resp.body)


@router.get("/categories")
async def bill_categories(
    country: str | None = None,
    flw: FlutterwaveClient = Depends(get_flutterwave),
):
    return _relay(await flw.bill_categories(country or DEFAULT_COUNTRY))


@router.get("/billers")
async def get_billers(
    category: str | None = None,
    country: str | None = None,
    flw: FlutterwaveClient = Depends(get_flutterwave),
):
    """All billers, or only those under ``category`` (e.g. ELECTRICITY)."""
    return _relay(await flw.billers(country or DEFAULT_COUNTRY, category or None))


@router.get("/billers//items")
async def get_bill_items_without_code():
    raise ValidationFailed("biller_code required")


@router.get("/billers/{biller_code}/items")
async def get_bill_items(
    biller_code: str,
    flw: FlutterwaveClient = Depends(get_flutterwave),
):
    if not biller_code.strip():
        raise ValidationFailed("biller_code required")
    return _relay(await flw.biller_items(biller_code))


@router.post("/pay")
async def initiate_payment(
    body: PaymentRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    flw: FlutterwaveClient = Depends(get_flutterwave),
):
    if body is None or body.missing_required():
        raise ValidationFailed("biller_code, item_code, amount and tx_ref are required")

    payload = build_payment_payload(body, settings.WEBHOOK_URL)
    logger.info("Initiating bill payment tx_ref=%s biller=%s", body.tx_ref, body.biller_code)
    return _relay(await flw.pay_bill(body.biller_code, body.item_code, payload))


@router.get("/verify")
async def verify_bill(
    tx_ref: str | None = None,
    flw: FlutterwaveClient = Depends(get_flutterwave),
):
    if not tx_ref:
        raise ValidationFailed("tx_ref is required")
    return _relay(await flw.verify_by_reference(tx_ref))
