"""Flutterwave webhook receiver: signature check, log, acknowledge."""

import hmac
import logging

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from api.deps import get_app_settings
from core.config import Settings
from core.errors import WebhookRejected
from models.payment import FlutterwaveEvent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/webhook", tags=["webhook"])


def _verify_signature(signature: str | None, secret_hash: str) -> bool:
    """Flutterwave sends the configured secret hash verbatim in the header."""
    if not signature or not secret_hash:
        return False
    return hmac.compare_digest(signature.encode("utf-8"), secret_hash.encode("utf-8"))


def _handle_event(event: FlutterwaveEvent) -> None:
    # No per-event business action; acknowledged regardless of type.
    data = event.data or {}
    logger.info(
        "Flutterwave event %s: tx_ref=%s status=%s",
        event.event,
        data.get("tx_ref"),
        data.get("status"),
    )


@router.post("", status_code=status.HTTP_200_OK)
async def flutterwave_webhook(
    request: Request,
    flutterwave_signature: str | None = Header(default=None),
    settings: Settings = Depends(get_app_settings),
):
    if not _verify_signature(flutterwave_signature, settings.FLW_SECRET_HASH):
        logger.warning("Flutterwave webhook: invalid signature — rejected")
        raise WebhookRejected("Invalid signature")

    try:
        payload = await request.body()
        logger.info("Flutterwave webhook body: %s", payload.decode("utf-8", errors="replace"))
        event = FlutterwaveEvent.model_validate_json(payload)
        _handle_event(event)
    except Exception as exc:
        logger.error("Flutterwave webhook processing error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Webhook handler failed"},
        )

    return {"received": True}
