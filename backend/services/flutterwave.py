"""Flutterwave v3 bill-payment API, thin async relay client."""

import logging
from typing import Any, NamedTuple
from urllib.parse import quote

import httpx

from core.config import Settings
from core.errors import UpstreamError

logger = logging.getLogger(__name__)


class UpstreamResponse(NamedTuple):
    status_code: int
    body: Any


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


class FlutterwaveClient:
    """One shared AsyncClient per app; created in lifespan, closed on shutdown."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._client = httpx.AsyncClient(
            base_url=settings.FLW_BASE_URL,
            headers={"Authorization": f"Bearer {settings.FLW_SECRET_KEY}"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> UpstreamResponse:
        try:
            resp = await self._client.request(method, path, params=params, json=json)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = _body(exc.response)
            logger.error("%s error: %s", operation, detail)
            raise UpstreamError(detail, exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            logger.error("%s error: %s", operation, exc)
            raise UpstreamError(str(exc)) from exc
        return UpstreamResponse(resp.status_code, _body(resp))

    async def bill_categories(self, country: str) -> UpstreamResponse:
        return await self._request(
            "billCategories", "GET", "/top-bill-categories", params={"country": country}
        )

    async def billers(self, country: str, category: str | None = None) -> UpstreamResponse:
        """List billers; scoped to one category when given, else every agency."""
        path = f"/bills/{_segment(category)}/billers" if category else "/billers"
        return await self._request("getBillers", "GET", path, params={"country": country})

    async def biller_items(self, biller_code: str) -> UpstreamResponse:
        return await self._request(
            "getBillItems", "GET", f"/billers/{_segment(biller_code)}/items"
        )

    async def pay_bill(
        self, biller_code: str, item_code: str, payload: dict[str, Any]
    ) -> UpstreamResponse:
        path = f"/billers/{_segment(biller_code)}/items/{_segment(item_code)}/payment"
        return await self._request("initiatePayment", "POST", path, json=payload)

    async def verify_by_reference(self, tx_ref: str) -> UpstreamResponse:
        return await self._request(
            "verifyBill", "GET", "/transactions/verify_by_reference", params={"tx_ref": tx_ref}
        )
