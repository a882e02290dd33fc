"""Error kinds raised by handlers and their mapping onto HTTP responses."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BillsError(Exception):
    status_code = 500

    def __init__(self, detail: Any, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(BillsError):
    """Missing or empty required input. Never forwarded upstream."""

    status_code = 400


class UpstreamError(BillsError):
    """Upstream answered non-2xx, or the request never got a response."""

    def __init__(self, detail: Any, status_code: int | None = None):
        super().__init__(detail, status_code or 500)


class WebhookRejected(BillsError):
    status_code = 401


def error_response(exc: BillsError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(BillsError)
    async def _bills_error(request: Request, exc: BillsError):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        return error_response(ValidationFailed(_validation_message(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            url = request.url.path
            if request.url.query:
                url = f"{url}?{request.url.query}"
            return error_response(BillsError(f"Not found - {url}", 404))
        return error_response(BillsError(exc.detail, exc.status_code))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(BillsError("Internal server error"))
