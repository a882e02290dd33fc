import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api.bills import router as bills_router
from api.webhook import router as webhook_router
from core.config import Settings, get_settings
from core.errors import register_error_handlers
from services.flutterwave import FlutterwaveClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.FLW_SECRET_KEY:
            logger.warning("FLW_SECRET_KEY is not set; upstream calls will be rejected")
        if not settings.FLW_SECRET_HASH:
            logger.warning("FLW_SECRET_HASH is not set; every webhook will be rejected")
        app.state.flutterwave = FlutterwaveClient(settings, transport=transport)
        logger.info("Flutterwave client ready (%s)", settings.FLW_BASE_URL)
        yield
        await app.state.flutterwave.aclose()
        logger.info("Flutterwave client closed")

    app = FastAPI(title="Bills Relay API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(bills_router)
    app.include_router(webhook_router)

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "hello world"

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=_settings.PORT,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
