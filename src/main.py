"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.cm_common.errors import AppError
from src.cm_common.response import error_response
from src.cm_feed.api.router import router as feed_router
from src.cm_gateway.dependencies import request_id_of
from src.cm_gateway.middleware.request_log import RequestLogMiddleware
from src.cm_market.api.router import router as market_router
from src.cm_order.api.router import router as order_router
from src.cm_risk.api.router import router as risk_router
from src.cm_valuation.api.router import creator_router as creator_valuation_router
from src.cm_valuation.api.router import router as valuation_router
from src.container import MarketContainer, build_container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: configure logging, start the feed. Shutdown: stop every timer."""
    container: MarketContainer = app.state.container
    level = container.settings.LOG_LEVEL.upper()
    for name in ("src", "cm.request"):
        logging.getLogger(name).setLevel(level)
    if container.settings.FEED_AUTOSTART:
        container.feed.connect()
    yield
    await container.feed.shutdown()
    logger.info("Shutdown complete")


def create_app(container: MarketContainer | None = None) -> FastAPI:
    container = container or build_container(settings)
    app = FastAPI(
        title=container.settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        resp = error_response(exc.code, exc.message, request_id_of(request))
        return JSONResponse(
            status_code=exc.http_status,
            content=resp.model_dump(),
        )

    app.include_router(market_router, prefix="/api/v1")
    app.include_router(valuation_router, prefix="/api/v1")
    app.include_router(creator_valuation_router, prefix="/api/v1")
    app.include_router(risk_router, prefix="/api/v1")
    app.include_router(order_router, prefix="/api/v1")
    app.include_router(feed_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str | bool]:
        return {"status": "ok", "version": "0.1.0", "feed_connected": container.feed.is_connected}

    return app


app = create_app()
