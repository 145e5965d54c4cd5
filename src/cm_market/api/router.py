"""cm_market REST endpoints.

GET /instruments                               — catalogue
GET /instruments/{instrument_id}               — single instrument
GET /instruments/{instrument_id}/depth         — depth model + spread
GET /instruments/{instrument_id}/orderbook     — resting user orders
GET /instruments/{instrument_id}/trades        — rolling trade tape
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.dependencies import get_container, request_id_of
from src.container import MarketContainer

router = APIRouter(prefix="/instruments", tags=["instruments"])

Container = Annotated[MarketContainer, Depends(get_container)]


@router.get("")
async def list_instruments(request: Request, container: Container) -> ApiResponse:
    result = await container.market_service.list_instruments()
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}")
async def get_instrument(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.market_service.get_instrument(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/depth")
async def get_market_depth(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.market_service.get_market_depth(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/orderbook")
async def get_orderbook(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.market_service.get_orderbook(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/trades")
async def get_recent_trades(
    instrument_id: str,
    request: Request,
    container: Container,
    limit: int | None = Query(None, ge=1, le=1000),
) -> ApiResponse:
    result = await container.market_service.get_recent_trades(instrument_id, limit)
    return success_response(result.model_dump(), request_id_of(request))
