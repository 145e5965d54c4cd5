"""cm_valuation REST endpoints.

GET  /instruments/{instrument_id}/prediction         — price-movement prediction
GET  /instruments/{instrument_id}/sentiment          — social sentiment
GET  /instruments/{instrument_id}/dividends          — dividend estimate
GET  /instruments/{instrument_id}/vesting            — vesting & staking rules
GET  /instruments/{instrument_id}/liquidation        — liquidation rules
GET  /instruments/{instrument_id}/valuation-factors  — named factor weights
POST /valuation/creator                              — valuation from raw metrics
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.dependencies import get_container, request_id_of
from src.cm_valuation.application.schemas import CreatorMetricsIn
from src.container import MarketContainer

router = APIRouter(prefix="/instruments", tags=["valuation"])
creator_router = APIRouter(prefix="/valuation", tags=["valuation"])

Container = Annotated[MarketContainer, Depends(get_container)]


@router.get("/{instrument_id}/prediction")
async def predict_price_movement(
    instrument_id: str,
    request: Request,
    container: Container,
    timeframe: str = Query("24h", description="24h | 7d | 30d | 90d"),
    model_type: str = Query("hybrid", description="Valuation model strategy"),
) -> ApiResponse:
    result = await container.valuation_service.predict_price_movement(
        instrument_id, timeframe, model_type
    )
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/sentiment")
async def get_social_sentiment(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.valuation_service.get_social_sentiment(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/dividends")
async def get_dividend_info(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.valuation_service.get_dividend_info(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/vesting")
async def get_vesting_rules(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.valuation_service.get_vesting_rules(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/liquidation")
async def get_liquidation_rules(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.valuation_service.get_liquidation_rules(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/valuation-factors")
async def get_valuation_factors(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.valuation_service.get_valuation_factors(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))


@creator_router.post("/creator")
async def value_creator(
    metrics: CreatorMetricsIn, request: Request, container: Container
) -> ApiResponse:
    result = await container.valuation_service.value_creator(metrics)
    return success_response(result.model_dump(), request_id_of(request))
