"""cm_risk REST endpoints.

POST /instruments/{instrument_id}/anomalies  — analyse caller-supplied trades
GET  /instruments/{instrument_id}/anomalies  — analyse the rolling trade tape
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.dependencies import get_container, request_id_of
from src.cm_risk.application.schemas import DetectAnomaliesRequest
from src.container import MarketContainer

router = APIRouter(prefix="/instruments", tags=["risk"])

Container = Annotated[MarketContainer, Depends(get_container)]


@router.post("/{instrument_id}/anomalies")
async def detect_anomalies(
    instrument_id: str,
    req: DetectAnomaliesRequest,
    request: Request,
    container: Container,
) -> ApiResponse:
    trades = [t.to_domain(instrument_id) for t in req.trades]
    result = await container.risk_service.detect_anomalies(instrument_id, trades or None)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{instrument_id}/anomalies")
async def detect_anomalies_on_tape(
    instrument_id: str, request: Request, container: Container
) -> ApiResponse:
    result = await container.risk_service.detect_anomalies(instrument_id)
    return success_response(result.model_dump(), request_id_of(request))
