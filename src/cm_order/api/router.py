# src/cm_order/api/router.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.cm_common.enums import OrderStatus
from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.dependencies import get_container, get_user_id, request_id_of
from src.cm_order.application.schemas import PlaceOrderRequest
from src.container import MarketContainer

router = APIRouter(prefix="/orders", tags=["orders"])

Container = Annotated[MarketContainer, Depends(get_container)]
UserId = Annotated[str, Depends(get_user_id)]


@router.post("", status_code=201)
async def place_order(
    req: PlaceOrderRequest, request: Request, container: Container, user_id: UserId
) -> ApiResponse:
    result = await container.order_service.place_order(req, user_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.post("/{order_id}/cancel")
async def cancel_order(
    order_id: str, request: Request, container: Container, user_id: UserId
) -> ApiResponse:
    result = await container.order_service.cancel_order(order_id, user_id)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("")
async def list_orders(
    request: Request,
    container: Container,
    user_id: UserId,
    instrument_id: str | None = Query(None, description="Filter by instrument ID"),
    status: OrderStatus | None = Query(None, description="Filter by order status"),
) -> ApiResponse:
    result = await container.order_service.list_orders(user_id, instrument_id, status)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/{order_id}")
async def get_order(
    order_id: str, request: Request, container: Container, user_id: UserId
) -> ApiResponse:
    result = await container.order_service.get_order(order_id, user_id)
    return success_response(result.model_dump(), request_id_of(request))
