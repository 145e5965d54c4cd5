# src/cm_order/application/service.py
"""OrderApplicationService — records trading actions; no matching.

Limit orders rest as OPEN; market orders wait as PENDING at the current
price. Every status change is published as ORDER_UPDATED.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from src.cm_common.datetime_utils import utc_now
from src.cm_common.enums import MarketEvent, OrderKind, OrderStatus
from src.cm_common.errors import InstrumentNotFoundError, OrderNotFoundError
from src.cm_common.id_generator import generate_id
from src.cm_common.latency import SimulatedLatency
from src.cm_feed.domain.events import OrderUpdated
from src.cm_feed.engine.event_bus import EventBus
from src.cm_market.application.schemas import OrderOut
from src.cm_market.domain.models import Order
from src.cm_market.domain.repository import InstrumentRepositoryProtocol
from src.cm_order.application.schemas import (
    CancelOrderResponse,
    OrderListResponse,
    PlaceOrderRequest,
)
from src.cm_order.domain.repository import OrderRepositoryProtocol

logger = logging.getLogger(__name__)


class OrderApplicationService:
    def __init__(
        self,
        repo: OrderRepositoryProtocol,
        instruments: InstrumentRepositoryProtocol,
        bus: EventBus,
        latency: SimulatedLatency,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo = repo
        self._instruments = instruments
        self._bus = bus
        self._latency = latency
        self._clock = clock

    def _get_owned(self, order_id: str, user_id: str) -> Order:
        order = self._repo.get_by_id(order_id)
        # Other users' orders are indistinguishable from missing ones
        if order is None or order.user_id != user_id:
            raise OrderNotFoundError(order_id)
        return order

    def _publish(self, order: Order) -> None:
        self._bus.emit(MarketEvent.ORDER_UPDATED, OrderUpdated(order=order))

    async def place_order(self, req: PlaceOrderRequest, user_id: str) -> OrderOut:
        await self._latency.round_trip("place_order")
        instrument = self._instruments.get_instrument(req.instrument_id)
        if instrument is None:
            raise InstrumentNotFoundError(req.instrument_id)

        now = self._clock()
        is_limit = req.kind == OrderKind.LIMIT
        order = Order(
            id=generate_id("order"),
            instrument_id=instrument.id,
            user_id=user_id,
            side=req.side,
            kind=req.kind,
            price=req.price if is_limit and req.price is not None else instrument.current_price,
            quantity=req.quantity,
            status=OrderStatus.OPEN if is_limit else OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        self._repo.save(order)
        logger.info(
            "Order placed: id=%s %s %s x%d @ %.4f",
            order.id, order.kind.value, order.side.value, order.quantity, order.price,
        )
        self._publish(order)
        return OrderOut.from_domain(order)

    async def cancel_order(self, order_id: str, user_id: str) -> CancelOrderResponse:
        await self._latency.round_trip("cancel_order")
        order = self._get_owned(order_id, user_id)
        order.transition(OrderStatus.CANCELLED, at=self._clock())
        self._repo.save(order)
        logger.info("Order cancelled: id=%s", order.id)
        self._publish(order)
        return CancelOrderResponse(order_id=order.id, status=order.status.value)

    async def get_order(self, order_id: str, user_id: str) -> OrderOut:
        await self._latency.round_trip("get_order")
        return OrderOut.from_domain(self._get_owned(order_id, user_id))

    async def list_orders(
        self,
        user_id: str,
        instrument_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> OrderListResponse:
        await self._latency.round_trip("list_orders")
        orders = self._repo.list_orders(
            user_id=user_id,
            instrument_id=instrument_id,
            statuses=[status] if status else None,
        )
        return OrderListResponse(items=[OrderOut.from_domain(o) for o in orders])
