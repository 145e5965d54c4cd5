"""In-memory OrderRepository — process-lifetime storage, insertion ordered."""

from src.cm_common.enums import OrderStatus
from src.cm_market.domain.models import Order


class OrderRepository:
    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}

    def save(self, order: Order) -> None:
        self._orders[order.id] = order

    def get_by_id(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    def list_orders(
        self,
        user_id: str | None = None,
        instrument_id: str | None = None,
        statuses: list[OrderStatus] | None = None,
    ) -> list[Order]:
        return [
            o
            for o in self._orders.values()
            if (user_id is None or o.user_id == user_id)
            and (instrument_id is None or o.instrument_id == instrument_id)
            and (statuses is None or o.status in statuses)
        ]
