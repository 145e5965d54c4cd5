"""Order repository Protocol."""

from typing import Protocol

from src.cm_common.enums import OrderStatus
from src.cm_market.domain.models import Order


class OrderRepositoryProtocol(Protocol):
    def save(self, order: Order) -> None: ...

    def get_by_id(self, order_id: str) -> Order | None: ...

    def list_orders(
        self,
        user_id: str | None = None,
        instrument_id: str | None = None,
        statuses: list[OrderStatus] | None = None,
    ) -> list[Order]: ...
