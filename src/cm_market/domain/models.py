"""Domain models for cm_market — pure dataclasses shared by feed, risk and valuation."""

from dataclasses import dataclass, field
from datetime import datetime

from src.cm_common.enums import OrderKind, OrderSide, OrderStatus
from src.cm_common.errors import InvalidOrderTransitionError, OrderNotCancellableError

# status -> statuses it may move to; fulfilled/cancelled are terminal
_ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.OPEN, OrderStatus.FULFILLED, OrderStatus.CANCELLED}
    ),
    OrderStatus.OPEN: frozenset({OrderStatus.FULFILLED, OrderStatus.CANCELLED}),
    OrderStatus.FULFILLED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass
class Instrument:
    """A tradable creator token. Only `current_price` changes after creation."""

    id: str
    symbol: str
    creator_name: str
    current_price: float
    initial_price: float
    total_supply: int
    available_supply: int
    engagement_score: float  # 0-100
    ai_score: float  # 0-100
    revenue_usd: float | None = None
    average_daily_volume: float | None = None
    launched_at: datetime | None = None

    @property
    def circulating_supply(self) -> int:
        return self.total_supply - self.available_supply


@dataclass
class Order:
    id: str
    instrument_id: str
    user_id: str
    side: OrderSide
    kind: OrderKind
    price: float
    quantity: int
    status: OrderStatus
    created_at: datetime
    updated_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return not _ORDER_TRANSITIONS[self.status]

    @property
    def is_cancellable(self) -> bool:
        return OrderStatus.CANCELLED in _ORDER_TRANSITIONS[self.status]

    def transition(self, target: OrderStatus, at: datetime | None = None) -> None:
        """Move to `target`; terminal states are final."""
        if target not in _ORDER_TRANSITIONS[self.status]:
            if target == OrderStatus.CANCELLED:
                raise OrderNotCancellableError(self.id, self.status.value)
            raise InvalidOrderTransitionError(self.id, self.status.value, target.value)
        self.status = target
        self.updated_at = at


@dataclass(frozen=True)
class Trade:
    """Single execution. Immutable; the unit of anomaly analysis."""

    id: str
    instrument_id: str
    buyer_id: str
    seller_id: str
    price: float
    quantity: int
    side: OrderSide
    timestamp: datetime


@dataclass
class SpreadQuote:
    bid: float
    ask: float

    @property
    def width(self) -> float:
        return self.ask - self.bid


@dataclass
class MarketDepthModel:
    order_concentration: float
    buy_wall_strength: float
    sell_wall_strength: float
    support_levels: list[float]  # ascending, within [0.7p, 0.9p]
    resistance_levels: list[float]  # ascending, within [1.1p, 1.4p]
    current_spread: SpreadQuote


@dataclass
class OrderbookSnapshot:
    """Bids descending by price, asks ascending by price."""

    instrument_id: str
    symbol: str
    bids: list[Order] = field(default_factory=list)
    asks: list[Order] = field(default_factory=list)
    timestamp: datetime | None = None
