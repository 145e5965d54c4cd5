"""Domain events published on the market event bus.

Payload dataclasses, one per MarketEvent channel. Consumers must not assume
ordering between PRICE_UPDATE, ORDERBOOK_UPDATE and TRADE_EXECUTED for the
same instrument; the three generator timers run independently.
"""

from dataclasses import dataclass, field
from datetime import datetime

from src.cm_common.enums import ConnectionStatus
from src.cm_market.domain.models import Order, Trade


@dataclass(frozen=True)
class ConnectionChanged:
    status: ConnectionStatus
    timestamp: datetime


@dataclass(frozen=True)
class PriceUpdate:
    instrument_id: str
    symbol: str
    old_price: float
    new_price: float
    timestamp: datetime


@dataclass(frozen=True)
class OrderbookUpdate:
    instrument_id: str
    symbol: str
    bids: list[Order] = field(default_factory=list)  # descending by price
    asks: list[Order] = field(default_factory=list)  # ascending by price
    timestamp: datetime | None = None


@dataclass(frozen=True)
class TradeExecuted:
    trade: Trade


@dataclass(frozen=True)
class OrderUpdated:
    order: Order
