"""Pydantic schemas for cm_market API responses and trade input.

Prices are plain floats rounded to 2 dp at the API boundary only; the
domain keeps full precision so ordering contracts hold for tiny prices.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.cm_common.datetime_utils import utc_now
from src.cm_common.enums import OrderKind, OrderSide, OrderStatus
from src.cm_common.id_generator import generate_id
from src.cm_market.domain.models import (
    Instrument,
    MarketDepthModel,
    Order,
    OrderbookSnapshot,
    Trade,
)

# ---------------------------------------------------------------------------
# Instrument
# ---------------------------------------------------------------------------


class InstrumentOut(BaseModel):
    id: str
    symbol: str
    creator_name: str
    current_price: float
    initial_price: float
    total_supply: int
    available_supply: int
    engagement_score: float
    ai_score: float
    revenue_usd: float | None
    average_daily_volume: float | None
    launched_at: str | None
    market_cap: float

    @classmethod
    def from_domain(cls, i: Instrument) -> "InstrumentOut":
        return cls(
            id=i.id,
            symbol=i.symbol,
            creator_name=i.creator_name,
            current_price=round(i.current_price, 2),
            initial_price=i.initial_price,
            total_supply=i.total_supply,
            available_supply=i.available_supply,
            engagement_score=i.engagement_score,
            ai_score=i.ai_score,
            revenue_usd=i.revenue_usd,
            average_daily_volume=i.average_daily_volume,
            launched_at=i.launched_at.isoformat() if i.launched_at else None,
            market_cap=round(i.current_price * i.total_supply, 2),
        )


class InstrumentListResponse(BaseModel):
    items: list[InstrumentOut]


# ---------------------------------------------------------------------------
# Depth
# ---------------------------------------------------------------------------


class SpreadOut(BaseModel):
    bid: float
    ask: float


class MarketDepthOut(BaseModel):
    instrument_id: str
    order_concentration: float
    buy_wall_strength: float
    sell_wall_strength: float
    support_levels: list[float]
    resistance_levels: list[float]
    current_spread: SpreadOut

    @classmethod
    def from_domain(cls, instrument_id: str, depth: MarketDepthModel) -> "MarketDepthOut":
        return cls(
            instrument_id=instrument_id,
            order_concentration=round(depth.order_concentration, 2),
            buy_wall_strength=round(depth.buy_wall_strength, 2),
            sell_wall_strength=round(depth.sell_wall_strength, 2),
            support_levels=[round(p, 2) for p in depth.support_levels],
            resistance_levels=[round(p, 2) for p in depth.resistance_levels],
            current_spread=SpreadOut(
                bid=round(depth.current_spread.bid, 4),
                ask=round(depth.current_spread.ask, 4),
            ),
        )


# ---------------------------------------------------------------------------
# Orders / order book
# ---------------------------------------------------------------------------


class OrderOut(BaseModel):
    id: str
    instrument_id: str
    user_id: str
    side: OrderSide
    kind: OrderKind
    price: float
    quantity: int
    status: OrderStatus
    created_at: str
    updated_at: str | None = None

    @classmethod
    def from_domain(cls, o: Order) -> "OrderOut":
        return cls(
            id=o.id,
            instrument_id=o.instrument_id,
            user_id=o.user_id,
            side=o.side,
            kind=o.kind,
            price=o.price,
            quantity=o.quantity,
            status=o.status,
            created_at=o.created_at.isoformat(),
            updated_at=o.updated_at.isoformat() if o.updated_at else None,
        )


class OrderbookResponse(BaseModel):
    instrument_id: str
    symbol: str
    bids: list[OrderOut]  # descending by price
    asks: list[OrderOut]  # ascending by price
    timestamp: str

    @classmethod
    def from_snapshot(cls, snapshot: OrderbookSnapshot) -> "OrderbookResponse":
        return cls(
            instrument_id=snapshot.instrument_id,
            symbol=snapshot.symbol,
            bids=[OrderOut.from_domain(o) for o in snapshot.bids],
            asks=[OrderOut.from_domain(o) for o in snapshot.asks],
            timestamp=(snapshot.timestamp or utc_now()).isoformat(),
        )


# ---------------------------------------------------------------------------
# Trades
# ---------------------------------------------------------------------------


class TradeOut(BaseModel):
    id: str
    instrument_id: str
    buyer_id: str
    seller_id: str
    price: float
    quantity: int
    side: OrderSide
    timestamp: str

    @classmethod
    def from_domain(cls, t: Trade) -> "TradeOut":
        return cls(
            id=t.id,
            instrument_id=t.instrument_id,
            buyer_id=t.buyer_id,
            seller_id=t.seller_id,
            price=round(t.price, 4),
            quantity=t.quantity,
            side=t.side,
            timestamp=t.timestamp.isoformat(),
        )


class TradeIn(BaseModel):
    """Caller-supplied trade for anomaly analysis."""

    id: str | None = None
    buyer_id: str = Field(min_length=1)
    seller_id: str = Field(min_length=1)
    price: float = Field(gt=0)
    quantity: int = Field(gt=0)
    side: OrderSide = OrderSide.BUY
    timestamp: datetime | None = None

    def to_domain(self, instrument_id: str) -> Trade:
        return Trade(
            id=self.id or generate_id("trade"),
            instrument_id=instrument_id,
            buyer_id=self.buyer_id,
            seller_id=self.seller_id,
            price=self.price,
            quantity=self.quantity,
            side=self.side,
            timestamp=self.timestamp or utc_now(),
        )


class TradeListResponse(BaseModel):
    instrument_id: str
    items: list[TradeOut]
