"""MarketApplicationService — read-side queries over instruments and depth.

Every call pays the simulated round-trip so callers already treat it as a
fallible remote operation.
"""

from src.cm_common.enums import OrderSide, OrderStatus
from src.cm_common.errors import InstrumentNotFoundError
from src.cm_common.latency import SimulatedLatency
from src.cm_common.random_source import RandomSource
from src.cm_market.application.schemas import (
    InstrumentListResponse,
    InstrumentOut,
    MarketDepthOut,
    OrderbookResponse,
    TradeListResponse,
    TradeOut,
)
from src.cm_market.domain.models import Instrument, OrderbookSnapshot
from src.cm_market.domain.repository import InstrumentRepositoryProtocol
from src.cm_market.engine.depth import compute_depth
from src.cm_market.infrastructure.trade_tape import TradeTape
from src.cm_order.domain.repository import OrderRepositoryProtocol


class MarketApplicationService:
    def __init__(
        self,
        repo: InstrumentRepositoryProtocol,
        orders: OrderRepositoryProtocol,
        tape: TradeTape,
        rng: RandomSource,
        latency: SimulatedLatency,
    ) -> None:
        self._repo = repo
        self._orders = orders
        self._tape = tape
        self._rng = rng
        self._latency = latency

    def _require(self, instrument_id: str) -> Instrument:
        instrument = self._repo.get_instrument(instrument_id)
        if instrument is None:
            raise InstrumentNotFoundError(instrument_id)
        return instrument

    async def list_instruments(self) -> InstrumentListResponse:
        await self._latency.round_trip("list_instruments")
        return InstrumentListResponse(
            items=[InstrumentOut.from_domain(i) for i in self._repo.list_instruments()]
        )

    async def get_instrument(self, instrument_id: str) -> InstrumentOut:
        await self._latency.round_trip("get_instrument")
        return InstrumentOut.from_domain(self._require(instrument_id))

    async def get_market_depth(self, instrument_id: str) -> MarketDepthOut:
        await self._latency.round_trip("get_market_depth")
        instrument = self._require(instrument_id)
        return MarketDepthOut.from_domain(instrument.id, compute_depth(instrument, self._rng))

    async def get_orderbook(self, instrument_id: str) -> OrderbookResponse:
        """Book of resting user orders: bids high-to-low, asks low-to-high."""
        await self._latency.round_trip("get_orderbook")
        instrument = self._require(instrument_id)
        open_orders = self._orders.list_orders(
            instrument_id=instrument.id, statuses=[OrderStatus.OPEN]
        )
        snapshot = OrderbookSnapshot(
            instrument_id=instrument.id,
            symbol=instrument.symbol,
            bids=sorted(
                (o for o in open_orders if o.side == OrderSide.BUY),
                key=lambda o: o.price,
                reverse=True,
            ),
            asks=sorted(
                (o for o in open_orders if o.side == OrderSide.SELL),
                key=lambda o: o.price,
            ),
        )
        return OrderbookResponse.from_snapshot(snapshot)

    async def get_recent_trades(
        self, instrument_id: str, limit: int | None = None
    ) -> TradeListResponse:
        await self._latency.round_trip("get_recent_trades")
        instrument = self._require(instrument_id)
        trades = self._tape.recent(instrument.id, limit)
        return TradeListResponse(
            instrument_id=instrument.id, items=[TradeOut.from_domain(t) for t in trades]
        )
