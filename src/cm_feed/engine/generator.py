"""MarketFeedGenerator — timer-driven synthetic market activity.

Three independent asyncio timers drive price ticks, order-book snapshots and
probabilistic trade executions, each published on the EventBus. The
generator is an explicit instance owned by the composition root; its
connect/disconnect lifecycle is the only way timers start or stop.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from config.settings import Settings
from src.cm_common.datetime_utils import utc_now
from src.cm_common.enums import (
    ConnectionStatus,
    MarketEvent,
    OrderKind,
    OrderSide,
    OrderStatus,
)
from src.cm_common.id_generator import generate_id
from src.cm_common.random_source import RandomSource
from src.cm_feed.domain.events import (
    ConnectionChanged,
    OrderbookUpdate,
    PriceUpdate,
    TradeExecuted,
)
from src.cm_feed.engine.event_bus import EventBus
from src.cm_market.domain.models import Instrument, Order, Trade
from src.cm_market.domain.repository import InstrumentRepositoryProtocol

logger = logging.getLogger(__name__)

BOOK_DEPTH_RANGE = (3, 10)
BOOK_STEP_PCT = (0.001, 0.01)  # per-level cumulative offset from current price
BOOK_QUANTITY_RANGE = (1, 1000)
TRADE_PRICE_JITTER_PCT = 0.005
TRADE_QUANTITY_RANGE = (1, 10)
SIM_PARTICIPANTS = 1000


@dataclass(frozen=True)
class FeedConfig:
    price_tick_interval: tuple[float, float] = (2.0, 5.0)
    orderbook_interval: tuple[float, float] = (5.0, 10.0)
    trade_interval: tuple[float, float] = (3.0, 8.0)
    trade_probability: float = 0.4
    price_step_pct: float = 0.01
    price_floor: float | None = None
    price_ceiling: float | None = None
    reconnect_interval: float = 3.0
    max_reconnect_attempts: int = 5

    def __post_init__(self) -> None:
        if (
            self.price_floor is not None
            and self.price_ceiling is not None
            and self.price_floor > self.price_ceiling
        ):
            raise ValueError("price_floor must not exceed price_ceiling")

    @classmethod
    def from_settings(cls, settings: Settings) -> "FeedConfig":
        return cls(
            price_tick_interval=(settings.PRICE_TICK_MIN_S, settings.PRICE_TICK_MAX_S),
            orderbook_interval=(settings.ORDERBOOK_MIN_S, settings.ORDERBOOK_MAX_S),
            trade_interval=(settings.TRADE_MIN_S, settings.TRADE_MAX_S),
            trade_probability=settings.TRADE_PROBABILITY,
            price_step_pct=settings.PRICE_STEP_PCT,
            price_floor=settings.PRICE_FLOOR,
            price_ceiling=settings.PRICE_CEILING,
            reconnect_interval=settings.RECONNECT_INTERVAL_S,
            max_reconnect_attempts=settings.MAX_RECONNECT_ATTEMPTS,
        )


class MarketFeedGenerator:
    def __init__(
        self,
        repo: InstrumentRepositoryProtocol,
        bus: EventBus,
        rng: RandomSource,
        config: FeedConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[str], str] = generate_id,
    ) -> None:
        self._repo = repo
        self._bus = bus
        self._rng = rng
        self._config = config or FeedConfig()
        self._clock = clock
        self._id_factory = id_factory
        self._connected = False
        self._tasks: list[asyncio.Task[None]] = []
        self._reconnect_attempts = 0

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def active_timers(self) -> int:
        return sum(1 for t in self._tasks if not t.done())

    @property
    def reconnect_attempts(self) -> int:
        return self._reconnect_attempts

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Start the three timers. No-op when already connected.

        Must be called from inside a running event loop.
        """
        if self._connected:
            return
        loop = asyncio.get_running_loop()
        self._connected = True
        self._reconnect_attempts = 0
        cfg = self._config
        self._tasks = [
            loop.create_task(self._run_timer("price", cfg.price_tick_interval, self.tick_price)),
            loop.create_task(
                self._run_timer("orderbook", cfg.orderbook_interval, self.snapshot_orderbook)
            ),
            loop.create_task(self._run_timer("trade", cfg.trade_interval, self.maybe_execute_trade)),
        ]
        logger.info("Market feed connected: timers=%d", len(self._tasks))
        self._bus.emit(
            MarketEvent.CONNECTION, ConnectionChanged(ConnectionStatus.CONNECTED, self._clock())
        )

    def disconnect(self) -> None:
        """Cancel and clear every timer handle. No-op when already disconnected."""
        if not self._connected:
            return
        self._connected = False
        for task in self._tasks:
            task.cancel()
        self._tasks = []
        logger.info("Market feed disconnected")
        self._bus.emit(
            MarketEvent.CONNECTION,
            ConnectionChanged(ConnectionStatus.DISCONNECTED, self._clock()),
        )

    async def shutdown(self) -> None:
        """Disconnect and wait until the cancelled timers have unwound."""
        tasks = list(self._tasks)
        self.disconnect()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def reconnect(self) -> bool:
        """Wait the reconnect interval then connect; False once attempts are exhausted."""
        if self._connected:
            return True
        if self._reconnect_attempts >= self._config.max_reconnect_attempts:
            logger.warning(
                "Market feed reconnect abandoned after %d attempts", self._reconnect_attempts
            )
            return False
        self._reconnect_attempts += 1
        logger.info(
            "Market feed reconnecting (%d/%d)",
            self._reconnect_attempts,
            self._config.max_reconnect_attempts,
        )
        await asyncio.sleep(self._config.reconnect_interval)
        self.connect()
        return self._connected

    async def _run_timer(
        self, name: str, interval: tuple[float, float], step: Callable[[], object]
    ) -> None:
        while True:
            await asyncio.sleep(self._rng.uniform(*interval))
            if not self._connected:
                return
            try:
                step()
            except Exception:
                # A faulty step must not kill the timer
                logger.exception("Market feed %s step failed", name)

    # ------------------------------------------------------------------
    # Single steps (also driven directly by tests and tools)
    # ------------------------------------------------------------------

    def _pick_instrument(self) -> Instrument | None:
        instruments = self._repo.list_instruments()
        if not instruments:
            return None
        return self._rng.choice(instruments)

    def _bound_price(self, price: float) -> float:
        cfg = self._config
        if cfg.price_floor is not None and price < cfg.price_floor:
            return cfg.price_floor
        if cfg.price_ceiling is not None and price > cfg.price_ceiling:
            return cfg.price_ceiling
        return price

    def tick_price(self) -> PriceUpdate | None:
        if not self._connected:
            return None
        instrument = self._pick_instrument()
        if instrument is None:
            return None
        step = self._config.price_step_pct
        old_price = instrument.current_price
        new_price = self._bound_price(old_price * (1 + self._rng.uniform(-step, step)))
        instrument.current_price = new_price
        event = PriceUpdate(
            instrument_id=instrument.id,
            symbol=instrument.symbol,
            old_price=old_price,
            new_price=new_price,
            timestamp=self._clock(),
        )
        logger.debug("Tick %s %.4f -> %.4f", instrument.symbol, old_price, new_price)
        self._bus.emit(MarketEvent.PRICE_UPDATE, event)
        return event

    def _book_side(self, instrument: Instrument, side: OrderSide, now: datetime) -> list[Order]:
        price = instrument.current_price
        sign = -1 if side == OrderSide.BUY else 1
        levels: list[Order] = []
        offset = 0.0
        for _ in range(self._rng.randint(*BOOK_DEPTH_RANGE)):
            # Cumulative offset keeps bids strictly descending, asks strictly ascending
            offset += price * self._rng.uniform(*BOOK_STEP_PCT)
            levels.append(
                Order(
                    id=self._id_factory("sim-order"),
                    instrument_id=instrument.id,
                    user_id=f"sim-mm-{self._rng.randint(0, SIM_PARTICIPANTS - 1)}",
                    side=side,
                    kind=OrderKind.LIMIT,
                    price=price + sign * offset,
                    quantity=self._rng.randint(*BOOK_QUANTITY_RANGE),
                    status=OrderStatus.OPEN,
                    created_at=now,
                )
            )
        return levels

    def snapshot_orderbook(self) -> OrderbookUpdate | None:
        if not self._connected:
            return None
        instrument = self._pick_instrument()
        if instrument is None:
            return None
        now = self._clock()
        event = OrderbookUpdate(
            instrument_id=instrument.id,
            symbol=instrument.symbol,
            bids=self._book_side(instrument, OrderSide.BUY, now),
            asks=self._book_side(instrument, OrderSide.SELL, now),
            timestamp=now,
        )
        self._bus.emit(MarketEvent.ORDERBOOK_UPDATE, event)
        return event

    def maybe_execute_trade(self) -> TradeExecuted | None:
        if not self._connected:
            return None
        if self._rng.random() >= self._config.trade_probability:
            return None
        instrument = self._pick_instrument()
        if instrument is None:
            return None
        jitter = self._rng.uniform(-TRADE_PRICE_JITTER_PCT, TRADE_PRICE_JITTER_PCT)
        trade = Trade(
            id=self._id_factory("sim-trade"),
            instrument_id=instrument.id,
            buyer_id=f"sim-buyer-{self._rng.randint(0, SIM_PARTICIPANTS - 1)}",
            seller_id=f"sim-seller-{self._rng.randint(0, SIM_PARTICIPANTS - 1)}",
            price=instrument.current_price * (1 + jitter),
            quantity=self._rng.randint(*TRADE_QUANTITY_RANGE),
            side=self._rng.choice([OrderSide.BUY, OrderSide.SELL]),
            timestamp=self._clock(),
        )
        event = TradeExecuted(trade=trade)
        logger.debug("Trade %s %s x%d @ %.4f", trade.id, instrument.symbol, trade.quantity, trade.price)
        self._bus.emit(MarketEvent.TRADE_EXECUTED, event)
        return event
