"""Composition root.

Builds one explicitly owned object graph per application: a single RNG,
event bus, generator and the services that read the same instruments.
Nothing here is a module-level singleton; tests build their own container.
"""

from dataclasses import dataclass

from config.settings import Settings
from src.cm_common.enums import MarketEvent
from src.cm_common.latency import SimulatedLatency
from src.cm_common.random_source import RandomSource, make_random_source
from src.cm_feed.engine.event_bus import EventBus
from src.cm_feed.engine.generator import FeedConfig, MarketFeedGenerator
from src.cm_market.application.service import MarketApplicationService
from src.cm_market.domain.models import Instrument
from src.cm_market.infrastructure.persistence import InstrumentRepository
from src.cm_market.infrastructure.trade_tape import TradeTape
from src.cm_order.application.service import OrderApplicationService
from src.cm_order.infrastructure.persistence import OrderRepository
from src.cm_risk.application.service import RiskApplicationService
from src.cm_valuation.application.service import ValuationApplicationService


@dataclass
class MarketContainer:
    settings: Settings
    rng: RandomSource
    bus: EventBus
    instruments: InstrumentRepository
    orders: OrderRepository
    tape: TradeTape
    feed: MarketFeedGenerator
    market_service: MarketApplicationService
    order_service: OrderApplicationService
    risk_service: RiskApplicationService
    valuation_service: ValuationApplicationService


def build_container(
    settings: Settings,
    instruments: list[Instrument] | None = None,
    rng: RandomSource | None = None,
) -> MarketContainer:
    rng = rng or make_random_source(settings.RANDOM_SEED)
    bus = EventBus()
    instrument_repo = InstrumentRepository(instruments)
    order_repo = OrderRepository()
    tape = TradeTape(maxlen=settings.TRADE_TAPE_SIZE)
    bus.on(MarketEvent.TRADE_EXECUTED, tape.on_trade_executed)

    latency = SimulatedLatency(
        rng,
        min_ms=settings.API_LATENCY_MIN_MS,
        max_ms=settings.API_LATENCY_MAX_MS,
        failure_rate=settings.API_FAILURE_RATE,
    )
    feed = MarketFeedGenerator(instrument_repo, bus, rng, FeedConfig.from_settings(settings))

    return MarketContainer(
        settings=settings,
        rng=rng,
        bus=bus,
        instruments=instrument_repo,
        orders=order_repo,
        tape=tape,
        feed=feed,
        market_service=MarketApplicationService(instrument_repo, order_repo, tape, rng, latency),
        order_service=OrderApplicationService(order_repo, instrument_repo, bus, latency),
        risk_service=RiskApplicationService(
            instrument_repo, tape, latency, max_cycle_length=settings.MAX_CYCLE_LENGTH
        ),
        valuation_service=ValuationApplicationService(instrument_repo, rng, latency),
    )
