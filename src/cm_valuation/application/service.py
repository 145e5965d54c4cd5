"""ValuationApplicationService — async facade over the prediction and insight engines.

String inputs from the HTTP layer are validated here so the engines only
ever see enum members.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from src.cm_common.datetime_utils import utc_now
from src.cm_common.enums import ModelType, Timeframe
from src.cm_common.errors import (
    InstrumentNotFoundError,
    InvalidModelTypeError,
    InvalidTimeframeError,
)
from src.cm_common.latency import SimulatedLatency
from src.cm_common.random_source import RandomSource
from src.cm_market.domain.models import Instrument
from src.cm_market.domain.repository import InstrumentRepositoryProtocol
from src.cm_valuation.application.schemas import (
    CreatorMetricsIn,
    CreatorValuationOut,
    DividendInfoOut,
    LiquidationRulesOut,
    SocialSentimentOut,
    ValuationFactorsOut,
    ValuationResultOut,
    VestingRulesOut,
)
from src.cm_valuation.engine.insights import (
    calculate_creator_valuation,
    calculate_dividend_yield,
    get_liquidation_rules,
    get_social_sentiment,
    get_token_vesting_rules,
    get_valuation_factors,
)
from src.cm_valuation.engine.prediction import predict

logger = logging.getLogger(__name__)


def parse_timeframe(value: str | Timeframe) -> Timeframe:
    try:
        return Timeframe(value)
    except ValueError:
        raise InvalidTimeframeError(str(value)) from None


def parse_model_type(value: str | ModelType) -> ModelType:
    try:
        return ModelType(value)
    except ValueError:
        raise InvalidModelTypeError(str(value)) from None


class ValuationApplicationService:
    def __init__(
        self,
        repo: InstrumentRepositoryProtocol,
        rng: RandomSource,
        latency: SimulatedLatency,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo = repo
        self._rng = rng
        self._latency = latency
        self._clock = clock

    def _require(self, instrument_id: str) -> Instrument:
        instrument = self._repo.get_instrument(instrument_id)
        if instrument is None:
            raise InstrumentNotFoundError(instrument_id)
        return instrument

    async def predict_price_movement(
        self,
        instrument_id: str,
        timeframe: str | Timeframe = Timeframe.H24,
        model_type: str | ModelType = ModelType.HYBRID,
    ) -> ValuationResultOut:
        tf = parse_timeframe(timeframe)
        model = parse_model_type(model_type)
        await self._latency.round_trip("predict_price_movement")
        instrument = self._require(instrument_id)
        result = predict(instrument, tf, model, self._rng, now=self._clock())
        logger.debug(
            "Prediction %s %s/%s: score=%.3f signal=%s conf=%d",
            instrument.symbol, tf.value, model.value, result.score,
            result.prediction.signal.value, result.confidence,
        )
        return ValuationResultOut.from_domain(instrument.id, tf.value, model.value, result)

    async def get_social_sentiment(self, instrument_id: str) -> SocialSentimentOut:
        await self._latency.round_trip("get_social_sentiment")
        instrument = self._require(instrument_id)
        return SocialSentimentOut.from_domain(
            instrument.id, get_social_sentiment(instrument, self._rng)
        )

    async def get_dividend_info(self, instrument_id: str) -> DividendInfoOut:
        await self._latency.round_trip("get_dividend_info")
        instrument = self._require(instrument_id)
        return DividendInfoOut.from_domain(
            instrument.id, calculate_dividend_yield(instrument, self._rng, now=self._clock())
        )

    async def get_vesting_rules(self, instrument_id: str) -> VestingRulesOut:
        await self._latency.round_trip("get_vesting_rules")
        instrument = self._require(instrument_id)
        return VestingRulesOut.from_domain(instrument.id, get_token_vesting_rules(instrument))

    async def get_liquidation_rules(self, instrument_id: str) -> LiquidationRulesOut:
        await self._latency.round_trip("get_liquidation_rules")
        instrument = self._require(instrument_id)
        return LiquidationRulesOut.from_domain(instrument.id, get_liquidation_rules(instrument))

    async def get_valuation_factors(self, instrument_id: str) -> ValuationFactorsOut:
        await self._latency.round_trip("get_valuation_factors")
        instrument = self._require(instrument_id)
        weights = get_valuation_factors(instrument)
        return ValuationFactorsOut(
            instrument_id=instrument.id,
            factors=list(weights),
            weights=list(weights.values()),
        )

    async def value_creator(self, metrics: CreatorMetricsIn) -> CreatorValuationOut:
        await self._latency.round_trip("value_creator")
        return CreatorValuationOut(valuation_usd=calculate_creator_valuation(metrics.to_domain()))
