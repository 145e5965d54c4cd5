"""Price-movement prediction.

A model-specific weighted score (roughly -1.5..1.5) is scaled by the
timeframe multiplier and bucketed into a signal:

  score >  0.8   strong_up    [ 0.15,  0.40]
  score >  0.3   up           [ 0.05,  0.15]
  score < -0.8   strong_down  [-0.35, -0.15]
  score < -0.3   down         [-0.10, -0.03]
  |score| < 0.15 stable       [-0.02,  0.02]
  otherwise      volatile     [-0.07,  0.07]

The reported percentage and the target-price move are two independent
draws from the signal's range; only the latter is scaled by the timeframe.
"""

import math
from collections.abc import Callable
from datetime import datetime

from src.cm_common.datetime_utils import age_in_days, utc_now
from src.cm_common.enums import ModelType, PredictionDirection, PriceSignal, Timeframe
from src.cm_common.random_source import RandomSource
from src.cm_market.domain.models import Instrument
from src.cm_valuation.domain.models import Prediction, ValuationResult
from src.cm_valuation.engine.factors import draw_factors

TIMEFRAME_MULTIPLIERS: dict[Timeframe, float] = {
    Timeframe.H24: 1.0,
    Timeframe.D7: 1.5,
    Timeframe.D30: 2.2,
    Timeframe.D90: 3.0,
}

SIGNAL_RANGES: dict[PriceSignal, tuple[float, float]] = {
    PriceSignal.STRONG_UP: (0.15, 0.40),
    PriceSignal.UP: (0.05, 0.15),
    PriceSignal.STRONG_DOWN: (-0.35, -0.15),
    PriceSignal.DOWN: (-0.10, -0.03),
    PriceSignal.STABLE: (-0.02, 0.02),
    PriceSignal.VOLATILE: (-0.07, 0.07),
}

SIGNAL_DIRECTIONS: dict[PriceSignal, PredictionDirection] = {
    PriceSignal.STRONG_UP: PredictionDirection.UP,
    PriceSignal.UP: PredictionDirection.UP,
    PriceSignal.STRONG_DOWN: PredictionDirection.DOWN,
    PriceSignal.DOWN: PredictionDirection.DOWN,
    PriceSignal.STABLE: PredictionDirection.NEUTRAL,
    PriceSignal.VOLATILE: PredictionDirection.NEUTRAL,
}

HYBRID_MATURITY_DAYS = 90
REVENUE_BOOST_THRESHOLD_USD = 500_000
REVENUE_CONFIDENCE_BOOST = 10
MIN_CONFIDENCE = 50
MAX_CONFIDENCE = 95
REVENUE_REFERENCE_USD = 100_000


# ---------------------------------------------------------------------------
# Normalised inputs (each roughly -1..1)
# ---------------------------------------------------------------------------


def _engagement(i: Instrument) -> float:
    return (i.engagement_score - 50) / 50


def _ai(i: Instrument) -> float:
    return (i.ai_score - 50) / 50


def _growth(i: Instrument) -> float:
    return (i.ai_score - 70) / 30


def _consistency(i: Instrument) -> float:
    return (i.engagement_score + i.ai_score - 100) / 100


def _revenue(i: Instrument) -> float:
    """log10 distance from the $100k reference, clamped to [-1, 1]; 0 when unknown."""
    if not i.revenue_usd or i.revenue_usd <= 0:
        return 0.0
    return max(-1.0, min(1.0, math.log10(i.revenue_usd / REVENUE_REFERENCE_USD)))


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

Strategy = Callable[[Instrument, RandomSource, datetime], float]


def _engagement_model(i: Instrument, rng: RandomSource, now: datetime) -> float:
    return _engagement(i) * 0.8 + rng.uniform(-0.2, 0.2)


def _sentiment_model(i: Instrument, rng: RandomSource, now: datetime) -> float:
    # Social sentiment is noisy: weak signal, wide noise band
    return _ai(i) * 0.5 + rng.uniform(-0.4, 0.4)


def _growth_model(i: Instrument, rng: RandomSource, now: datetime) -> float:
    return _growth(i) * 0.7 + rng.uniform(-0.2, 0.2)


def _consistency_model(i: Instrument, rng: RandomSource, now: datetime) -> float:
    return _consistency(i) * 0.4 + rng.uniform(-0.1, 0.1)


def _revenue_model(i: Instrument, rng: RandomSource, now: datetime) -> float:
    return _revenue(i) * 0.6 + _engagement(i) * 0.2 + rng.uniform(-0.15, 0.15)


def _social_model(i: Instrument, rng: RandomSource, now: datetime) -> float:
    return _engagement(i) * 0.6 + _ai(i) * 0.2 + rng.uniform(-0.3, 0.3)


def is_mature(instrument: Instrument, now: datetime) -> bool:
    if instrument.launched_at is None:
        return False
    return age_in_days(instrument.launched_at, now) > HYBRID_MATURITY_DAYS


def _hybrid_model(i: Instrument, rng: RandomSource, now: datetime) -> float:
    if is_mature(i, now):
        # Established token: fundamentals dominate
        base = (
            _revenue(i) * 0.35 + _consistency(i) * 0.35
            + _engagement(i) * 0.15 + _growth(i) * 0.15
        )
    else:
        base = (
            _engagement(i) * 0.35 + _growth(i) * 0.35
            + _revenue(i) * 0.15 + _consistency(i) * 0.15
        )
    return base + rng.uniform(-0.2, 0.2)


STRATEGIES: dict[ModelType, Strategy] = {
    ModelType.ENGAGEMENT: _engagement_model,
    ModelType.SENTIMENT: _sentiment_model,
    ModelType.GROWTH: _growth_model,
    ModelType.CONSISTENCY: _consistency_model,
    ModelType.REVENUE_WEIGHTED: _revenue_model,
    ModelType.SOCIAL_WEIGHTED: _social_model,
    ModelType.HYBRID: _hybrid_model,
}


# ---------------------------------------------------------------------------
# Bucketing
# ---------------------------------------------------------------------------


def signal_for_score(score: float) -> PriceSignal:
    if score > 0.8:
        return PriceSignal.STRONG_UP
    if score > 0.3:
        return PriceSignal.UP
    if score < -0.8:
        return PriceSignal.STRONG_DOWN
    if score < -0.3:
        return PriceSignal.DOWN
    if abs(score) < 0.15:
        return PriceSignal.STABLE
    return PriceSignal.VOLATILE


def draw_change(signal: PriceSignal, rng: RandomSource) -> float:
    low, high = SIGNAL_RANGES[signal]
    return rng.uniform(low, high)


def classify_score(score: float, rng: RandomSource) -> Prediction:
    signal = signal_for_score(score)
    return Prediction(
        direction=SIGNAL_DIRECTIONS[signal],
        percentage=draw_change(signal, rng),
        signal=signal,
    )


def confidence_for(score: float, model_type: ModelType, instrument: Instrument) -> int:
    boost = 0
    if (
        model_type == ModelType.REVENUE_WEIGHTED
        and (instrument.revenue_usd or 0) > REVENUE_BOOST_THRESHOLD_USD
    ):
        boost = REVENUE_CONFIDENCE_BOOST
    return min(MAX_CONFIDENCE, MIN_CONFIDENCE + math.floor(abs(score) * 50) + boost)


def predict(
    instrument: Instrument,
    timeframe: Timeframe,
    model_type: ModelType,
    rng: RandomSource,
    now: datetime | None = None,
) -> ValuationResult:
    now = now or utc_now()
    factors = draw_factors(rng)
    multiplier = TIMEFRAME_MULTIPLIERS[timeframe]
    score = STRATEGIES[model_type](instrument, rng, now) * multiplier

    prediction = classify_score(score, rng)
    # Target move: fresh draw for the same signal, scaled by the timeframe
    price_change = draw_change(prediction.signal, rng) * multiplier
    return ValuationResult(
        prediction=prediction,
        confidence=confidence_for(score, model_type, instrument),
        target_price=instrument.current_price * (1 + price_change),
        factors=factors,
        score=score,
    )
