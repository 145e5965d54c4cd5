"""Market depth model: support/resistance bands, wall strengths and spread.

All randomness comes from the injected RandomSource; with a seeded source
the result is reproducible.
"""

from src.cm_common.random_source import RandomSource
from src.cm_market.domain.models import Instrument, MarketDepthModel, SpreadQuote

SUPPORT_BAND = (0.7, 0.9)
RESISTANCE_BAND = (1.1, 1.4)
BASE_SPREAD_PCT = 0.01
REVENUE_REFERENCE_USD = 100_000


def clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def _levels(price: float, band: tuple[float, float], rng: RandomSource) -> list[float]:
    low, high = band
    return sorted(price * rng.uniform(low, high) for _ in range(3))


def compute_spread(instrument: Instrument, rng: RandomSource) -> SpreadQuote:
    """Bid/ask around current price.

    Low engagement widens the spread (factor 0.5-1.5); revenue above the
    reference tightens it (factor 0.5-1.0), so width strictly shrinks as
    revenue grows until the 0.5 clamp is reached.
    """
    price = instrument.current_price
    engagement_factor = clamp(0.5, 1.5, (100 - instrument.engagement_score) / 50)
    if instrument.revenue_usd:
        revenue_adjustment = clamp(0.5, 1.0, REVENUE_REFERENCE_USD / instrument.revenue_usd)
    else:
        revenue_adjustment = 1.0
    spread_pct = (
        BASE_SPREAD_PCT * engagement_factor * revenue_adjustment * rng.uniform(0.9, 1.1)
    )
    spread_amount = price * spread_pct
    return SpreadQuote(bid=price - spread_amount / 2, ask=price + spread_amount / 2)


def compute_depth(instrument: Instrument, rng: RandomSource) -> MarketDepthModel:
    price = instrument.current_price
    support_levels = _levels(price, SUPPORT_BAND, rng)
    resistance_levels = _levels(price, RESISTANCE_BAND, rng)

    # Unclamped; consumers cap at 1.0
    order_concentration = 0.3 + instrument.engagement_score / 200
    buy_wall_strength = 0.2 + instrument.ai_score / 150 + rng.uniform(0, 0.3)
    sell_wall_strength = (
        0.1 + (100 - instrument.engagement_score) / 200 + rng.uniform(0, 0.3)
    )

    return MarketDepthModel(
        order_concentration=order_concentration,
        buy_wall_strength=buy_wall_strength,
        sell_wall_strength=sell_wall_strength,
        support_levels=support_levels,
        resistance_levels=resistance_levels,
        current_spread=compute_spread(instrument, rng),
    )
