"""Creator insights shown next to predictions: sentiment, dividends, token rules."""

from datetime import datetime, timedelta

from src.cm_common.datetime_utils import utc_now
from src.cm_common.enums import PayoutFrequency, SentimentTrend
from src.cm_common.random_source import RandomSource
from src.cm_market.domain.models import Instrument
from src.cm_valuation.domain.models import (
    CreatorMetrics,
    DividendInfo,
    LiquidationRules,
    PlatformSentiment,
    SocialSentiment,
    VestingRules,
)

# platform -> (weight in overall score, (min volume, max volume))
PLATFORMS: dict[str, tuple[float, tuple[int, int]]] = {
    "twitter": (0.35, (10_000, 1_000_000)),
    "instagram": (0.40, (20_000, 2_000_000)),
    "youtube": (0.25, (5_000, 500_000)),
}

VALUATION_FACTOR_WEIGHTS: dict[str, float] = {
    "Engagement Rate": 0.4,
    "Market Sentiment": 0.3,
    "AI Score": 0.3,
}

_CREATOR_METRIC_WEIGHTS: dict[str, float] = {
    "followers": 0.05,
    "engagement_rate": 10_000,
    "sponsorships": 5_000,
    "monthly_revenue": 2,
    "net_worth": 0.1,
    "press_mentions": 200,
    "stream_views": 0.01,
    "ticket_sales": 1.5,
}


def trend_for_score(score: float) -> SentimentTrend:
    if score > 0.6:
        return SentimentTrend.VERY_POSITIVE
    if score > 0.2:
        return SentimentTrend.POSITIVE
    if score < -0.6:
        return SentimentTrend.VERY_NEGATIVE
    if score < -0.2:
        return SentimentTrend.NEGATIVE
    return SentimentTrend.NEUTRAL


def get_social_sentiment(instrument: Instrument, rng: RandomSource) -> SocialSentiment:
    base = (instrument.engagement_score - 50) / 50
    platforms: dict[str, PlatformSentiment] = {}
    overall_score = 0.0
    for name, (weight, (low, high)) in PLATFORMS.items():
        score = max(-1.0, min(1.0, base + rng.uniform(-0.3, 0.3)))
        overall_score += score * weight
        platforms[name] = PlatformSentiment(
            score=round(score, 2),
            trend=trend_for_score(score),
            volume=rng.randint(low, high),
        )
    return SocialSentiment(
        overall=trend_for_score(overall_score),
        overall_score=round(overall_score, 2),
        platforms=platforms,
    )


def calculate_dividend_yield(
    instrument: Instrument, rng: RandomSource, now: datetime | None = None
) -> DividendInfo:
    now = now or utc_now()
    base_yield = instrument.ai_score / 200 * 5  # 0-2.5%
    engagement_bonus = instrument.engagement_score / 200 * 3  # 0-1.5%
    total_yield = base_yield + engagement_bonus

    mean_score = (instrument.ai_score + instrument.engagement_score) / 2
    frequency = PayoutFrequency.MONTHLY if mean_score > 80 else PayoutFrequency.QUARTERLY
    periods = 12 if frequency == PayoutFrequency.MONTHLY else 4

    annual_pool = instrument.initial_price * instrument.circulating_supply * total_yield / 100
    return DividendInfo(
        annual_yield_percent=round(total_yield, 2),
        next_payout_date=now + timedelta(days=rng.randint(1, 30)),
        next_estimated_amount=round(annual_pool / periods, 2),
        payout_frequency=frequency,
    )


def get_token_vesting_rules(instrument: Instrument) -> VestingRules:
    return VestingRules(
        creator_initial_unlock_pct=20,
        creator_vesting_months=24,
        creator_monthly_unlock_pct=3.33,
        investor_min_staking_days=30,
        investor_early_unstake_penalty_pct=10,
        investor_staking_rewards_pct=round(3 + instrument.ai_score / 20, 2),  # 3-8%
    )


def get_liquidation_rules(instrument: Instrument) -> LiquidationRules:
    return LiquidationRules(
        inactivity_threshold_days=180,
        engagement_minimum=20,
        liquidation_process=(
            "If the creator becomes inactive or engagement falls below the minimum, "
            "tokens enter a 30-day grace period. Without recovery, tokens are bought "
            "back at the buyback price."
        ),
        token_buyback_price=round(instrument.initial_price * 0.5, 2),
    )


def get_valuation_factors(instrument: Instrument) -> dict[str, float]:
    return dict(VALUATION_FACTOR_WEIGHTS)


def calculate_creator_valuation(metrics: CreatorMetrics) -> int:
    """Weighted USD valuation from raw creator metrics."""
    total = sum(
        getattr(metrics, name) * weight for name, weight in _CREATOR_METRIC_WEIGHTS.items()
    )
    return round(total)
