"""Domain models for cm_valuation — derived values, recomputed per request."""

from dataclasses import dataclass, field
from datetime import datetime

from src.cm_common.enums import (
    PayoutFrequency,
    PredictionDirection,
    PriceSignal,
    SentimentTrend,
)


@dataclass(frozen=True)
class Prediction:
    direction: PredictionDirection
    percentage: float  # signed fractional move drawn from the signal's range
    signal: PriceSignal


@dataclass
class ValuationResult:
    prediction: Prediction
    confidence: int  # 50-95
    target_price: float
    factors: list[str] = field(default_factory=list)
    score: float = 0.0  # timeframe-scaled prediction score


@dataclass(frozen=True)
class PlatformSentiment:
    score: float  # -1..1
    trend: SentimentTrend
    volume: int


@dataclass
class SocialSentiment:
    overall: SentimentTrend
    overall_score: float
    platforms: dict[str, PlatformSentiment]


@dataclass(frozen=True)
class DividendInfo:
    annual_yield_percent: float
    next_payout_date: datetime
    next_estimated_amount: float
    payout_frequency: PayoutFrequency


@dataclass(frozen=True)
class VestingRules:
    creator_initial_unlock_pct: float
    creator_vesting_months: int
    creator_monthly_unlock_pct: float
    investor_min_staking_days: int
    investor_early_unstake_penalty_pct: float
    investor_staking_rewards_pct: float


@dataclass(frozen=True)
class LiquidationRules:
    inactivity_threshold_days: int
    engagement_minimum: int
    liquidation_process: str
    token_buyback_price: float


@dataclass(frozen=True)
class CreatorMetrics:
    followers: int
    engagement_rate: float  # 0..1
    sponsorships: int
    monthly_revenue: float
    net_worth: float
    press_mentions: int
    stream_views: int  # monthly average
    ticket_sales: int  # monthly
