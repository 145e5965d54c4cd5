"""Pydantic schemas for cm_valuation API responses."""

from pydantic import BaseModel, Field

from src.cm_common.enums import (
    PayoutFrequency,
    PredictionDirection,
    PriceSignal,
    SentimentTrend,
)
from src.cm_valuation.domain.models import (
    CreatorMetrics,
    DividendInfo,
    LiquidationRules,
    SocialSentiment,
    ValuationResult,
    VestingRules,
)


class PredictionOut(BaseModel):
    direction: PredictionDirection
    percentage: float
    signal: PriceSignal


class ValuationResultOut(BaseModel):
    instrument_id: str
    timeframe: str
    model_type: str
    prediction: PredictionOut
    confidence: int
    target_price: float
    factors: list[str]

    @classmethod
    def from_domain(
        cls, instrument_id: str, timeframe: str, model_type: str, r: ValuationResult
    ) -> "ValuationResultOut":
        return cls(
            instrument_id=instrument_id,
            timeframe=timeframe,
            model_type=model_type,
            prediction=PredictionOut(
                direction=r.prediction.direction,
                percentage=round(r.prediction.percentage, 4),
                signal=r.prediction.signal,
            ),
            confidence=r.confidence,
            target_price=round(r.target_price, 2),
            factors=list(r.factors),
        )


class PlatformSentimentOut(BaseModel):
    score: float
    trend: SentimentTrend
    volume: int


class SocialSentimentOut(BaseModel):
    instrument_id: str
    overall: SentimentTrend
    overall_score: float
    platforms: dict[str, PlatformSentimentOut]

    @classmethod
    def from_domain(cls, instrument_id: str, s: SocialSentiment) -> "SocialSentimentOut":
        return cls(
            instrument_id=instrument_id,
            overall=s.overall,
            overall_score=s.overall_score,
            platforms={
                name: PlatformSentimentOut(score=p.score, trend=p.trend, volume=p.volume)
                for name, p in s.platforms.items()
            },
        )


class DividendInfoOut(BaseModel):
    instrument_id: str
    annual_yield_percent: float
    next_payout_date: str
    next_estimated_amount: float
    payout_frequency: PayoutFrequency

    @classmethod
    def from_domain(cls, instrument_id: str, d: DividendInfo) -> "DividendInfoOut":
        return cls(
            instrument_id=instrument_id,
            annual_yield_percent=d.annual_yield_percent,
            next_payout_date=d.next_payout_date.isoformat(),
            next_estimated_amount=d.next_estimated_amount,
            payout_frequency=d.payout_frequency,
        )


class VestingRulesOut(BaseModel):
    instrument_id: str
    creator_initial_unlock_pct: float
    creator_vesting_months: int
    creator_monthly_unlock_pct: float
    investor_min_staking_days: int
    investor_early_unstake_penalty_pct: float
    investor_staking_rewards_pct: float

    @classmethod
    def from_domain(cls, instrument_id: str, v: VestingRules) -> "VestingRulesOut":
        return cls(
            instrument_id=instrument_id,
            creator_initial_unlock_pct=v.creator_initial_unlock_pct,
            creator_vesting_months=v.creator_vesting_months,
            creator_monthly_unlock_pct=v.creator_monthly_unlock_pct,
            investor_min_staking_days=v.investor_min_staking_days,
            investor_early_unstake_penalty_pct=v.investor_early_unstake_penalty_pct,
            investor_staking_rewards_pct=v.investor_staking_rewards_pct,
        )


class LiquidationRulesOut(BaseModel):
    instrument_id: str
    inactivity_threshold_days: int
    engagement_minimum: int
    liquidation_process: str
    token_buyback_price: float

    @classmethod
    def from_domain(cls, instrument_id: str, r: LiquidationRules) -> "LiquidationRulesOut":
        return cls(
            instrument_id=instrument_id,
            inactivity_threshold_days=r.inactivity_threshold_days,
            engagement_minimum=r.engagement_minimum,
            liquidation_process=r.liquidation_process,
            token_buyback_price=r.token_buyback_price,
        )


class ValuationFactorsOut(BaseModel):
    instrument_id: str
    factors: list[str]
    weights: list[float]


class CreatorMetricsIn(BaseModel):
    followers: int = Field(ge=0)
    engagement_rate: float = Field(ge=0, le=1)
    sponsorships: int = Field(ge=0)
    monthly_revenue: float = Field(ge=0)
    net_worth: float = Field(ge=0)
    press_mentions: int = Field(ge=0)
    stream_views: int = Field(ge=0)
    ticket_sales: int = Field(ge=0)

    def to_domain(self) -> CreatorMetrics:
        return CreatorMetrics(**self.model_dump())


class CreatorValuationOut(BaseModel):
    valuation_usd: int
