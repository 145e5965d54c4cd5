import random
from datetime import UTC, datetime, timedelta

import pytest

from src.cm_common.enums import PayoutFrequency, SentimentTrend
from src.cm_market.domain.models import Instrument
from src.cm_valuation.domain.models import CreatorMetrics
from src.cm_valuation.engine.insights import (
    PLATFORMS,
    calculate_creator_valuation,
    calculate_dividend_yield,
    get_liquidation_rules,
    get_social_sentiment,
    get_token_vesting_rules,
    get_valuation_factors,
    trend_for_score,
)

NOW = datetime(2025, 6, 1, tzinfo=UTC)


def _make_instrument(**kwargs) -> Instrument:
    defaults = dict(
        id="mr-beast-ipo", symbol="BEAST", creator_name="MrBeast",
        current_price=22.10, initial_price=20.0,
        total_supply=1_000_000, available_supply=350_000,
        engagement_score=95, ai_score=88,
    )
    defaults.update(kwargs)
    return Instrument(**defaults)


class TestTrendForScore:
    @pytest.mark.parametrize(
        ("score", "trend"),
        [
            (0.8, SentimentTrend.VERY_POSITIVE),
            (0.3, SentimentTrend.POSITIVE),
            (0.0, SentimentTrend.NEUTRAL),
            (-0.3, SentimentTrend.NEGATIVE),
            (-0.8, SentimentTrend.VERY_NEGATIVE),
        ],
    )
    def test_thresholds(self, score: float, trend: SentimentTrend) -> None:
        assert trend_for_score(score) == trend


class TestSocialSentiment:
    @pytest.mark.parametrize("seed", range(10))
    def test_platforms_and_ranges(self, seed: int) -> None:
        sentiment = get_social_sentiment(_make_instrument(), random.Random(seed))
        assert set(sentiment.platforms) == set(PLATFORMS)
        for name, platform in sentiment.platforms.items():
            low, high = PLATFORMS[name][1]
            assert -1.0 <= platform.score <= 1.0
            assert low <= platform.volume <= high
        assert -1.0 <= sentiment.overall_score <= 1.0

    def test_top_engagement_is_very_positive(self) -> None:
        sentiment = get_social_sentiment(_make_instrument(engagement_score=100), random.Random(1))
        assert sentiment.overall == SentimentTrend.VERY_POSITIVE

    def test_no_engagement_is_very_negative(self) -> None:
        sentiment = get_social_sentiment(_make_instrument(engagement_score=0), random.Random(1))
        assert sentiment.overall == SentimentTrend.VERY_NEGATIVE


class TestDividends:
    def test_top_scores_pay_monthly(self) -> None:
        info = calculate_dividend_yield(
            _make_instrument(ai_score=100, engagement_score=100), random.Random(1), now=NOW
        )
        assert info.annual_yield_percent == pytest.approx(4.0)
        assert info.payout_frequency == PayoutFrequency.MONTHLY
        # 20.00 * 650_000 circulating * 4% / 12
        assert info.next_estimated_amount == pytest.approx(43_333.33)

    def test_average_scores_pay_quarterly(self) -> None:
        info = calculate_dividend_yield(
            _make_instrument(ai_score=50, engagement_score=50), random.Random(1), now=NOW
        )
        assert info.annual_yield_percent == pytest.approx(2.0)
        assert info.payout_frequency == PayoutFrequency.QUARTERLY
        assert info.next_estimated_amount == pytest.approx(65_000.0)

    def test_next_payout_within_thirty_days(self) -> None:
        info = calculate_dividend_yield(_make_instrument(), random.Random(2), now=NOW)
        assert NOW + timedelta(days=1) <= info.next_payout_date <= NOW + timedelta(days=30)


class TestTokenRules:
    def test_staking_rewards_follow_ai_score(self) -> None:
        assert get_token_vesting_rules(_make_instrument(ai_score=0)).investor_staking_rewards_pct == 3.0
        assert get_token_vesting_rules(_make_instrument(ai_score=100)).investor_staking_rewards_pct == 8.0

    def test_vesting_constants(self) -> None:
        rules = get_token_vesting_rules(_make_instrument())
        assert rules.creator_initial_unlock_pct == 20
        assert rules.creator_vesting_months == 24

    def test_buyback_is_half_initial_price(self) -> None:
        rules = get_liquidation_rules(_make_instrument(initial_price=18.75))
        assert rules.token_buyback_price == pytest.approx(9.38, abs=0.01)
        assert rules.inactivity_threshold_days == 180

    def test_valuation_factor_weights_sum_to_one(self) -> None:
        weights = get_valuation_factors(_make_instrument())
        assert list(weights) == ["Engagement Rate", "Market Sentiment", "AI Score"]
        assert sum(weights.values()) == pytest.approx(1.0)


class TestCreatorValuation:
    def test_weighted_sum(self) -> None:
        metrics = CreatorMetrics(
            followers=1_000_000, engagement_rate=0.05, sponsorships=10,
            monthly_revenue=100_000, net_worth=1_000_000, press_mentions=50,
            stream_views=2_000_000, ticket_sales=1_000,
        )
        assert calculate_creator_valuation(metrics) == 432_000

    def test_zero_metrics(self) -> None:
        metrics = CreatorMetrics(0, 0.0, 0, 0.0, 0.0, 0, 0, 0)
        assert calculate_creator_valuation(metrics) == 0
