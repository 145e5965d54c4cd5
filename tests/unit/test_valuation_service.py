"""Unit tests for ValuationApplicationService."""

import pytest

from src.cm_common.enums import ModelType, Timeframe
from src.cm_common.errors import (
    InstrumentNotFoundError,
    InvalidModelTypeError,
    InvalidTimeframeError,
)
from src.cm_valuation.application.schemas import CreatorMetricsIn
from src.cm_valuation.application.service import parse_model_type, parse_timeframe


class TestParsing:
    def test_parse_timeframe(self) -> None:
        assert parse_timeframe("30d") == Timeframe.D30
        assert parse_timeframe(Timeframe.D7) == Timeframe.D7

    def test_parse_timeframe_rejects_unknown(self) -> None:
        with pytest.raises(InvalidTimeframeError):
            parse_timeframe("1y")

    def test_parse_model_type(self) -> None:
        assert parse_model_type("social_weighted") == ModelType.SOCIAL_WEIGHTED

    def test_parse_model_type_rejects_unknown(self) -> None:
        with pytest.raises(InvalidModelTypeError):
            parse_model_type("astrology")


class TestPrediction:
    @pytest.mark.asyncio
    async def test_prediction_shape(self, container) -> None:
        result = await container.valuation_service.predict_price_movement(
            "taylor-swift-ipo", "7d", "revenue_weighted"
        )
        assert result.instrument_id == "taylor-swift-ipo"
        assert result.timeframe == "7d"
        assert result.model_type == "revenue_weighted"
        assert 50 <= result.confidence <= 95
        assert 2 <= len(result.factors) <= 4
        assert result.target_price > 0

    @pytest.mark.asyncio
    async def test_defaults_to_hybrid_24h(self, container) -> None:
        result = await container.valuation_service.predict_price_movement("mr-beast-ipo")
        assert result.timeframe == "24h"
        assert result.model_type == "hybrid"

    @pytest.mark.asyncio
    async def test_bad_timeframe(self, container) -> None:
        with pytest.raises(InvalidTimeframeError):
            await container.valuation_service.predict_price_movement("mr-beast-ipo", "1y")

    @pytest.mark.asyncio
    async def test_unknown_instrument(self, container) -> None:
        with pytest.raises(InstrumentNotFoundError):
            await container.valuation_service.predict_price_movement("nobody")


class TestInsights:
    @pytest.mark.asyncio
    async def test_sentiment(self, container) -> None:
        result = await container.valuation_service.get_social_sentiment("ariana-grande-ipo")
        assert set(result.platforms) == {"twitter", "instagram", "youtube"}

    @pytest.mark.asyncio
    async def test_dividends(self, container) -> None:
        result = await container.valuation_service.get_dividend_info("taylor-swift-ipo")
        # ai 92, engagement 89: mean above 80
        assert result.payout_frequency == "monthly"
        assert result.annual_yield_percent > 0

    @pytest.mark.asyncio
    async def test_rules(self, container) -> None:
        vesting = await container.valuation_service.get_vesting_rules("elon-musk-ipo")
        liquidation = await container.valuation_service.get_liquidation_rules("elon-musk-ipo")
        assert vesting.investor_staking_rewards_pct == pytest.approx(6.9)
        assert liquidation.token_buyback_price == pytest.approx(15.0)

    @pytest.mark.asyncio
    async def test_factor_weights(self, container) -> None:
        result = await container.valuation_service.get_valuation_factors("emma-watson-ipo")
        assert result.factors == ["Engagement Rate", "Market Sentiment", "AI Score"]
        assert result.weights == [0.4, 0.3, 0.3]

    @pytest.mark.asyncio
    async def test_value_creator(self, container) -> None:
        metrics = CreatorMetricsIn(
            followers=200_000, engagement_rate=0.1, sponsorships=2, monthly_revenue=5_000,
            net_worth=0, press_mentions=0, stream_views=0, ticket_sales=0,
        )
        result = await container.valuation_service.value_creator(metrics)
        assert result.valuation_usd == 10_000 + 1_000 + 10_000 + 10_000
