"""Tests for cm_common.enums."""

from src.cm_common.enums import (
    AnomalyType,
    MarketEvent,
    ModelType,
    OrderStatus,
    Timeframe,
)


class TestEnums:
    def test_timeframe_values(self) -> None:
        assert [t.value for t in Timeframe] == ["24h", "7d", "30d", "90d"]

    def test_model_types(self) -> None:
        assert len(ModelType) == 7
        assert ModelType("revenue_weighted") == ModelType.REVENUE_WEIGHTED

    def test_market_events_are_strings(self) -> None:
        assert MarketEvent.PRICE_UPDATE == "price_update"
        assert isinstance(MarketEvent.TRADE_EXECUTED.value, str)

    def test_anomaly_types(self) -> None:
        assert {a.value for a in AnomalyType} == {
            "UNUSUAL_VOLUME", "RAPID_PRICE_CHANGE", "WASH_TRADING", "CIRCULAR_TRADING",
        }

    def test_order_status(self) -> None:
        assert OrderStatus("open") is OrderStatus.OPEN
