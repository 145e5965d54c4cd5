from datetime import UTC, datetime

import pytest

from src.cm_common.enums import AnomalyType, OrderSide
from src.cm_market.domain.models import Instrument, Trade
from src.cm_risk.engine.anomaly import (
    GENERIC_MESSAGE,
    INSUFFICIENT_DATA_MESSAGE,
    NO_ANOMALY_MESSAGE,
    build_recommendations,
    detect_anomalies,
)
from src.cm_risk.domain.models import Anomaly

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def _make_instrument(**kwargs) -> Instrument:
    defaults = dict(
        id="emma-watson-ipo", symbol="EMW", creator_name="Emma Watson",
        current_price=10.0, initial_price=10.0,
        total_supply=1_000_000, available_supply=350_000,
        engagement_score=78, ai_score=85,
        average_daily_volume=70_000,
    )
    defaults.update(kwargs)
    return Instrument(**defaults)


def _trade(buyer: str, seller: str, price: float = 10.0, quantity: int = 1) -> Trade:
    return Trade(
        id=f"{buyer}-{seller}-{price}-{quantity}", instrument_id="emma-watson-ipo",
        buyer_id=buyer, seller_id=seller, price=price, quantity=quantity,
        side=OrderSide.BUY, timestamp=NOW,
    )


def _distinct(n: int, **kwargs) -> list[Trade]:
    return [_trade(f"b{i}", f"s{i}", **kwargs) for i in range(n)]


def _types(result) -> set[AnomalyType]:
    return {a.type for a in result.anomalies}


class TestInsufficientData:
    @pytest.mark.parametrize("n", [0, 1, 2])
    def test_fewer_than_three_trades(self, n: int) -> None:
        result = detect_anomalies(_make_instrument(), _distinct(n), now=NOW)
        assert result.detected is False
        assert result.anomalies == []
        assert result.risk_score == 0
        assert result.recommendations == [INSUFFICIENT_DATA_MESSAGE]


class TestCleanWindow:
    def test_nothing_detected(self) -> None:
        result = detect_anomalies(_make_instrument(), _distinct(6), now=NOW)
        assert result.detected is False
        assert result.risk_score == 0
        assert result.recommendations == [NO_ANOMALY_MESSAGE]


class TestWashTrading:
    def test_repeated_pair_flagged(self) -> None:
        trades = [_trade("a", "b") for _ in range(4)] + [_trade("c", "d")]
        result = detect_anomalies(_make_instrument(), trades, now=NOW)

        assert _types(result) == {AnomalyType.WASH_TRADING}
        wash = result.anomalies[0]
        assert wash.affected_metrics["potential_wash_trades"] == 4
        assert wash.affected_metrics["pairs"] == ["a->b"]
        assert wash.severity == 10
        assert 0 <= wash.confidence <= 100
        assert result.risk_score == 80

    def test_two_repeats_not_enough(self) -> None:
        trades = [_trade("a", "b"), _trade("a", "b")] + _distinct(3)
        result = detect_anomalies(_make_instrument(), trades, now=NOW)
        assert AnomalyType.WASH_TRADING not in _types(result)

    def test_low_ratio_not_flagged(self) -> None:
        trades = [_trade("a", "b") for _ in range(3)] + _distinct(17)
        result = detect_anomalies(_make_instrument(), trades, now=NOW)
        assert AnomalyType.WASH_TRADING not in _types(result)


class TestCircularTrading:
    def test_back_and_forth_flagged(self) -> None:
        trades = [_trade("a", "b"), _trade("b", "a"), _trade("c", "d")]
        result = detect_anomalies(_make_instrument(), trades, now=NOW)

        assert _types(result) == {AnomalyType.CIRCULAR_TRADING}
        circular = result.anomalies[0]
        assert circular.affected_metrics["cycle_count"] == 1
        assert circular.affected_metrics["participants"] == ["a", "b"]
        assert result.risk_score == circular.severity * 7

    def test_three_party_loop_needs_longer_search(self) -> None:
        trades = [_trade("a", "b"), _trade("b", "c"), _trade("c", "a")]
        short = detect_anomalies(_make_instrument(), trades, now=NOW)
        long = detect_anomalies(_make_instrument(), trades, now=NOW, max_cycle_length=3)
        assert AnomalyType.CIRCULAR_TRADING not in _types(short)
        assert AnomalyType.CIRCULAR_TRADING in _types(long)


class TestUnusualVolume:
    def test_volume_over_three_times_adv(self) -> None:
        trades = _distinct(3, quantity=200)
        result = detect_anomalies(_make_instrument(average_daily_volume=100), trades, now=NOW)

        assert _types(result) == {AnomalyType.UNUSUAL_VOLUME}
        anomaly = result.anomalies[0]
        assert anomaly.affected_metrics["volume_ratio"] == pytest.approx(6.0)
        assert anomaly.severity == 9

    def test_without_adv_is_skipped(self) -> None:
        trades = _distinct(3, quantity=10_000)
        result = detect_anomalies(_make_instrument(average_daily_volume=None), trades, now=NOW)
        assert AnomalyType.UNUSUAL_VOLUME not in _types(result)


class TestRapidPriceChange:
    def test_wide_range_flagged(self) -> None:
        trades = [_trade(f"b{i}", f"s{i}", price=p) for i, p in enumerate([10, 10.5, 11, 10, 10])]
        result = detect_anomalies(_make_instrument(), trades, now=NOW)

        assert _types(result) == {AnomalyType.RAPID_PRICE_CHANGE}
        metrics = result.anomalies[0].affected_metrics
        assert metrics["min_price"] == 10
        assert metrics["max_price"] == 11

    def test_needs_five_trades(self) -> None:
        trades = [_trade(f"b{i}", f"s{i}", price=p) for i, p in enumerate([10, 12, 10, 12])]
        result = detect_anomalies(_make_instrument(), trades, now=NOW)
        assert AnomalyType.RAPID_PRICE_CHANGE not in _types(result)

    def test_small_range_ignored(self) -> None:
        trades = [_trade(f"b{i}", f"s{i}", price=p) for i, p in enumerate([10, 10.1, 10.2, 10, 10])]
        result = detect_anomalies(_make_instrument(), trades, now=NOW)
        assert result.detected is False


class TestRiskScore:
    def test_capped_at_100(self) -> None:
        trades = [_trade("a", "b", quantity=500) for _ in range(4)] + [_trade("c", "d")]
        result = detect_anomalies(_make_instrument(average_daily_volume=100), trades, now=NOW)
        assert {AnomalyType.WASH_TRADING, AnomalyType.UNUSUAL_VOLUME} <= _types(result)
        assert result.risk_score == 100

    def test_pure_function(self) -> None:
        trades = [_trade("a", "b"), _trade("b", "a"), _trade("a", "b")]
        inst = _make_instrument()
        assert detect_anomalies(inst, trades, now=NOW) == detect_anomalies(inst, trades, now=NOW)


class TestRecommendations:
    def _anomaly(self, type_: AnomalyType, severity: int = 3) -> Anomaly:
        return Anomaly(
            type=type_, confidence=70, severity=severity, description="",
            affected_metrics={}, timestamp=NOW,
        )

    def test_high_risk_suggests_halt(self) -> None:
        recs = build_recommendations(
            _make_instrument(), [self._anomaly(AnomalyType.WASH_TRADING)], risk_score=80
        )
        assert any("halting" in r for r in recs)
        assert len(recs) == 2

    def test_guidance_deduplicated(self) -> None:
        anomalies = [self._anomaly(AnomalyType.UNUSUAL_VOLUME)] * 2
        recs = build_recommendations(_make_instrument(), anomalies, risk_score=10)
        assert len(recs) == 1
        assert recs != [GENERIC_MESSAGE]

    def test_never_empty(self) -> None:
        for anomalies in ([], [self._anomaly(AnomalyType.RAPID_PRICE_CHANGE)]):
            assert build_recommendations(_make_instrument(), anomalies, risk_score=5)
