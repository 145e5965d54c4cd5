"""Unit tests for RiskApplicationService."""

import logging
from datetime import UTC, datetime

import pytest

from src.cm_common.enums import AnomalyType, OrderSide
from src.cm_common.errors import InstrumentNotFoundError
from src.cm_market.domain.models import Trade


def _trade(buyer: str, seller: str, instrument_id: str = "emma-watson-ipo") -> Trade:
    return Trade(
        id=f"{buyer}-{seller}", instrument_id=instrument_id, buyer_id=buyer,
        seller_id=seller, price=24.8, quantity=1, side=OrderSide.BUY,
        timestamp=datetime.now(UTC),
    )


class TestDetectAnomalies:
    @pytest.mark.asyncio
    async def test_falls_back_to_trade_tape(self, container) -> None:
        for trade in [_trade("a", "b")] * 4 + [_trade("c", "d")]:
            container.tape.record(trade)

        result = await container.risk_service.detect_anomalies("emma-watson-ipo")

        assert result.detected is True
        assert result.trades_analyzed == 5
        assert [a.type for a in result.anomalies] == [AnomalyType.WASH_TRADING]
        assert result.anomalies[0].severity_label == "Critical"
        assert result.anomalies[0].suggested_action == "Freeze trading"

    @pytest.mark.asyncio
    async def test_explicit_trades_override_tape(self, container) -> None:
        for trade in [_trade("a", "b")] * 5:
            container.tape.record(trade)
        explicit = [_trade("x", "y"), _trade("y", "x"), _trade("p", "q")]

        result = await container.risk_service.detect_anomalies("emma-watson-ipo", explicit)

        assert result.trades_analyzed == 3
        assert [a.type for a in result.anomalies] == [AnomalyType.CIRCULAR_TRADING]

    @pytest.mark.asyncio
    async def test_empty_tape_is_insufficient(self, container) -> None:
        result = await container.risk_service.detect_anomalies("elon-musk-ipo")
        assert result.detected is False
        assert result.risk_score == 0
        assert len(result.recommendations) == 1

    @pytest.mark.asyncio
    async def test_unknown_instrument(self, container) -> None:
        with pytest.raises(InstrumentNotFoundError):
            await container.risk_service.detect_anomalies("nobody")

    @pytest.mark.asyncio
    async def test_high_severity_logged(self, container, caplog) -> None:
        trades = [_trade("a", "b")] * 4 + [_trade("c", "d")]
        with caplog.at_level(logging.WARNING, logger="src.cm_risk.application.service"):
            await container.risk_service.detect_anomalies("emma-watson-ipo", trades)
        assert "WASH_TRADING" in caplog.text
