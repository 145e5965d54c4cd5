"""Pydantic schemas for anomaly detection requests and results."""

from typing import Any

from pydantic import BaseModel, Field

from src.cm_common.enums import AnomalyType
from src.cm_market.application.schemas import TradeIn
from src.cm_risk.domain.models import Anomaly, AnomalyResult
from src.cm_risk.engine.severity import severity_info, suggested_action


class DetectAnomaliesRequest(BaseModel):
    trades: list[TradeIn] = Field(default_factory=list)


class AnomalyOut(BaseModel):
    type: AnomalyType
    confidence: int
    severity: int
    severity_label: str
    severity_color: str
    suggested_action: str
    description: str
    affected_metrics: dict[str, Any]
    timestamp: str

    @classmethod
    def from_domain(cls, a: Anomaly) -> "AnomalyOut":
        label, color = severity_info(a.severity)
        return cls(
            type=a.type,
            confidence=a.confidence,
            severity=a.severity,
            severity_label=label,
            severity_color=color,
            suggested_action=suggested_action(a),
            description=a.description,
            affected_metrics=a.affected_metrics,
            timestamp=a.timestamp.isoformat(),
        )


class AnomalyResultOut(BaseModel):
    instrument_id: str
    detected: bool
    anomalies: list[AnomalyOut]
    risk_score: int
    recommendations: list[str]
    trades_analyzed: int

    @classmethod
    def from_domain(
        cls, instrument_id: str, result: AnomalyResult, trades_analyzed: int
    ) -> "AnomalyResultOut":
        return cls(
            instrument_id=instrument_id,
            detected=result.detected,
            anomalies=[AnomalyOut.from_domain(a) for a in result.anomalies],
            risk_score=result.risk_score,
            recommendations=list(result.recommendations),
            trades_analyzed=trades_analyzed,
        )
