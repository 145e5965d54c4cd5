"""Domain models for cm_risk — results of a single detection pass."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.cm_common.enums import AnomalyType

HIGH_SEVERITY_THRESHOLD = 8


@dataclass(frozen=True)
class Anomaly:
    type: AnomalyType
    confidence: int  # 0-100
    severity: int  # 1-10
    description: str
    affected_metrics: dict[str, Any]
    timestamp: datetime


@dataclass
class AnomalyResult:
    """Recomputed on every call; never stored or mutated afterwards."""

    detected: bool
    anomalies: list[Anomaly] = field(default_factory=list)
    risk_score: int = 0  # 0-100
    recommendations: list[str] = field(default_factory=list)

    @property
    def high_severity(self) -> list[Anomaly]:
        return [a for a in self.anomalies if a.severity >= HIGH_SEVERITY_THRESHOLD]
