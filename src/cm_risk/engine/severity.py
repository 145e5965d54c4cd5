"""Severity banding and suggested actions for risk-center consumers."""

from src.cm_common.enums import AnomalyType
from src.cm_risk.domain.models import Anomaly


def severity_info(severity: int) -> tuple[str, str]:
    """(label, colour) for a 1-10 severity."""
    if severity >= 9:
        return "Critical", "red"
    if severity >= 7:
        return "High", "orange"
    if severity >= 4:
        return "Medium", "yellow"
    return "Low", "green"


def suggested_action(anomaly: Anomaly) -> str:
    if anomaly.severity >= 9:
        return "Freeze trading"
    if anomaly.severity >= 7:
        if anomaly.type in (AnomalyType.WASH_TRADING, AnomalyType.CIRCULAR_TRADING):
            return "Alert compliance team"
        return "Alert market operations"
    return "Monitor"
