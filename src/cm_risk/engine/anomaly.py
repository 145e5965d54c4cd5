"""Anomaly detection over a window of recent trades.

Four independent checks each may append one anomaly and add to a shared
risk score (capped at 100):

  UNUSUAL_VOLUME      window volume vs. average daily volume
  RAPID_PRICE_CHANGE  high/low range of traded prices (>= 5 trades)
  WASH_TRADING        repeated trades between the same ordered pair
  CIRCULAR_TRADING    cycles in the buyer -> seller graph

Pure function of its inputs: no RNG, and the evaluation timestamp is
passed in by the caller.
"""

import math
from collections.abc import Sequence
from datetime import datetime

from src.cm_common.datetime_utils import utc_now
from src.cm_common.enums import AnomalyType
from src.cm_market.domain.models import Instrument, Trade
from src.cm_risk.domain.models import Anomaly, AnomalyResult
from src.cm_risk.engine.trade_graph import TradeGraph

MIN_TRADES = 3
MIN_TRADES_PRICE_CHECK = 5
VOLUME_RATIO_THRESHOLD = 3.0
PRICE_RANGE_THRESHOLD = 0.05
WASH_PAIR_MIN_TRADES = 3
WASH_RATIO_THRESHOLD = 0.2
HALT_RISK_THRESHOLD = 50
MAX_RISK = 100

INSUFFICIENT_DATA_MESSAGE = "Insufficient trading data for anomaly analysis"
NO_ANOMALY_MESSAGE = "No unusual activity detected; continue routine monitoring"
GENERIC_MESSAGE = "Keep monitoring trading activity for further irregularities"

_GUIDANCE: dict[AnomalyType, str] = {
    AnomalyType.WASH_TRADING: (
        "Review accounts trading repeatedly with the same counterparty"
    ),
    AnomalyType.CIRCULAR_TRADING: (
        "Investigate linked accounts trading back and forth without a real change of ownership"
    ),
    AnomalyType.UNUSUAL_VOLUME: (
        "Check for news or announcements that could explain the volume surge"
    ),
    AnomalyType.RAPID_PRICE_CHANGE: (
        "Watch price volatility closely and consider a temporary price band"
    ),
}


def _check_volume(
    instrument: Instrument, trades: Sequence[Trade], now: datetime
) -> Anomaly | None:
    if not instrument.average_daily_volume:
        return None
    total_volume = sum(t.quantity for t in trades)
    ratio = total_volume / instrument.average_daily_volume
    if ratio <= VOLUME_RATIO_THRESHOLD:
        return None
    return Anomaly(
        type=AnomalyType.UNUSUAL_VOLUME,
        confidence=min(95, 50 + int(ratio * 10)),
        severity=min(10, math.floor(ratio * 1.5)),
        description=(
            f"Trading volume is {ratio:.1f}x the average daily volume for {instrument.symbol}"
        ),
        affected_metrics={
            "volume": total_volume,
            "average_daily_volume": instrument.average_daily_volume,
            "volume_ratio": ratio,
        },
        timestamp=now,
    )


def _check_price_range(
    instrument: Instrument, trades: Sequence[Trade], now: datetime
) -> Anomaly | None:
    if len(trades) < MIN_TRADES_PRICE_CHECK:
        return None
    prices = [t.price for t in trades]
    low, high = min(prices), max(prices)
    if low <= 0:
        return None
    price_range = (high - low) / low
    if price_range <= PRICE_RANGE_THRESHOLD:
        return None
    return Anomaly(
        type=AnomalyType.RAPID_PRICE_CHANGE,
        confidence=min(95, 60 + int(price_range * 200)),
        severity=min(10, math.floor(price_range * 100)),
        description=(
            f"Price of {instrument.symbol} moved {price_range:.1%} across the last {len(trades)} trades"
        ),
        affected_metrics={"min_price": low, "max_price": high, "price_range": price_range},
        timestamp=now,
    )


def _check_wash_trading(
    instrument: Instrument, trades: Sequence[Trade], graph: TradeGraph, now: datetime
) -> Anomaly | None:
    suspicious = {
        pair: count
        for pair, count in graph.pair_counts().items()
        if count >= WASH_PAIR_MIN_TRADES
    }
    potential_wash_trades = sum(suspicious.values())
    ratio = potential_wash_trades / len(trades)
    if ratio <= WASH_RATIO_THRESHOLD:
        return None
    return Anomaly(
        type=AnomalyType.WASH_TRADING,
        confidence=min(95, 60 + int(ratio * 40)),
        severity=min(10, math.floor(ratio * 10) + 5),
        description=(
            f"{potential_wash_trades} of {len(trades)} {instrument.symbol} trades "
            f"repeat between the same counterparties"
        ),
        affected_metrics={
            "potential_wash_trades": potential_wash_trades,
            "total_trades": len(trades),
            "wash_ratio": ratio,
            "pairs": [f"{buyer}->{seller}" for buyer, seller in sorted(suspicious)],
        },
        timestamp=now,
    )


def _check_circular_trading(
    instrument: Instrument, graph: TradeGraph, max_cycle_length: int, now: datetime
) -> Anomaly | None:
    cycles = graph.find_cycles(max_length=max_cycle_length)
    if not cycles:
        return None
    count = len(cycles)
    participants = sorted({p for cycle in cycles for p in cycle})
    return Anomaly(
        type=AnomalyType.CIRCULAR_TRADING,
        confidence=min(95, 70 + count * 5),
        severity=min(10, 5 + count),
        description=(
            f"{count} circular trading pattern(s) detected among "
            f"{len(participants)} {instrument.symbol} accounts"
        ),
        affected_metrics={
            "cycle_count": count,
            "participants": participants,
            "cycles": [" -> ".join(cycle + (cycle[0],)) for cycle in cycles],
        },
        timestamp=now,
    )


_RISK_WEIGHTS: dict[AnomalyType, int] = {
    AnomalyType.UNUSUAL_VOLUME: 5,
    AnomalyType.RAPID_PRICE_CHANGE: 6,
    AnomalyType.WASH_TRADING: 8,
    AnomalyType.CIRCULAR_TRADING: 7,
}


def build_recommendations(
    instrument: Instrument, anomalies: Sequence[Anomaly], risk_score: int
) -> list[str]:
    """Never empty: halt advice, type guidance, or a generic monitoring note."""
    if not anomalies:
        return [NO_ANOMALY_MESSAGE]
    if risk_score >= HALT_RISK_THRESHOLD:
        return [
            f"Consider halting trading in {instrument.symbol} pending investigation",
            "Escalate flagged accounts to compliance review",
        ]
    recommendations: list[str] = []
    for anomaly in anomalies:
        guidance = _GUIDANCE.get(anomaly.type)
        if guidance and guidance not in recommendations:
            recommendations.append(guidance)
    return recommendations or [GENERIC_MESSAGE]


def detect_anomalies(
    instrument: Instrument,
    trades: Sequence[Trade],
    now: datetime | None = None,
    max_cycle_length: int = 2,
) -> AnomalyResult:
    if len(trades) < MIN_TRADES:
        return AnomalyResult(
            detected=False, anomalies=[], risk_score=0,
            recommendations=[INSUFFICIENT_DATA_MESSAGE],
        )

    now = now or utc_now()
    graph = TradeGraph.from_trades(trades)
    found = [
        _check_volume(instrument, trades, now),
        _check_price_range(instrument, trades, now),
        _check_wash_trading(instrument, trades, graph, now),
        _check_circular_trading(instrument, graph, max_cycle_length, now),
    ]
    anomalies = [a for a in found if a is not None]

    risk_score = min(MAX_RISK, sum(a.severity * _RISK_WEIGHTS[a.type] for a in anomalies))
    return AnomalyResult(
        detected=bool(anomalies),
        anomalies=anomalies,
        risk_score=risk_score,
        recommendations=build_recommendations(instrument, anomalies, risk_score),
    )
