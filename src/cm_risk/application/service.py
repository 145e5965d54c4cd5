"""RiskApplicationService — on-demand anomaly detection.

Stateless per call: reads an instrument snapshot and a trade window, never
mutates either. Without an explicit window, the instrument's rolling trade
tape is analysed.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from src.cm_common.datetime_utils import utc_now
from src.cm_common.errors import InstrumentNotFoundError
from src.cm_common.latency import SimulatedLatency
from src.cm_market.domain.models import Trade
from src.cm_market.domain.repository import InstrumentRepositoryProtocol
from src.cm_market.infrastructure.trade_tape import TradeTape
from src.cm_risk.application.schemas import AnomalyResultOut
from src.cm_risk.engine.anomaly import detect_anomalies

logger = logging.getLogger(__name__)


class RiskApplicationService:
    def __init__(
        self,
        repo: InstrumentRepositoryProtocol,
        tape: TradeTape,
        latency: SimulatedLatency,
        max_cycle_length: int = 2,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo = repo
        self._tape = tape
        self._latency = latency
        self._max_cycle_length = max_cycle_length
        self._clock = clock

    async def detect_anomalies(
        self, instrument_id: str, recent_trades: Sequence[Trade] | None = None
    ) -> AnomalyResultOut:
        await self._latency.round_trip("detect_anomalies")
        instrument = self._repo.get_instrument(instrument_id)
        if instrument is None:
            raise InstrumentNotFoundError(instrument_id)

        trades = list(recent_trades) if recent_trades else self._tape.recent(instrument.id)
        result = detect_anomalies(
            instrument, trades, now=self._clock(), max_cycle_length=self._max_cycle_length
        )
        for anomaly in result.high_severity:
            logger.warning(
                "High-severity anomaly on %s: %s sev=%d risk=%d: %s",
                instrument.symbol,
                anomaly.type.value,
                anomaly.severity,
                result.risk_score,
                anomaly.description,
            )
        return AnomalyResultOut.from_domain(instrument.id, result, len(trades))
