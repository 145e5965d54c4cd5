"""Simulated network round-trip for the in-process API services.

Keeps the service layer async so a real backend can be substituted without
changing call sites. A non-zero failure rate exercises the transient error
path consumers must already handle.
"""

import asyncio
import logging

from src.cm_common.errors import UpstreamUnavailableError
from src.cm_common.random_source import RandomSource

logger = logging.getLogger(__name__)


class SimulatedLatency:
    def __init__(
        self,
        rng: RandomSource,
        min_ms: int = 300,
        max_ms: int = 800,
        failure_rate: float = 0.0,
    ) -> None:
        if min_ms < 0 or max_ms < min_ms:
            raise ValueError(f"invalid latency window [{min_ms}, {max_ms}]ms")
        self._rng = rng
        self._min_ms = min_ms
        self._max_ms = max_ms
        self._failure_rate = failure_rate

    async def round_trip(self, operation: str) -> None:
        """Sleep for the simulated latency; raise UpstreamUnavailableError on a failure draw."""
        if self._max_ms > 0:
            delay_ms = self._rng.uniform(self._min_ms, self._max_ms)
            await asyncio.sleep(delay_ms / 1000)
        if self._failure_rate > 0 and self._rng.random() < self._failure_rate:
            logger.warning("Simulated upstream failure: op=%s", operation)
            raise UpstreamUnavailableError(operation)
