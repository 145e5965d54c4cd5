"""Repository Protocol — dependency inversion for testability.

Unit tests inject a stub that conforms to this Protocol.
Infrastructure layer provides the in-memory implementation.
"""

from typing import Protocol

from src.cm_market.domain.models import Instrument


class InstrumentRepositoryProtocol(Protocol):
    def list_instruments(self) -> list[Instrument]: ...

    def get_instrument(self, instrument_id: str) -> Instrument | None: ...

    def add_instrument(self, instrument: Instrument) -> Instrument: ...
