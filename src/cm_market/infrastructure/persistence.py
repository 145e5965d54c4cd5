"""In-memory InstrumentRepository.

The simulation owns its instruments for the lifetime of the process; there
is no database behind this layer. Seed data mirrors the launch catalogue of
the dashboard.
"""

from datetime import datetime, timezone

from src.cm_market.domain.models import Instrument


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def seed_instruments() -> list[Instrument]:
    """Fresh copies of the launch catalogue (callers may mutate prices)."""
    return [
        Instrument(
            id="emma-watson-ipo", symbol="EMW", creator_name="Emma Watson",
            current_price=24.82, initial_price=20.00,
            total_supply=1_000_000, available_supply=350_000,
            engagement_score=78, ai_score=85,
            revenue_usd=750_000, average_daily_volume=70_000,
            launched_at=_ts("2024-01-20T14:30:00"),
        ),
        Instrument(
            id="taylor-swift-ipo", symbol="TSWIFT", creator_name="Taylor Swift",
            current_price=31.25, initial_price=25.50,
            total_supply=1_500_000, available_supply=500_000,
            engagement_score=89, ai_score=92,
            revenue_usd=1_200_000, average_daily_volume=130_000,
            launched_at=_ts("2023-11-15T09:00:00"),
        ),
        Instrument(
            id="elon-musk-ipo", symbol="MUSK", creator_name="Elon Musk",
            current_price=28.50, initial_price=30.00,
            total_supply=2_000_000, available_supply=600_000,
            engagement_score=65, ai_score=78,
            revenue_usd=2_000_000, average_daily_volume=100_000,
            launched_at=_ts("2023-09-01T18:45:00"),
        ),
        Instrument(
            id="mr-beast-ipo", symbol="BEAST", creator_name="MrBeast",
            current_price=22.10, initial_price=18.75,
            total_supply=1_200_000, available_supply=400_000,
            engagement_score=95, ai_score=88,
            revenue_usd=900_000, average_daily_volume=90_000,
            launched_at=_ts("2024-02-10T12:00:00"),
        ),
        Instrument(
            id="ariana-grande-ipo", symbol="ARIANA", creator_name="Ariana Grande",
            current_price=26.75, initial_price=22.00,
            total_supply=1_300_000, available_supply=450_000,
            engagement_score=85, ai_score=90,
            revenue_usd=1_100_000, average_daily_volume=115_000,
            launched_at=_ts("2023-12-01T21:15:00"),
        ),
    ]


class InstrumentRepository:
    def __init__(self, instruments: list[Instrument] | None = None) -> None:
        self._instruments: dict[str, Instrument] = {}
        for instrument in seed_instruments() if instruments is None else instruments:
            self._instruments[instrument.id] = instrument

    def list_instruments(self) -> list[Instrument]:
        return list(self._instruments.values())

    def get_instrument(self, instrument_id: str) -> Instrument | None:
        return self._instruments.get(instrument_id)

    def add_instrument(self, instrument: Instrument) -> Instrument:
        self._instruments[instrument.id] = instrument
        return instrument
