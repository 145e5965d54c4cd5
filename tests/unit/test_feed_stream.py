import asyncio
from datetime import UTC, datetime

from src.cm_common.enums import ConnectionStatus, MarketEvent
from src.cm_feed.api.router import _enqueue
from src.cm_feed.application.schemas import FeedEventOut
from src.cm_feed.domain.events import ConnectionChanged, PriceUpdate

TS = datetime(2025, 6, 1, tzinfo=UTC)


class TestFeedEventOut:
    def test_dataclass_payload_is_json_ready(self) -> None:
        payload = PriceUpdate(
            instrument_id="emma-watson-ipo", symbol="EMW",
            old_price=24.82, new_price=24.9, timestamp=TS,
        )
        out = FeedEventOut.from_payload(MarketEvent.PRICE_UPDATE, payload)
        dumped = out.model_dump(mode="json")
        assert dumped["event"] == "price_update"
        assert dumped["data"]["new_price"] == 24.9
        assert dumped["data"]["timestamp"] == TS.isoformat()

    def test_enum_fields_serialised_by_value(self) -> None:
        payload = ConnectionChanged(status=ConnectionStatus.CONNECTED, timestamp=TS)
        out = FeedEventOut.from_payload(MarketEvent.CONNECTION, payload)
        assert out.data["status"] == "connected"


class TestStreamQueue:
    def test_full_queue_drops_oldest(self) -> None:
        queue: asyncio.Queue[FeedEventOut] = asyncio.Queue(maxsize=2)
        handler = _enqueue(queue, MarketEvent.CONNECTION)
        for status in (ConnectionStatus.CONNECTED, ConnectionStatus.DISCONNECTED,
                       ConnectionStatus.CONNECTED):
            handler(ConnectionChanged(status=status, timestamp=TS))

        statuses = [queue.get_nowait().data["status"] for _ in range(queue.qsize())]
        assert statuses == ["disconnected", "connected"]
