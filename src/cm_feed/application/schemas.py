"""Pydantic schemas for feed control and the event stream."""

from dataclasses import asdict, is_dataclass
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from src.cm_common.enums import MarketEvent
from src.cm_feed.engine.generator import MarketFeedGenerator


class FeedStatusOut(BaseModel):
    connected: bool
    active_timers: int
    reconnect_attempts: int

    @classmethod
    def from_generator(cls, feed: MarketFeedGenerator) -> "FeedStatusOut":
        return cls(
            connected=feed.is_connected,
            active_timers=feed.active_timers,
            reconnect_attempts=feed.reconnect_attempts,
        )


class FeedEventOut(BaseModel):
    event: MarketEvent
    data: dict[str, Any]

    @classmethod
    def from_payload(cls, event: MarketEvent, payload: object) -> "FeedEventOut":
        data = asdict(payload) if is_dataclass(payload) else {"value": payload}
        return cls(event=event, data=jsonable_encoder(data))
