"""cm_feed endpoints.

GET  /feed/status      — generator state
POST /feed/connect     — start the timers (idempotent)
POST /feed/disconnect  — stop the timers (idempotent)
WS   /feed/ws          — every bus event, pushed as {"event", "data"}
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, WebSocket, WebSocketDisconnect

from src.cm_common.enums import MarketEvent
from src.cm_common.response import ApiResponse, success_response
from src.cm_feed.application.schemas import FeedEventOut, FeedStatusOut
from src.cm_gateway.dependencies import get_container, get_ws_container, request_id_of
from src.container import MarketContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feed", tags=["feed"])

Container = Annotated[MarketContainer, Depends(get_container)]

STREAM_QUEUE_SIZE = 256


@router.get("/status")
async def feed_status(request: Request, container: Container) -> ApiResponse:
    result = FeedStatusOut.from_generator(container.feed)
    return success_response(result.model_dump(), request_id_of(request))


@router.post("/connect")
async def connect_feed(request: Request, container: Container) -> ApiResponse:
    container.feed.connect()
    result = FeedStatusOut.from_generator(container.feed)
    return success_response(result.model_dump(), request_id_of(request))


@router.post("/disconnect")
async def disconnect_feed(request: Request, container: Container) -> ApiResponse:
    container.feed.disconnect()
    result = FeedStatusOut.from_generator(container.feed)
    return success_response(result.model_dump(), request_id_of(request))


def _enqueue(
    queue: asyncio.Queue[FeedEventOut], event: MarketEvent
) -> Callable[[object], None]:
    def handler(payload: object) -> None:
        if queue.full():
            # Slow client: drop the oldest event rather than block the bus
            queue.get_nowait()
        queue.put_nowait(FeedEventOut.from_payload(event, payload))

    return handler


@router.websocket("/ws")
async def feed_stream(
    websocket: WebSocket,
    container: Annotated[MarketContainer, Depends(get_ws_container)],
) -> None:
    await websocket.accept()
    queue: asyncio.Queue[FeedEventOut] = asyncio.Queue(maxsize=STREAM_QUEUE_SIZE)
    handlers = {event: _enqueue(queue, event) for event in MarketEvent}
    for event, handler in handlers.items():
        container.bus.on(event, handler)
    logger.info("Feed stream subscriber attached")

    try:
        while True:
            message = await queue.get()
            await websocket.send_json(message.model_dump(mode="json"))
    except WebSocketDisconnect:
        logger.info("Feed stream subscriber left")
    finally:
        for event, handler in handlers.items():
            container.bus.off(event, handler)
