"""FastAPI dependencies — hand the composition root's services to routers.

There is no authentication; the acting user is read from `X-User-Id`
and defaults to the dashboard's single local user.
"""

from typing import Annotated

from fastapi import Header, Request, WebSocket

from src.container import MarketContainer

DEFAULT_USER_ID = "current-user"


def get_container(request: Request) -> MarketContainer:
    return request.app.state.container


def get_ws_container(websocket: WebSocket) -> MarketContainer:
    return websocket.app.state.container


def get_user_id(
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> str:
    return x_user_id or DEFAULT_USER_ID


def request_id_of(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)
