"""EventBus — synchronous typed publish/subscribe.

Handlers run in registration order on the emitter's call stack, so they
must not block. A handler that raises is logged and skipped; delivery to
the remaining handlers continues.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from src.cm_common.enums import MarketEvent

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[MarketEvent, list[Handler]] = defaultdict(list)

    def on(self, event: MarketEvent, handler: Handler) -> None:
        self._handlers[event].append(handler)

    def off(self, event: MarketEvent, handler: Handler) -> None:
        """Remove the first registration of this handler; unknown handler is a no-op.

        Compared with `==` so a re-fetched bound method (`obj.method`) matches
        the one registered earlier.
        """
        handlers = self._handlers.get(event)
        if not handlers:
            return
        for i, registered in enumerate(handlers):
            if registered == handler:
                del handlers[i]
                return

    def emit(self, event: MarketEvent, payload: Any) -> int:
        """Deliver to every handler; returns how many completed without raising."""
        delivered = 0
        # Snapshot: handlers may subscribe/unsubscribe while we iterate
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(payload)
            except Exception:
                logger.exception("Event handler %r failed for %s", handler, event.value)
                continue
            delivered += 1
        return delivered

    def handler_count(self, event: MarketEvent) -> int:
        return len(self._handlers.get(event, ()))
