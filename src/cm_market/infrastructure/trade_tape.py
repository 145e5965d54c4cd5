"""Rolling per-instrument trade window.

Subscribed to TRADE_EXECUTED on the event bus; supplies the default window
for anomaly detection when a caller does not pass its own trades.
"""

from collections import defaultdict, deque

from src.cm_market.domain.models import Trade


class TradeTape:
    def __init__(self, maxlen: int = 100) -> None:
        if maxlen < 1:
            raise ValueError("maxlen must be >= 1")
        self._maxlen = maxlen
        self._windows: dict[str, deque[Trade]] = defaultdict(lambda: deque(maxlen=self._maxlen))

    def record(self, trade: Trade) -> None:
        self._windows[trade.instrument_id].append(trade)

    def on_trade_executed(self, payload: object) -> None:
        """Bus handler: accepts a TradeExecuted event (anything with a `.trade`)."""
        trade = getattr(payload, "trade", None)
        if isinstance(trade, Trade):
            self.record(trade)

    def recent(self, instrument_id: str, limit: int | None = None) -> list[Trade]:
        """Oldest-first copy of the window, optionally only the last `limit` trades."""
        window = list(self._windows.get(instrument_id, ()))
        if limit is not None:
            window = window[-limit:] if limit > 0 else []
        return window
