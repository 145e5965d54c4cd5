"""Unified error codes and custom exceptions.

Error code ranges:
  3xxx: Instrument / valuation input
  4xxx: Order
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 3xxx: Instrument ---

class InstrumentNotFoundError(AppError):
    def __init__(self, instrument_id: str) -> None:
        super().__init__(3001, f"Instrument not found: {instrument_id}", 404)


class InvalidTimeframeError(AppError):
    def __init__(self, timeframe: str) -> None:
        super().__init__(3003, f"Unsupported prediction timeframe: {timeframe}", 422)


class InvalidModelTypeError(AppError):
    def __init__(self, model_type: str) -> None:
        super().__init__(3004, f"Unsupported valuation model: {model_type}", 422)


# --- 4xxx: Order ---

class OrderNotFoundError(AppError):
    def __init__(self, order_id: str) -> None:
        super().__init__(4004, f"Order not found: {order_id}", 404)


class OrderNotCancellableError(AppError):
    def __init__(self, order_id: str, status: str) -> None:
        super().__init__(4006, f"Order {order_id} in status {status} cannot be cancelled", 422)


class InvalidOrderTransitionError(AppError):
    def __init__(self, order_id: str, current: str, target: str) -> None:
        super().__init__(
            4007, f"Order {order_id} cannot move from {current} to {target}", 422
        )


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class UpstreamUnavailableError(AppError):
    def __init__(self, operation: str) -> None:
        super().__init__(9003, f"Upstream temporarily unavailable: {operation}", 503)
