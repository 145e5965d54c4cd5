# src/cm_order/application/schemas.py
from pydantic import BaseModel, Field, model_validator

from src.cm_common.enums import OrderKind, OrderSide
from src.cm_market.application.schemas import OrderOut


class PlaceOrderRequest(BaseModel):
    instrument_id: str = Field(min_length=1)
    side: OrderSide
    kind: OrderKind = OrderKind.MARKET
    price: float | None = Field(default=None, gt=0)
    quantity: int = Field(gt=0, le=1_000_000)

    @model_validator(mode="after")
    def limit_needs_price(self) -> "PlaceOrderRequest":
        if self.kind == OrderKind.LIMIT and self.price is None:
            raise ValueError("limit orders require a price")
        return self


class CancelOrderResponse(BaseModel):
    order_id: str
    status: str


class OrderListResponse(BaseModel):
    items: list[OrderOut]
