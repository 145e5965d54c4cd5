"""Global enums shared by the feed, risk and valuation modules."""

from enum import Enum


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderKind(str, Enum):
    MARKET = "market"
    LIMIT = "limit"


class OrderStatus(str, Enum):
    PENDING = "pending"
    OPEN = "open"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


class MarketEvent(str, Enum):
    """Event bus channels. Values double as the WebSocket event names."""
    CONNECTION = "connection"
    PRICE_UPDATE = "price_update"
    ORDERBOOK_UPDATE = "orderbook_update"
    TRADE_EXECUTED = "trade_executed"
    ORDER_UPDATED = "order_updated"


class ConnectionStatus(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class AnomalyType(str, Enum):
    UNUSUAL_VOLUME = "UNUSUAL_VOLUME"
    RAPID_PRICE_CHANGE = "RAPID_PRICE_CHANGE"
    WASH_TRADING = "WASH_TRADING"
    CIRCULAR_TRADING = "CIRCULAR_TRADING"


class Timeframe(str, Enum):
    H24 = "24h"
    D7 = "7d"
    D30 = "30d"
    D90 = "90d"


class ModelType(str, Enum):
    ENGAGEMENT = "engagement"
    SENTIMENT = "sentiment"
    GROWTH = "growth"
    CONSISTENCY = "consistency"
    REVENUE_WEIGHTED = "revenue_weighted"
    SOCIAL_WEIGHTED = "social_weighted"
    HYBRID = "hybrid"


class PredictionDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class PriceSignal(str, Enum):
    """Fine-grained prediction bucket; collapses onto PredictionDirection."""
    STRONG_UP = "strong_up"
    UP = "up"
    STRONG_DOWN = "strong_down"
    DOWN = "down"
    STABLE = "stable"
    VOLATILE = "volatile"


class SentimentTrend(str, Enum):
    VERY_POSITIVE = "very_positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    VERY_NEGATIVE = "very_negative"


class PayoutFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
