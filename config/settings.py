from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Creator Token Market"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"

    # Randomness: None seeds from OS entropy; set an int for reproducible runs
    RANDOM_SEED: int | None = None

    # Feed generator timers (seconds, drawn uniformly per cycle)
    FEED_AUTOSTART: bool = True
    PRICE_TICK_MIN_S: float = 2.0
    PRICE_TICK_MAX_S: float = 5.0
    ORDERBOOK_MIN_S: float = 5.0
    ORDERBOOK_MAX_S: float = 10.0
    TRADE_MIN_S: float = 3.0
    TRADE_MAX_S: float = 8.0
    TRADE_PROBABILITY: float = 0.4
    PRICE_STEP_PCT: float = 0.01

    # Random-walk bounds (None = unbounded)
    PRICE_FLOOR: float | None = None
    PRICE_CEILING: float | None = None

    # Reconnect
    RECONNECT_INTERVAL_S: float = 3.0
    MAX_RECONNECT_ATTEMPTS: int = 5

    # Simulated API round-trip
    API_LATENCY_MIN_MS: int = 300
    API_LATENCY_MAX_MS: int = 800
    API_FAILURE_RATE: float = 0.0

    # Risk
    TRADE_TAPE_SIZE: int = 100
    MAX_CYCLE_LENGTH: int = 2


settings = Settings()
