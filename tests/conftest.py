"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import Settings
from src.container import MarketContainer, build_container
from src.main import create_app


@pytest.fixture
def test_settings() -> Settings:
    """Seeded, zero-latency settings; the feed never starts on its own."""
    return Settings(
        RANDOM_SEED=42,
        FEED_AUTOSTART=False,
        API_LATENCY_MIN_MS=0,
        API_LATENCY_MAX_MS=0,
        API_FAILURE_RATE=0.0,
    )


@pytest.fixture
def container(test_settings: Settings) -> MarketContainer:
    return build_container(test_settings)


@pytest.fixture
async def client(container: MarketContainer) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=create_app(container))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await container.feed.shutdown()
