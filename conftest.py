import asyncio
from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from phonevalue.main import app
from phonevalue.models.device import DeviceQuery
from phonevalue.routes.deps import get_bonus_source, get_price_sources
from phonevalue.services.price_sources import PriceSource


class FakePriceSource(PriceSource):
    """In-memory source: returns a fixed price after an optional delay."""

    def __init__(self, name: str, price: Optional[float], delay: float = 0.0, error: Optional[Exception] = None):
        super().__init__()
        self.name = name
        self.price = price
        self.delay = delay
        self.error = error
        self.queries = []

    def build_url(self, query: DeviceQuery) -> str:
        return f"https://example.test/{self.name}"

    def extract_price_text(self, soup) -> Optional[str]:
        return None

    async def fetch_price(self, query: DeviceQuery) -> Optional[float]:
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.price


FIXED_BONUS = 10


@pytest.fixture
def fixed_bonus():
    return FIXED_BONUS


@pytest.fixture
def price_sources() -> Dict[str, FakePriceSource]:
    return {
        "cex": FakePriceSource("CEX", 100.0),
        "magpie": FakePriceSource("MusicMagpie", 80.0),
    }


@pytest.fixture
def override_dependencies(price_sources, fixed_bonus):
    app.dependency_overrides[get_price_sources] = lambda: (price_sources["cex"], price_sources["magpie"])
    app.dependency_overrides[get_bonus_source] = lambda: (lambda low, high: fixed_bonus)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_dependencies):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def async_client(override_dependencies):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def good_condition():
    return {
        "screen_condition": 4,
        "body_condition": 4,
        "fully_functional": True,
        "camera_works": True,
        "battery_health": True,
        "original_box": False,
        "charger_included": False,
    }
