"""
Shared test fixtures: synthetic clock, fake USDA transport, wired matcher
"""

import httpx
import pytest

from core.database import load_food_mood_store
from core.matcher import FoodMatcher
from core.rate_limit import RateLimiter
from core.usda import UsdaClient


def food_entry(name: str, fdc_id: int) -> dict:
    return {
        "fdcId": fdc_id,
        "description": name,
        "dataType": "SR Legacy",
        "foodNutrients": [
            {"nutrientName": "Potassium, K", "value": 358.0, "unitName": "MG"},
            {"nutrientName": "Protein", "value": 1.09, "unitName": "G"},
            {"nutrientName": "Caffeine", "value": 0, "unitName": "MG"},
        ],
    }


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeUsda:
    """MockTransport handler that records requests and serves canned foods"""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.foods: list[dict] = []
        self.status = 200

    def returns(self, *names: str) -> "FakeUsda":
        self.foods = [food_entry(name, 1000 + i) for i, name in enumerate(names)]
        return self

    def fails_with(self, status: int) -> "FakeUsda":
        self.status = status
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status,
            json={"foods": self.foods, "totalHits": len(self.foods)}
        )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter(max_requests=10, window=60.0, clock=clock)


@pytest.fixture
def usda():
    return FakeUsda()


@pytest.fixture
def store():
    return load_food_mood_store()


@pytest.fixture
def make_client(limiter):
    def _make(handler, timeout: float = 10.0) -> UsdaClient:
        return UsdaClient(
            limiter,
            api_key="test-key",
            timeout=timeout,
            transport=httpx.MockTransport(handler)
        )
    return _make


@pytest.fixture
def matcher(make_client, usda, store):
    return FoodMatcher(make_client(usda), store)
