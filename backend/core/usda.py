"""
USDA FoodData Central Integration
Handles food searches via the USDA API, bounded by the shared rate limiter
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from config import (
    USDA_API_KEY,
    USDA_BASE_URL,
    USDA_TIMEOUT,
    USDA_USER_AGENT,
    SEARCH_PAGE_SIZE
)
from core.models import Candidate, NutrientValue
from core.rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class UsdaError(Exception):
    """Base exception for USDA lookup errors"""
    pass


class RateLimitError(UsdaError):
    """Raised when the outbound request window is full"""
    pass


class APIError(UsdaError):
    """Raised for HTTP, network, timeout and payload errors"""
    pass


@dataclass(frozen=True)
class Unavailable:
    """The lookup produced nothing usable; callers should fall back"""
    reason: str


SearchResult = Union[list[Candidate], Unavailable]


def parse_search_response(data) -> list[Candidate]:
    """Convert a /foods/search payload to candidates, rejecting odd shapes"""
    if not isinstance(data, dict) or not isinstance(data.get("foods"), list):
        raise APIError("Unexpected USDA payload: missing 'foods' list")

    candidates = []
    for food in data["foods"]:
        if not isinstance(food, dict):
            raise APIError("Unexpected USDA payload: food entry is not an object")

        description = food.get("description")
        fdc_id = food.get("fdcId")
        if not isinstance(description, str) or not isinstance(fdc_id, int):
            raise APIError("Unexpected USDA payload: food entry without description/fdcId")

        raw_nutrients = food.get("foodNutrients") or []
        if not isinstance(raw_nutrients, list):
            raise APIError("Unexpected USDA payload: foodNutrients is not a list")

        nutrients = [NutrientValue.from_dict(n) for n in raw_nutrients if isinstance(n, dict)]
        candidates.append(Candidate(name=description, fdc_id=fdc_id, nutrients=nutrients))

    return candidates


# ============================================================================
# USDA API CLIENT
# ============================================================================

class UsdaClient:
    """Wrapper for USDA FoodData Central calls"""

    def __init__(
        self,
        rate_limiter: RateLimiter,
        api_key: str = USDA_API_KEY,
        base_url: str = USDA_BASE_URL,
        timeout: float = USDA_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.rate_limiter = rate_limiter
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def _add_api_key(self, params: dict) -> dict:
        """Add API key to request parameters"""
        params = params.copy()
        params["api_key"] = self.api_key
        return params

    async def _make_request(self, endpoint: str, params: dict) -> dict:
        """Make a single rate-limited GET request; raises UsdaError on failure"""
        if not self.rate_limiter.try_acquire():
            raise RateLimitError("Rate limit exceeded for USDA API")

        params = self._add_api_key(params)
        url = f"{self.base_url}{endpoint}"
        headers = {"User-Agent": USDA_USER_AGENT}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await asyncio.wait_for(
                    client.get(url, params=params, headers=headers),
                    timeout=self.timeout
                )
            response.raise_for_status()

        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise APIError(f"Request timed out after {self.timeout} seconds")
        except httpx.HTTPStatusError as e:
            raise APIError(f"HTTP error! status: {e.response.status_code}")
        except httpx.RequestError as e:
            raise APIError(f"Network error: {e}")
        except UnicodeEncodeError as e:
            raise APIError(f"Could not encode request: {e}")

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise APIError(f"Invalid JSON in response: {e}")

    async def search(self, query: str, limit: int = SEARCH_PAGE_SIZE) -> SearchResult:
        """
        Search foods by free text.

        Never raises: rate limiting, timeouts, HTTP and payload errors all
        come back as Unavailable so the caller can use the local table.
        """
        params = {"query": query, "pageSize": limit}

        try:
            data = await self._make_request("/foods/search", params)
            return parse_search_response(data)
        except UsdaError as e:
            logger.warning("USDA API error for %r: %s", query, e)
            return Unavailable(str(e))


__all__ = [
    "UsdaClient",
    "Unavailable",
    "SearchResult",
    "UsdaError",
    "RateLimitError",
    "APIError",
    "parse_search_response",
]
