"""
Food Matching
Validates a query, searches USDA, scores the candidates and falls back to
the local table when the search has nothing usable
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from config import APP_VERSION, MAX_KEY_NUTRIENTS, SEARCH_PAGE_SIZE
from core.database import FoodMoodStore, load_food_mood_store
from core.models import (
    HealthReport,
    LocalAnalysis,
    LocalOnly,
    MatchOutcome,
    MoodOutcome,
    NoGoodMatch,
    NotFound,
    Ranked,
    Rejected,
    UsdaNutrients,
    ValidationResult,
)
from core.rate_limit import RateLimiter
from core.scoring import rank_candidates
from core.usda import Unavailable, UsdaClient
from core.validation import validate_query

logger = logging.getLogger(__name__)


class FoodMatcher:
    """Entry point for food lookups; one instance per process"""

    def __init__(self, client: UsdaClient, store: FoodMoodStore):
        self.client = client
        self.store = store

    def validate(self, raw) -> ValidationResult:
        return validate_query(raw)

    async def find_matches(self, raw) -> MatchOutcome:
        """
        Find the best matches for a free-text food query.

        1. Validate and normalize the query
        2. Search USDA for candidates
        3. Score, filter and keep the top matches
        4. Fall back to the local table if USDA gave nothing usable
        """
        validation = validate_query(raw)
        if isinstance(validation, Rejected):
            return validation
        query = validation.normalized

        result = await self.client.search(query, SEARCH_PAGE_SIZE)

        if not isinstance(result, Unavailable) and result:
            matches = rank_candidates(query, result)
            if not matches:
                return NoGoodMatch(query)
            return Ranked(query, tuple(matches))

        if query not in self.store:
            return NotFound(query)

        logger.info("Using local table for %r", query)
        return LocalOnly(query)

    async def get_mood_effects(self, raw) -> MoodOutcome:
        """Nutrients for a confirmed food from USDA, else the local mood analysis"""
        validation = validate_query(raw)
        if isinstance(validation, Rejected):
            return validation
        query = validation.normalized

        result = await self.client.search(query, 1)

        if not isinstance(result, Unavailable) and result:
            food = result[0]
            return UsdaNutrients(
                name=food.name,
                fdc_id=food.fdc_id,
                nutrients=tuple(food.key_nutrients(MAX_KEY_NUTRIENTS))
            )

        record = self.store.get(query)
        if record is None:
            return NotFound(query)
        return LocalAnalysis(query, record)

    async def health_check(self) -> HealthReport:
        """Probe USDA connectivity; the probe uses one rate-limit slot"""
        probe = await self.client.search("test", 1)
        connected = not isinstance(probe, Unavailable)

        return HealthReport(
            status="healthy" if connected else "degraded",
            usda_connected=connected,
            local_food_count=len(self.store),
            rate_limit_remaining=self.client.rate_limiter.remaining(),
            version=APP_VERSION,
            timestamp=datetime.now(timezone.utc).isoformat()
        )


def build_matcher(
    rate_limiter: Optional[RateLimiter] = None,
    store: Optional[FoodMoodStore] = None
) -> FoodMatcher:
    """Wire a matcher with the default USDA client and local table"""
    if rate_limiter is None:
        rate_limiter = RateLimiter()
    if store is None:
        store = load_food_mood_store()
    return FoodMatcher(UsdaClient(rate_limiter), store)
