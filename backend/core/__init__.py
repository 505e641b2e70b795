"""
Happy Food Core Module
Query validation, rate-limited USDA lookup and match scoring
"""

from core.validation import validate_query, normalize_query
from core.rate_limit import RateLimiter
from core.usda import UsdaClient, Unavailable
from core.scoring import score_match, rank_candidates
from core.database import FoodMoodStore, load_food_mood_store
from core.matcher import FoodMatcher, build_matcher

__all__ = [
    "validate_query",
    "normalize_query",
    "RateLimiter",
    "UsdaClient",
    "Unavailable",
    "score_match",
    "rank_candidates",
    "FoodMoodStore",
    "load_food_mood_store",
    "FoodMatcher",
    "build_matcher",
]
