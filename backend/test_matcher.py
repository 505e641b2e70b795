"""
End-to-end tests for the food matcher
Exercises validate -> search -> score -> fallback with a fake USDA service
"""

import asyncio

from core.database import FoodMoodStore
from core.matcher import FoodMatcher, build_matcher
from core.models import (
    LocalAnalysis,
    LocalOnly,
    NoGoodMatch,
    NotFound,
    Ranked,
    Rejected,
    UsdaNutrients,
)
from core.rate_limit import RateLimiter


def test_empty_query_is_rejected_without_lookup(matcher, usda):
    outcome = asyncio.run(matcher.find_matches(""))
    assert isinstance(outcome, Rejected)
    assert usda.requests == []


def test_non_food_query_is_rejected(matcher, usda):
    outcome = asyncio.run(matcher.find_matches("unicorn meat"))
    assert isinstance(outcome, Rejected)
    assert usda.requests == []


def test_exact_food_is_ranked(matcher, usda):
    usda.returns("Bananas, raw")

    outcome = asyncio.run(matcher.find_matches("Banana"))

    assert isinstance(outcome, Ranked)
    assert outcome.query == "banana"
    assert outcome.matches[0].name == "Bananas, raw"
    assert outcome.matches[0].confidence == 70
    assert usda.requests[0].url.params["pageSize"] == "5"


def test_typo_is_ranked_through_fuzzy_word_match(matcher, usda):
    usda.returns("Banana chips")

    outcome = asyncio.run(matcher.find_matches("bananna chips"))

    assert isinstance(outcome, Ranked)
    # 10 for the fuzzy "bananna" ~ "banana", 20 for "chips"
    assert outcome.matches[0].confidence == 30


def test_weak_candidates_give_no_good_match(matcher, usda):
    usda.returns("Bananas, raw", "Plantains, raw")

    outcome = asyncio.run(matcher.find_matches("bananna"))

    assert outcome == NoGoodMatch("bananna")


def test_at_most_three_matches_best_first(matcher, usda):
    usda.returns(
        "Milk, whole",
        "Milk, skim",
        "Milk, chocolate",
        "Babyfood, milk",
        "Cheese",
    )

    outcome = asyncio.run(matcher.find_matches("milk"))

    assert [m.name for m in outcome.matches] == ["Babyfood, milk", "Milk, whole", "Milk, skim"]


def test_unavailable_lookup_falls_back_to_local_table(matcher, usda):
    usda.fails_with(503)

    outcome = asyncio.run(matcher.find_matches(" Dark Chocolate "))

    assert outcome == LocalOnly("dark chocolate")


def test_empty_search_falls_back_to_local_table(matcher, usda):
    usda.returns()
    assert asyncio.run(matcher.find_matches("kimchi")) == LocalOnly("kimchi")


def test_malformed_nutrients_fall_back_instead_of_raising(matcher, usda):
    usda.foods = [{"fdcId": 1, "description": "Bananas, raw", "foodNutrients": 5}]

    assert asyncio.run(matcher.find_matches("banana")) == LocalOnly("banana")
    assert asyncio.run(matcher.find_matches("moon rock")) == NotFound("moon rock")
    assert isinstance(asyncio.run(matcher.get_mood_effects("banana")), LocalAnalysis)
    assert asyncio.run(matcher.health_check()).usda_connected is False


def test_unknown_food_is_not_found(matcher, usda):
    usda.fails_with(503)
    assert asyncio.run(matcher.find_matches("moon rock")) == NotFound("moon rock")


def test_concurrent_queries_respect_rate_limit(matcher, usda):
    usda.returns("Bananas, raw")

    async def run_all():
        return await asyncio.gather(*(matcher.find_matches("banana") for _ in range(15)))

    outcomes = asyncio.run(run_all())

    assert len(usda.requests) == 10
    assert sum(isinstance(o, Ranked) for o in outcomes) == 10
    assert sum(o == LocalOnly("banana") for o in outcomes) == 5


def test_rate_limited_query_recovers_after_window(matcher, usda, clock):
    usda.returns("Bananas, raw")
    for _ in range(10):
        asyncio.run(matcher.find_matches("banana"))

    assert asyncio.run(matcher.find_matches("banana")) == LocalOnly("banana")

    clock.advance(61)
    assert isinstance(asyncio.run(matcher.find_matches("banana")), Ranked)


def test_mood_effects_from_usda(matcher, usda):
    usda.returns("Bananas, raw", "Banana chips")

    outcome = asyncio.run(matcher.get_mood_effects("banana"))

    assert isinstance(outcome, UsdaNutrients)
    assert outcome.name == "Bananas, raw"
    assert outcome.fdc_id == 1000
    # zero-valued caffeine is dropped
    assert [n.name for n in outcome.nutrients] == ["Potassium, K", "Protein"]
    assert usda.requests[0].url.params["pageSize"] == "1"


def test_mood_effects_from_local_table(matcher, usda):
    usda.fails_with(500)

    outcome = asyncio.run(matcher.get_mood_effects("Banana"))

    assert isinstance(outcome, LocalAnalysis)
    assert outcome.key == "banana"
    assert outcome.record.mood_effects["happiness"] == "increased"
    assert outcome.to_dict()["neurotransmitters"]["serotonin"] == "increased"


def test_mood_effects_not_found(matcher, usda):
    usda.fails_with(500)
    assert asyncio.run(matcher.get_mood_effects("moon rock")) == NotFound("moon rock")


def test_mood_effects_rejects_bad_input(matcher):
    assert isinstance(asyncio.run(matcher.get_mood_effects("  ")), Rejected)


def test_health_check_connected(matcher, usda, store):
    usda.returns("Test")

    report = asyncio.run(matcher.health_check())

    assert report.status == "healthy"
    assert report.usda_connected is True
    assert report.local_food_count == len(store) == 22
    assert report.rate_limit_remaining == 9


def test_health_check_degraded(matcher, usda):
    usda.fails_with(502)
    report = asyncio.run(matcher.health_check())
    assert report.status == "degraded"
    assert report.usda_connected is False


def test_build_matcher_shares_one_limiter():
    limiter = RateLimiter()
    store = FoodMoodStore({})
    built = build_matcher(rate_limiter=limiter, store=store)
    assert isinstance(built, FoodMatcher)
    assert built.client.rate_limiter is limiter
    assert built.store is store
