"""
Match Confidence Scoring
Scores how well a candidate food name matches a user's query
"""

from config import FOOD_CATEGORY_WORDS, MIN_MATCH_CONFIDENCE, MAX_MATCHES
from core.models import Candidate, ScoredMatch

PHRASE_MATCH_POINTS = 50
WORD_MATCH_POINTS = 20
FUZZY_WORD_POINTS = 10
CATEGORY_BONUS_POINTS = 5

MIN_SEARCH_WORD_LENGTH = 3
MAX_WORD_DIFFERENCES = 2


def count_word_differences(word: str, other: str) -> int:
    """
    Positional mismatches over the shared prefix plus the length difference.

    Not an edit distance: an inserted letter shifts everything after it
    and counts as a mismatch at every later position.
    """
    differences = sum(1 for a, b in zip(word, other) if a != b)
    return differences + abs(len(word) - len(other))


def is_fuzzy_word_match(word: str, other: str) -> bool:
    """Allow up to 2 character differences for typos"""
    if abs(len(word) - len(other)) > MAX_WORD_DIFFERENCES:
        return False
    return count_word_differences(word, other) <= MAX_WORD_DIFFERENCES


def score_match(query: str, candidate_name: str) -> int:
    """
    Confidence that `candidate_name` is what `query` asked for.

    Both arguments are expected lower-cased. The score is not capped.
    """
    confidence = 0

    if query in candidate_name:
        confidence += PHRASE_MATCH_POINTS

    search_words = [w for w in query.split(" ") if len(w) >= MIN_SEARCH_WORD_LENGTH]
    candidate_words = candidate_name.split(" ")

    for word in search_words:
        if word in candidate_name:
            confidence += WORD_MATCH_POINTS
        elif any(is_fuzzy_word_match(word, cw) for cw in candidate_words):
            confidence += FUZZY_WORD_POINTS

    if any(category in candidate_name for category in FOOD_CATEGORY_WORDS):
        confidence += CATEGORY_BONUS_POINTS

    return confidence


def rank_candidates(
    query: str,
    candidates: list[Candidate],
    min_confidence: int = MIN_MATCH_CONFIDENCE,
    limit: int = MAX_MATCHES
) -> list[ScoredMatch]:
    """Score, drop weak matches and return the best few, highest first"""
    scored = [
        ScoredMatch(
            name=candidate.name,
            confidence=score_match(query, candidate.name.lower()),
            fdc_id=candidate.fdc_id
        )
        for candidate in candidates
    ]

    # sorted() is stable, so equal scores keep the search order
    kept = [match for match in scored if match.confidence >= min_confidence]
    kept = sorted(kept, key=lambda m: m.confidence, reverse=True)
    return kept[:limit]
