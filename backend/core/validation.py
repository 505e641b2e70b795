"""
Query Validation
Rejects empty or clearly non-food queries before any lookup is made
"""

import re
from typing import Any

from core.models import Accepted, Rejected, ValidationResult


EMPTY_INPUT_MESSAGE = "Please provide a valid food name to search for."

NOT_FOOD_MESSAGE = (
    'Sorry, "{query}" doesn\'t appear to be a real food. Please try asking about '
    'actual foods like "banana", "apple", "chicken", "rice", etc.'
)

# Implausible keyword + qualifier. The bare keyword alone is allowed so
# names like "dragon fruit" still get through.
COMBINATION_PATTERNS = {
    "unicorn": ["food", "meat", "flesh"],
    "gargoyle": ["claws", "wings", "scales"],
    "dragon": ["claws", "wings", "scales", "blood"],
    "fairy": ["dust", "wings", "magic"],
    "blood": ["alone", "drink"],
    "flesh": ["alone", "raw"],
    "rock": ["alone", "hard"],
    "stone": ["alone", "hard"],
    "metal": ["alone", "hard"],
    "plastic": ["alone", "hard"],
    "glass": ["alone", "hard"],
    "wood": ["alone", "hard"],
}

# Never food, whatever the context
STANDALONE_TERMS = ["earwax", "hooves", "poop", "poo", "pee", "urine"]


def build_suspicious_patterns() -> list[re.Pattern]:
    """Compile the pattern tables into case-insensitive regexes"""
    patterns = [
        re.compile(rf"{keyword}\s+({'|'.join(qualifiers)})", re.IGNORECASE)
        for keyword, qualifiers in COMBINATION_PATTERNS.items()
    ]
    patterns.extend(
        re.compile(rf"\b{term}\b", re.IGNORECASE) for term in STANDALONE_TERMS
    )
    return patterns


SUSPICIOUS_PATTERNS = build_suspicious_patterns()


def normalize_query(text: str) -> str:
    """Trim and lowercase"""
    return text.strip().lower()


def is_suspicious(normalized: str) -> bool:
    return any(pattern.search(normalized) for pattern in SUSPICIOUS_PATTERNS)


def validate_query(raw: Any) -> ValidationResult:
    """Validate and normalize a free-text food query"""
    if not isinstance(raw, str) or not raw.strip():
        return Rejected(EMPTY_INPUT_MESSAGE)

    normalized = normalize_query(raw)

    if is_suspicious(normalized):
        return Rejected(NOT_FOOD_MESSAGE.format(query=raw))

    return Accepted(normalized)
