"""
Local Food Mood Table
Read-only fallback data used when the USDA lookup is unavailable
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from config import FOOD_MOOD_PATH
from core.models import FoodMoodRecord


class FoodMoodStore:
    """Immutable mapping of lower-case food name -> FoodMoodRecord"""

    def __init__(self, records: Mapping[str, FoodMoodRecord]):
        self._records = MappingProxyType(dict(records))

    def get(self, key: str) -> Optional[FoodMoodRecord]:
        return self._records.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    @classmethod
    def from_dict(cls, data: dict) -> "FoodMoodStore":
        return cls({
            name.lower(): FoodMoodRecord.from_dict(record)
            for name, record in data.items()
        })


def load_food_mood_store(path: Path = FOOD_MOOD_PATH) -> FoodMoodStore:
    """Load the local food mood table from JSON"""
    with open(path, "r", encoding="utf-8") as f:
        return FoodMoodStore.from_dict(json.load(f))
