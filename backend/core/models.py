"""
Food Data Models
Defines candidates, scored matches, local records and the typed outcomes
returned by the matcher
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union


@dataclass
class NutrientValue:
    """A single nutrient reading from USDA FoodData Central"""
    name: str
    value: Optional[float] = None
    unit: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "unit": self.unit
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NutrientValue":
        return cls(
            name=data.get("nutrientName") or "",
            value=data.get("value"),
            unit=data.get("unitName") or ""
        )


@dataclass
class Candidate:
    """A food returned by the external search, before scoring"""
    name: str
    fdc_id: int
    nutrients: list[NutrientValue] = field(default_factory=list)

    def key_nutrients(self, limit: int) -> list[NutrientValue]:
        """Nutrients with a name and a non-zero value, first `limit` only"""
        return [n for n in self.nutrients if n.name and n.value][:limit]


@dataclass
class ScoredMatch:
    """Candidate with its match confidence (not capped at 100)"""
    name: str
    confidence: int
    fdc_id: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "confidence": self.confidence,
            "fdc_id": self.fdc_id
        }


@dataclass(frozen=True)
class FoodMoodRecord:
    """Curated nutrients, mood effects and neurotransmitter impact of a food"""
    nutrients: dict[str, Union[float, str]]
    mood_effects: dict[str, str]
    neurotransmitters: dict[str, str]

    def to_dict(self) -> dict:
        return {
            "nutrients": dict(self.nutrients),
            "mood_effects": dict(self.mood_effects),
            "neurotransmitters": dict(self.neurotransmitters)
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FoodMoodRecord":
        return cls(
            nutrients=dict(data.get("nutrients", {})),
            mood_effects=dict(data.get("moodEffects", {})),
            neurotransmitters=dict(data.get("neurotransmitters", {}))
        )


# ============================================================================
# OUTCOMES
# ============================================================================

@dataclass(frozen=True)
class Accepted:
    """Query passed validation; carries the normalized form"""
    normalized: str

    kind: ClassVar[str] = "accepted"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "normalized": self.normalized}


@dataclass(frozen=True)
class Rejected:
    """Query refused; message is safe to show to the user"""
    message: str

    kind: ClassVar[str] = "rejected"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class Ranked:
    """Best external matches, highest confidence first"""
    query: str
    matches: tuple[ScoredMatch, ...]

    kind: ClassVar[str] = "ranked"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "query": self.query,
            "matches": [m.to_dict() for m in self.matches]
        }


@dataclass(frozen=True)
class NoGoodMatch:
    """External search answered but nothing cleared the confidence threshold"""
    query: str

    kind: ClassVar[str] = "no_good_match"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "query": self.query}


@dataclass(frozen=True)
class LocalOnly:
    """External search unusable; the food exists in the local table"""
    key: str

    kind: ClassVar[str] = "local_only"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "key": self.key}


@dataclass(frozen=True)
class NotFound:
    """Well-formed query, found nowhere"""
    query: str

    kind: ClassVar[str] = "not_found"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "query": self.query}


@dataclass(frozen=True)
class UsdaNutrients:
    """Nutrient data for a confirmed food, from the external service"""
    name: str
    fdc_id: int
    nutrients: tuple[NutrientValue, ...]

    kind: ClassVar[str] = "usda_nutrients"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "name": self.name,
            "fdc_id": self.fdc_id,
            "nutrients": [n.to_dict() for n in self.nutrients]
        }


@dataclass(frozen=True)
class LocalAnalysis:
    """Full mood analysis for a confirmed food, from the local table"""
    key: str
    record: FoodMoodRecord

    kind: ClassVar[str] = "local_analysis"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "key": self.key, **self.record.to_dict()}


@dataclass
class HealthReport:
    """Service health snapshot"""
    status: str
    usda_connected: bool
    local_food_count: int
    rate_limit_remaining: int
    version: str
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "usda_connected": self.usda_connected,
            "local_food_count": self.local_food_count,
            "rate_limit_remaining": self.rate_limit_remaining,
            "version": self.version,
            "timestamp": self.timestamp
        }


ValidationResult = Union[Accepted, Rejected]
MatchOutcome = Union[Rejected, Ranked, NoGoodMatch, LocalOnly, NotFound]
MoodOutcome = Union[Rejected, UsdaNutrients, LocalAnalysis, NotFound]
