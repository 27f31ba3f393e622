"""Domain models for nutrition and weight logs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class LogKind(str, Enum):
    """Whether a log entry adds (food) or burns (exercise) calories."""

    FOOD = "FOOD"
    EXERCISE = "EXERCISE"


@dataclass(frozen=True)
class Macros:
    """Macronutrient amounts in grams."""

    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0


@dataclass(frozen=True)
class EntryCandidate:
    """A single recognised item, before it is stamped and stored."""

    kind: LogKind
    description: str
    calories: float
    macros: Macros
    micros: dict[str, float]
    confidence: float | None
    source_urls: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NutritionEntry:
    """A stored food or exercise entry for a calendar day."""

    id: UUID
    user_id: UUID
    day: date
    created_at: datetime
    kind: LogKind
    description: str
    calories: float
    macros: Macros
    micros: dict[str, float]
    source_urls: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WeightSample:
    """Body weight measured on a calendar day."""

    id: UUID
    user_id: UUID
    day: date
    weight_kg: float
