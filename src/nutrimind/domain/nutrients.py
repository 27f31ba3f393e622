"""Canonical micronutrient definitions shared by prompts, storage and stats."""

from dataclasses import dataclass
from enum import Enum


class NutrientUnit(str, Enum):
    """Unit a micronutrient amount is expressed in."""

    GRAMS = "g"
    MILLIGRAMS = "mg"
    MICROGRAMS = "mcg"


@dataclass(frozen=True)
class Micronutrient:
    """Definition of a tracked micronutrient."""

    key: str
    label: str
    unit: NutrientUnit
    group: str


MICRONUTRIENTS: tuple[Micronutrient, ...] = (
    Micronutrient("fiber", "Fiber", NutrientUnit.GRAMS, "General"),
    Micronutrient("sodium", "Sodium", NutrientUnit.MILLIGRAMS, "General"),
    Micronutrient("vitamin_a", "Vitamin A", NutrientUnit.MICROGRAMS, "Vitamins"),
    Micronutrient("vitamin_c", "Vitamin C", NutrientUnit.MILLIGRAMS, "Vitamins"),
    Micronutrient("vitamin_d", "Vitamin D", NutrientUnit.MICROGRAMS, "Vitamins"),
    Micronutrient("vitamin_e", "Vitamin E", NutrientUnit.MILLIGRAMS, "Vitamins"),
    Micronutrient("vitamin_k", "Vitamin K", NutrientUnit.MICROGRAMS, "Vitamins"),
    Micronutrient("vitamin_b1", "B1 (Thiamin)", NutrientUnit.MILLIGRAMS, "B-Complex"),
    Micronutrient(
        "vitamin_b2", "B2 (Riboflavin)", NutrientUnit.MILLIGRAMS, "B-Complex"
    ),
    Micronutrient("vitamin_b3", "B3 (Niacin)", NutrientUnit.MILLIGRAMS, "B-Complex"),
    Micronutrient(
        "vitamin_b5", "B5 (Pantothenic)", NutrientUnit.MILLIGRAMS, "B-Complex"
    ),
    Micronutrient(
        "vitamin_b6", "B6 (Pyridoxine)", NutrientUnit.MILLIGRAMS, "B-Complex"
    ),
    Micronutrient("vitamin_b7", "B7 (Biotin)", NutrientUnit.MICROGRAMS, "B-Complex"),
    Micronutrient("vitamin_b9", "B9 (Folate)", NutrientUnit.MICROGRAMS, "B-Complex"),
    Micronutrient(
        "vitamin_b12", "B12 (Cobalamin)", NutrientUnit.MICROGRAMS, "B-Complex"
    ),
    Micronutrient("calcium", "Calcium", NutrientUnit.MILLIGRAMS, "Minerals"),
    Micronutrient("iron", "Iron", NutrientUnit.MILLIGRAMS, "Minerals"),
    Micronutrient("magnesium", "Magnesium", NutrientUnit.MILLIGRAMS, "Minerals"),
    Micronutrient("potassium", "Potassium", NutrientUnit.MILLIGRAMS, "Minerals"),
    Micronutrient("zinc", "Zinc", NutrientUnit.MILLIGRAMS, "Minerals"),
    Micronutrient("phosphorus", "Phosphorus", NutrientUnit.MILLIGRAMS, "Minerals"),
    Micronutrient("selenium", "Selenium", NutrientUnit.MICROGRAMS, "Minerals"),
    Micronutrient("copper", "Copper", NutrientUnit.MILLIGRAMS, "Minerals"),
    Micronutrient("manganese", "Manganese", NutrientUnit.MILLIGRAMS, "Minerals"),
)

MICRONUTRIENT_KEYS: tuple[str, ...] = tuple(m.key for m in MICRONUTRIENTS)

_LOOKUP_KEYS = {key.replace("_", "").lower(): key for key in MICRONUTRIENT_KEYS}


def zero_micros() -> dict[str, float]:
    """Return a fresh mapping with every micronutrient set to zero."""
    return dict.fromkeys(MICRONUTRIENT_KEYS, 0.0)


def canonical_key(raw_key: str) -> str | None:
    """Map ``vitaminB12``/``vitamin_b12`` style keys onto the canonical key."""
    return _LOOKUP_KEYS.get(raw_key.replace("_", "").lower())


def normalize_micros(raw: dict[str, object] | None) -> dict[str, float]:
    """Project an arbitrary mapping onto the canonical micronutrient keys.

    Unknown keys are dropped, missing keys default to zero and values that are
    not numbers count as zero.
    """
    micros = zero_micros()
    for raw_key, value in (raw or {}).items():
        key = canonical_key(str(raw_key))
        if key is None:
            continue
        micros[key] = _to_float(value)
    return micros


def nutrient_groups() -> dict[str, list[Micronutrient]]:
    """Return micronutrients grouped for display, in canonical order."""
    groups: dict[str, list[Micronutrient]] = {}
    for nutrient in MICRONUTRIENTS:
        groups.setdefault(nutrient.group, []).append(nutrient)
    return groups


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0
