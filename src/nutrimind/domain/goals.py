"""Daily nutrition targets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyGoals:
    """Targets used as denominators for progress displays."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    micros: dict[str, float]


DEFAULT_GOALS = DailyGoals(
    calories=2000,
    protein_g=150,
    carbs_g=200,
    fat_g=65,
    micros={
        "fiber": 30,
        "sodium": 2300,
        "vitamin_a": 900,
        "vitamin_c": 90,
        "vitamin_d": 15,
        "vitamin_e": 15,
        "vitamin_k": 120,
        "vitamin_b1": 1.2,
        "vitamin_b2": 1.3,
        "vitamin_b3": 16,
        "vitamin_b5": 5,
        "vitamin_b6": 1.3,
        "vitamin_b7": 30,
        "vitamin_b9": 400,
        "vitamin_b12": 2.4,
        "calcium": 1000,
        # women's RDA; men need 8 mg
        "iron": 18,
        "magnesium": 400,
        "potassium": 3400,
        "zinc": 11,
        "phosphorus": 700,
        "selenium": 55,
        "copper": 0.9,
        "manganese": 2.3,
    },
)


def progress_percent(current: float, target: float) -> float:
    """Return progress towards a target, capped at 100."""
    if target <= 0:
        return 0.0
    return min(100.0, current / target * 100)
