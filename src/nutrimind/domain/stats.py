"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from nutrimind.domain.logs import Macros


@dataclass(frozen=True)
class DailyTotals:
    """Calorie, macro and micronutrient totals for one day."""

    day: date
    food_calories: float
    exercise_calories: float
    net_calories: float
    macros: Macros
    micros: dict[str, float]


@dataclass(frozen=True)
class MonthDay:
    """Calorie totals for one day of a monthly summary."""

    day: date
    food_calories: float
    exercise_calories: float
    net_calories: float


@dataclass(frozen=True)
class MonthlySummary:
    """Per-day calorie series and summary figures for a month."""

    year: int
    month: int
    days: list[MonthDay]
    total_consumed: float
    total_burned: float
    average_daily_intake: int


@dataclass(frozen=True)
class MetabolicProfile:
    """Basal metabolic rate and total daily energy expenditure in kcal."""

    bmr: int
    tdee: int


@dataclass(frozen=True)
class BmiReading:
    """Body mass index with its category."""

    value: float
    category: str
