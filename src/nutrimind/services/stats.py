"""Daily and monthly aggregation of nutrition logs."""

import calendar
import math
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrimind.domain.goals import DailyGoals
from nutrimind.domain.logs import LogKind, Macros, NutritionEntry
from nutrimind.domain.nutrients import MICRONUTRIENT_KEYS, zero_micros
from nutrimind.domain.stats import DailyTotals, MonthDay, MonthlySummary


class LogReader(Protocol):
    """Read access to a user's nutrition logs."""

    def list_logs(self, user_id: UUID) -> list[NutritionEntry]:
        """Return every log entry for a user."""


@dataclass
class StatsService:
    """Service for computing day and month totals from stored logs."""

    repository: LogReader

    def get_day(self, user_id: UUID, day: date) -> DailyTotals:
        """Return totals for a calendar day."""
        return aggregate_day(day, self.repository.list_logs(user_id))

    def get_month(self, user_id: UUID, year: int, month: int) -> MonthlySummary:
        """Return the per-day series and summary for a calendar month."""
        return aggregate_month(year, month, self.repository.list_logs(user_id))


def aggregate_day(day: date, entries: list[NutritionEntry]) -> DailyTotals:
    """Fold the entries logged on ``day`` into calorie, macro and micro totals.

    Entries from other days are ignored. Calories are stored as positive
    magnitudes; exercise only subtracts when forming the net figure.
    """
    food_calories = 0.0
    exercise_calories = 0.0
    protein_g = carbs_g = fat_g = 0.0
    micros = zero_micros()
    for entry in entries:
        if entry.day != day:
            continue
        if entry.kind is LogKind.FOOD:
            food_calories += entry.calories
        elif entry.kind is LogKind.EXERCISE:
            exercise_calories += entry.calories
        protein_g += entry.macros.protein_g
        carbs_g += entry.macros.carbs_g
        fat_g += entry.macros.fat_g
        for key in MICRONUTRIENT_KEYS:
            micros[key] += entry.micros.get(key, 0.0)
    return DailyTotals(
        day=day,
        food_calories=food_calories,
        exercise_calories=exercise_calories,
        net_calories=food_calories - exercise_calories,
        macros=Macros(protein_g=protein_g, carbs_g=carbs_g, fat_g=fat_g),
        micros=micros,
    )


def aggregate_month(
    year: int, month: int, entries: list[NutritionEntry]
) -> MonthlySummary:
    """Summarise every calendar day of a month, including days without logs."""
    days_in_month = calendar.monthrange(year, month)[1]
    by_day: dict[date, list[NutritionEntry]] = {}
    for entry in entries:
        if entry.day.year == year and entry.day.month == month:
            by_day.setdefault(entry.day, []).append(entry)

    days = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        totals = aggregate_day(day, by_day.get(day, []))
        days.append(
            MonthDay(
                day=day,
                food_calories=totals.food_calories,
                exercise_calories=totals.exercise_calories,
                net_calories=totals.net_calories,
            )
        )

    total_consumed = sum(day.food_calories for day in days)
    total_burned = sum(day.exercise_calories for day in days)
    return MonthlySummary(
        year=year,
        month=month,
        days=days,
        total_consumed=total_consumed,
        total_burned=total_burned,
        average_daily_intake=round_half_up(total_consumed / days_in_month),
    )


def remaining_calories(totals: DailyTotals, goals: DailyGoals) -> float:
    """Return calories left for the day, never below zero."""
    return max(0.0, goals.calories - totals.net_calories)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)
