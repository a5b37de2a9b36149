"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from nutri_tracker.domain.meals import MealRecord, NutrientTotals


@dataclass(frozen=True)
class DailySummary:
    """Meals and summed nutrients for one calendar day."""

    day: date
    meals: list[MealRecord]
    totals: NutrientTotals


@dataclass
class DayTotals:
    """Per-day accumulator used by the monthly view."""

    calories: float = 0.0
    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0
    meal_count: int = 0


@dataclass(frozen=True)
class MonthlyTotals:
    total_calories: float
    total_protein: float
    total_carbohydrates: float
    total_fat: float
    avg_calories: float


@dataclass(frozen=True)
class MonthlySummary:
    """Per-day totals for a month plus month-wide totals."""

    year: int
    month: int
    daily: dict[date, DayTotals]
    totals: MonthlyTotals
