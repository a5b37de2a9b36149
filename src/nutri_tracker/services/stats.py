"""Statistics service for daily and monthly meal summaries."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from nutri_tracker.domain.meals import MealRecord, NutrientTotals
from nutri_tracker.domain.stats import (
    DailySummary,
    DayTotals,
    MonthlySummary,
    MonthlyTotals,
)
from nutri_tracker.errors import ValidationError

DECEMBER = 12


class StatsRepository(Protocol):
    """Persistence interface for meal statistics."""

    def list_meals_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals with start <= date <= end, newest first."""


@dataclass
class StatsService:
    """Aggregates meals by calendar day in the configured timezone.

    When ``timezone_name`` is unset the server's local time is used, which
    matches how meal timestamps without an offset are interpreted on save.
    """

    repository: StatsRepository
    timezone_name: str | None = None

    def daily_summary(self, user_id: UUID, day: date | str) -> DailySummary:
        """Return the meals logged on ``day`` and their summed nutrients."""
        resolved = _parse_day(day)
        start = self._localize(datetime.combine(resolved, time.min))
        end = self._localize(datetime.combine(resolved, time.max))
        meals = self.repository.list_meals_between(user_id, start, end)
        totals = NutrientTotals()
        for meal in meals:
            totals = totals + meal.totals
        return DailySummary(day=resolved, meals=meals, totals=totals)

    def monthly_summary(
        self, user_id: UUID, year: int | str, month: int | str
    ) -> MonthlySummary:
        """Return per-day totals for a month and the month-wide averages."""
        resolved_year, resolved_month = _parse_month(year, month)
        last_day = calendar.monthrange(resolved_year, resolved_month)[1]
        start = self._localize(
            datetime.combine(date(resolved_year, resolved_month, 1), time.min)
        )
        end = self._localize(
            datetime.combine(date(resolved_year, resolved_month, last_day), time.max)
        )
        meals = self.repository.list_meals_between(user_id, start, end)

        daily: dict[date, DayTotals] = {}
        for meal in meals:
            day = self._to_local(meal.date).date()
            if day.year != resolved_year or day.month != resolved_month:
                continue
            entry = daily.setdefault(day, DayTotals())
            entry.calories += meal.calories
            entry.protein += meal.protein
            entry.carbohydrates += meal.carbohydrates
            entry.fat += meal.fat
            entry.meal_count += 1

        total_calories = sum(entry.calories for entry in daily.values())
        # Averaged over days that have meals, not over days in the month.
        avg_calories = total_calories / len(daily) if daily else 0.0
        return MonthlySummary(
            year=resolved_year,
            month=resolved_month,
            daily=dict(sorted(daily.items())),
            totals=MonthlyTotals(
                total_calories=total_calories,
                total_protein=sum(entry.protein for entry in daily.values()),
                total_carbohydrates=sum(
                    entry.carbohydrates for entry in daily.values()
                ),
                total_fat=sum(entry.fat for entry in daily.values()),
                avg_calories=avg_calories,
            ),
        )

    def _zone(self) -> tzinfo | None:
        return ZoneInfo(self.timezone_name) if self.timezone_name else None

    def _localize(self, naive: datetime) -> datetime:
        zone = self._zone()
        if zone is None:
            return naive.astimezone()
        return naive.replace(tzinfo=zone)

    def _to_local(self, value: datetime) -> datetime:
        zone = self._zone()
        if zone is None:
            return value.astimezone()
        return value.astimezone(zone)


def _parse_day(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    try:
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise ValidationError("Invalid date") from exc


def _parse_month(year: int | str, month: int | str) -> tuple[int, int]:
    try:
        resolved_year = int(year)
        resolved_month = int(month)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Invalid year or month") from exc
    if not 1 <= resolved_month <= DECEMBER or not 1 <= resolved_year <= 9999:
        raise ValidationError("Invalid year or month")
    return resolved_year, resolved_month
