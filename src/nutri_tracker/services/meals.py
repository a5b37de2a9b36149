"""Meal logging service."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutri_tracker.domain.meals import (
    DEFAULT_MEAL_TYPE,
    MEAL_TYPES,
    MealPage,
    MealRecord,
    NewMeal,
    NutrientTotals,
    Pagination,
)
from nutri_tracker.errors import NotFound, ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(self, meal: NewMeal) -> MealRecord:
        """Persist a meal and return the stored record."""

    def list_meals(self, user_id: UUID, offset: int, limit: int) -> list[MealRecord]:
        """Return a slice of the user's meals, newest first."""

    def count_meals(self, user_id: UUID) -> int:
        """Return how many meals the user has."""

    def list_all_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return every meal of the user, newest first."""

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete the user's meal; return false when nothing matched."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MealService:
    """Service that validates, totals and persists meals."""

    repository: MealRepository
    clock: Callable[[], datetime] = field(default=_utc_now)

    def save_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_name: str | None,
        detected: object,
        nutrition: object,
        meal_type: str | None = None,
        date: datetime | None = None,
    ) -> MealRecord:
        """Sum the nutrition items and store the meal."""
        if not food_name or not str(food_name).strip():
            raise ValidationError(
                "Missing required fields: foodName, nutrition (must be array)"
            )
        if not isinstance(nutrition, list):
            raise ValidationError(
                "Missing required fields: foodName, nutrition (must be array)"
            )
        resolved_type = meal_type or DEFAULT_MEAL_TYPE
        if resolved_type not in MEAL_TYPES:
            raise ValidationError(
                f"Invalid mealType: must be one of {', '.join(MEAL_TYPES)}"
            )
        meal = self.repository.create_meal(
            NewMeal(
                user_id=user_id,
                food_name=str(food_name).strip(),
                detected=_parse_detected(detected),
                meal_type=resolved_type,
                totals=sum_nutrition(nutrition),
                date=_normalize_date(date) if date else self.clock(),
            )
        )
        logger.info(
            "Meal saved",
            extra={"user_id": str(user_id), "meal_id": str(meal.id)},
        )
        return meal

    def list_meals(self, user_id: UUID, page: object, limit: object) -> MealPage:
        """Return one page of the user's meals, newest first."""
        resolved_page = _parse_positive_int(page, DEFAULT_PAGE)
        resolved_limit = _parse_positive_int(limit, DEFAULT_LIMIT)
        offset = (resolved_page - 1) * resolved_limit
        meals = self.repository.list_meals(user_id, offset, resolved_limit)
        total = self.repository.count_meals(user_id)
        return MealPage(
            meals=meals,
            pagination=Pagination(
                total=total,
                page=resolved_page,
                limit=resolved_limit,
                pages=math.ceil(total / resolved_limit),
            ),
        )

    def list_all_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return all of the user's meals for client-side analytics."""
        return self.repository.list_all_meals(user_id)

    def delete_meal(self, user_id: UUID, meal_id: str | UUID) -> None:
        """Delete a meal owned by the user."""
        parsed = _parse_uuid(meal_id)
        if parsed is None or not self.repository.delete_meal(user_id, parsed):
            raise NotFound("Meal not found")
        logger.info(
            "Meal deleted", extra={"user_id": str(user_id), "meal_id": str(parsed)}
        )


def sum_nutrition(items: list[object]) -> NutrientTotals:
    """Sum nutrients across items; missing or non-numeric values count as zero."""
    total = NutrientTotals()
    for item in items:
        if not isinstance(item, dict):
            continue
        total = total + NutrientTotals(
            calories=to_number(item.get("calories")),
            protein=to_number(item.get("protein")),
            carbohydrates=to_number(item.get("carbohydrates")),
            fat=to_number(item.get("fat")),
        )
    return total


def _parse_detected(value: object) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError("detected must be an array")
    return [str(entry) for entry in value if entry is not None]


def _normalize_date(value: datetime) -> datetime:
    # Naive timestamps are read as server local time.
    if value.tzinfo is None:
        return value.astimezone()
    return value


def _parse_positive_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return default
    else:
        return default
    return parsed if parsed >= 1 else default


def _parse_uuid(value: object) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            return None
    return None


def to_number(value: object) -> float:
    """Coerce a JSON value to a finite float, falling back to zero."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else 0.0
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return 0.0
        return parsed if math.isfinite(parsed) else 0.0
    return 0.0
