"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutri_tracker.domain.meals import MealRecord, NewMeal
from nutri_tracker.errors import InternalError
from nutri_tracker.services.meals import MealRepository

MEAL_COLUMNS = (
    "id, user_id, food_name, detected, meal_type, calories, protein, "
    "carbohydrates, fat, date"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal storage."""

    client: Client

    def create_meal(self, meal: NewMeal) -> MealRecord:
        """Insert a meal row and return the stored record."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(meal.user_id),
                    "food_name": meal.food_name,
                    "detected": meal.detected,
                    "meal_type": meal.meal_type,
                    "calories": meal.totals.calories,
                    "protein": meal.totals.protein,
                    "carbohydrates": meal.totals.carbohydrates,
                    "fat": meal.totals.fat,
                    "date": meal.date.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise InternalError(detail="Failed to create meal in Supabase")
        return parse_meal(response.data[0])

    def list_meals(self, user_id: UUID, offset: int, limit: int) -> list[MealRecord]:
        """Return a page of meals, newest first."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [parse_meal(row) for row in response.data or []]

    def count_meals(self, user_id: UUID) -> int:
        """Return the number of meals for a user."""
        response = (
            self.client.table("meals")
            .select("id", count="exact")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        return int(response.count or 0)

    def list_all_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return every meal for a user, newest first."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .execute()
        )
        return [parse_meal(row) for row in response.data or []]

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete a meal owned by the user."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def parse_meal(row: dict[str, object]) -> MealRecord:
    """Build a meal record from a ``meals`` row."""
    date_raw = row.get("date")
    date = (
        datetime.fromisoformat(date_raw)
        if isinstance(date_raw, str) and date_raw
        else datetime.fromtimestamp(0, tz=UTC)
    )
    detected = row.get("detected")
    if not isinstance(detected, list):
        detected = []
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_name=str(row.get("food_name", "")),
        detected=[str(label) for label in detected],
        meal_type=str(row.get("meal_type") or "snack"),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbohydrates=float(row.get("carbohydrates") or 0.0),
        fat=float(row.get("fat") or 0.0),
        date=date,
    )
