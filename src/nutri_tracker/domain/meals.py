"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
DEFAULT_MEAL_TYPE = "snack"


@dataclass(frozen=True)
class NutrientTotals:
    """Summed nutrients for a meal or a group of meals."""

    calories: float = 0.0
    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        return NutrientTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbohydrates=self.carbohydrates + other.carbohydrates,
            fat=self.fat + other.fat,
        )


@dataclass(frozen=True)
class NewMeal:
    """Meal data ready to be persisted."""

    user_id: UUID
    food_name: str
    detected: list[str]
    meal_type: str
    totals: NutrientTotals
    date: datetime


@dataclass(frozen=True)
class MealRecord:
    """A persisted meal with its write-time nutrient totals."""

    id: UUID
    user_id: UUID
    food_name: str
    detected: list[str]
    meal_type: str
    calories: float
    protein: float
    carbohydrates: float
    fat: float
    date: datetime

    @property
    def totals(self) -> NutrientTotals:
        return NutrientTotals(
            calories=self.calories,
            protein=self.protein,
            carbohydrates=self.carbohydrates,
            fat=self.fat,
        )

    def to_json(self) -> dict[str, object]:
        """Serialize using the field names clients expect."""
        meal_id = str(self.id)
        return {
            "_id": meal_id,
            "id": meal_id,
            "userId": str(self.user_id),
            "foodName": self.food_name,
            "detected": list(self.detected),
            "mealType": self.meal_type,
            "calories": self.calories,
            "protein": self.protein,
            "carbohydrates": self.carbohydrates,
            "fat": self.fat,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class Pagination:
    total: int
    page: int
    limit: int
    pages: int


@dataclass(frozen=True)
class MealPage:
    """One page of a user's meal history."""

    meals: list[MealRecord]
    pagination: Pagination
