"""Meal endpoints: prediction, saving, history and summaries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, File, Request, UploadFile

from nutri_tracker.api.models import SaveMealRequest
from nutri_tracker.api.security import require_user
from nutri_tracker.domain.models import TokenClaims  # noqa: TC001
from nutri_tracker.errors import ValidationError

if TYPE_CHECKING:
    from nutri_tracker.containers import AppContainer
    from nutri_tracker.domain.meals import NutrientTotals
    from nutri_tracker.domain.stats import MonthlySummary

router = APIRouter(prefix="/api/meals", tags=["meals"])
logger = logging.getLogger(__name__)


@router.post("/add")
async def add_meal_image(
    request: Request, image: UploadFile | None = File(default=None)
) -> dict[str, object]:
    """Forward an uploaded photo to the prediction service."""
    container: AppContainer = request.app.state.container
    if image is None:
        raise ValidationError("No image provided")
    max_bytes = container.prediction_service.max_upload_bytes
    try:
        if image.size is not None and image.size > max_bytes:
            raise ValidationError("Image is too large")
        # Read at most one byte past the limit.
        content = await image.read(max_bytes + 1)
    finally:
        await image.close()
    if len(content) > max_bytes:
        raise ValidationError("Image is too large")
    logger.info(
        "Image received",
        extra={"upload_filename": image.filename, "size": len(content)},
    )
    result = await container.prediction_service.predict(
        content, image.filename or "upload", image.content_type
    )
    return {
        "success": True,
        "message": "Image analyzed successfully",
        "prediction": result.to_response(),
    }


@router.post("/save")
def save_meal(
    payload: SaveMealRequest,
    request: Request,
    claims: TokenClaims = Depends(require_user),
) -> dict[str, object]:
    """Persist a meal with nutrient totals summed from its items."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.save_meal(
        user_id=claims.user_id,
        food_name=payload.foodName,
        detected=payload.detected,
        nutrition=payload.nutrition,
        meal_type=payload.mealType,
        date=payload.date,
    )
    return {
        "success": True,
        "message": "Meal saved successfully",
        "meal": meal.to_json(),
    }


@router.get("/history")
def meal_history(
    request: Request,
    page: str | None = None,
    limit: str | None = None,
    claims: TokenClaims = Depends(require_user),
) -> dict[str, object]:
    """Return one page of the user's meals, newest first."""
    container: AppContainer = request.app.state.container
    result = container.meal_service.list_meals(claims.user_id, page, limit)
    return {
        "success": True,
        "meals": [meal.to_json() for meal in result.meals],
        "pagination": {
            "total": result.pagination.total,
            "page": result.pagination.page,
            "limit": result.pagination.limit,
            "pages": result.pagination.pages,
        },
    }


@router.get("/all")
def all_meals(
    request: Request, claims: TokenClaims = Depends(require_user)
) -> dict[str, object]:
    """Return every meal of the user for analytics."""
    container: AppContainer = request.app.state.container
    meals = container.meal_service.list_all_meals(claims.user_id)
    return {"success": True, "meals": [meal.to_json() for meal in meals]}


@router.get("/daily/{day}")
def daily_summary(
    day: str, request: Request, claims: TokenClaims = Depends(require_user)
) -> dict[str, object]:
    """Return the meals and totals for one calendar day."""
    container: AppContainer = request.app.state.container
    summary = container.stats_service.daily_summary(claims.user_id, day)
    return {
        "success": True,
        "date": day,
        "meals": [meal.to_json() for meal in summary.meals],
        "totals": _totals_json(summary.totals),
    }


@router.get("/monthly/{year}/{month}")
def monthly_summary(
    year: str,
    month: str,
    request: Request,
    claims: TokenClaims = Depends(require_user),
) -> dict[str, object]:
    """Return per-day totals for a month and the month-wide averages."""
    container: AppContainer = request.app.state.container
    summary = container.stats_service.monthly_summary(claims.user_id, year, month)
    return {"success": True, **_monthly_json(summary)}


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: str, request: Request, claims: TokenClaims = Depends(require_user)
) -> dict[str, object]:
    """Delete one of the user's meals."""
    container: AppContainer = request.app.state.container
    container.meal_service.delete_meal(claims.user_id, meal_id)
    return {"success": True, "message": "Meal deleted successfully"}


def _totals_json(totals: NutrientTotals) -> dict[str, float]:
    return {
        "calories": totals.calories,
        "protein": totals.protein,
        "carbs": totals.carbohydrates,
        "fat": totals.fat,
    }


def _monthly_json(summary: MonthlySummary) -> dict[str, object]:
    return {
        "year": summary.year,
        "month": summary.month,
        "dailyData": {
            day.isoformat(): {
                "calories": entry.calories,
                "protein": entry.protein,
                "carbs": entry.carbohydrates,
                "fat": entry.fat,
                "mealCount": entry.meal_count,
            }
            for day, entry in summary.daily.items()
        },
        "monthlyTotals": {
            "totalCalories": summary.totals.total_calories,
            "avgCalories": summary.totals.avg_calories,
            "totalProtein": summary.totals.total_protein,
            "totalCarbs": summary.totals.total_carbohydrates,
            "totalFat": summary.totals.total_fat,
        },
    }
