"""Models for prediction results."""

from pydantic import BaseModel, Field


class NutritionEntry(BaseModel):
    """Nutrition estimate for one detected food."""

    name: str | None = None
    calories: float = 0.0
    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0


class PredictionResult(BaseModel):
    """Canonical prediction output plus the verbatim upstream payload."""

    detected: list[str] = Field(default_factory=list)
    nutrition: list[NutritionEntry] = Field(default_factory=list)
    raw: dict[str, object] = Field(default_factory=dict)

    def to_response(self) -> dict[str, object]:
        """Upstream payload with the canonical keys filled in."""
        payload = dict(self.raw)
        payload["detected"] = list(self.detected)
        payload["nutrition"] = [entry.model_dump() for entry in self.nutrition]
        return payload
