"""Request bodies accepted by the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SignupRequest(BaseModel):
    name: str | None = None
    username: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class SaveMealRequest(BaseModel):
    """Meal submission built by the client from a prediction."""

    model_config = ConfigDict(extra="ignore")

    foodName: str | None = None  # noqa: N815
    detected: list[str | None] | None = None
    nutrition: list[object] | None = None
    mealType: str | None = None  # noqa: N815
    date: datetime | None = None
