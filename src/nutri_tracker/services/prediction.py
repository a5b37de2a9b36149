"""Prediction gateway that forwards food photos to the external model."""

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from uuid import uuid4

import httpx

from nutri_tracker.domain.prediction import NutritionEntry, PredictionResult
from nutri_tracker.errors import PredictionUnavailable, ValidationError
from nutri_tracker.services.meals import to_number

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class PredictionClient(Protocol):
    """Interface for the external food recognition endpoint."""

    async def predict(
        self, image_path: Path, filename: str, content_type: str | None
    ) -> dict[str, object]:
        """Upload the image and return the decoded JSON object."""


@dataclass
class PredictionService:
    """Spools uploads to disk, calls the model and normalizes its output."""

    client: PredictionClient
    upload_dir: Path
    max_upload_bytes: int = 10 * 1024 * 1024
    max_retries: int = 0
    retry_backoff_seconds: float = 1.0

    async def predict(
        self, image_bytes: bytes, filename: str, content_type: str | None = None
    ) -> PredictionResult:
        """Return the prediction for an uploaded image."""
        if not image_bytes:
            raise ValidationError("No image provided")
        if len(image_bytes) > self.max_upload_bytes:
            raise ValidationError("Image is too large")
        original_name = Path(filename or "upload").name or "upload"
        path = self._spool(image_bytes, original_name)
        try:
            raw = await self._call(path, original_name, content_type)
        finally:
            path.unlink(missing_ok=True)
        return normalize_prediction(raw)

    def _spool(self, image_bytes: bytes, filename: str) -> Path:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", filename)
        path = self.upload_dir / (
            f"{int(time.time() * 1000)}-{uuid4().hex[:8]}-{safe_name}"
        )
        path.write_bytes(image_bytes)
        return path

    async def _call(
        self, path: Path, filename: str, content_type: str | None
    ) -> dict[str, object]:
        attempts = max(self.max_retries, 0) + 1
        last_error: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                return await self.client.predict(path, filename, content_type)
            except (httpx.HTTPError, ValueError) as exc:
                last_error = exc
                logger.warning(
                    "Prediction request failed",
                    extra={"attempt": attempt, "error": _describe_error(exc)},
                )
                if attempt < attempts:
                    await asyncio.sleep(self.retry_backoff_seconds * attempt)
        raise PredictionUnavailable(detail=_describe_error(last_error))


def normalize_prediction(raw: dict[str, object]) -> PredictionResult:
    """Map either upstream response shape onto the canonical schema."""
    food_items = raw.get("food_items")
    if isinstance(food_items, list):
        entries = [item for item in food_items if isinstance(item, dict)]
        return PredictionResult(
            detected=[str(item.get("name") or "Unknown") for item in entries],
            nutrition=[_entry_from(item, None) for item in entries],
            raw=raw,
        )

    detected_raw = raw.get("detected")
    detected = (
        [str(label) for label in detected_raw if label is not None]
        if isinstance(detected_raw, list)
        else []
    )
    nutrition_raw = raw.get("nutrition")
    nutrition: list[NutritionEntry] = []
    if isinstance(nutrition_raw, list):
        for index, item in enumerate(nutrition_raw):
            if not isinstance(item, dict):
                continue
            fallback = detected[index] if index < len(detected) else None
            nutrition.append(_entry_from(item, fallback))
    return PredictionResult(detected=detected, nutrition=nutrition, raw=raw)


def _entry_from(item: dict[str, object], fallback_name: str | None) -> NutritionEntry:
    name = item.get("name") or item.get("label") or fallback_name
    carbohydrates = item.get("carbohydrates", item.get("carbs"))
    return NutritionEntry(
        name=str(name) if name is not None else None,
        calories=to_number(item.get("calories")),
        protein=to_number(item.get("protein")),
        carbohydrates=to_number(carbohydrates),
        fat=to_number(item.get("fat")),
    )


def _describe_error(exc: Exception | None) -> str:
    if exc is None:
        return "Unknown prediction error"
    if isinstance(exc, httpx.HTTPStatusError):
        return f"Request failed with status code {exc.response.status_code}"
    if isinstance(exc, httpx.TimeoutException):
        detail = str(exc)
        return f"Request timed out ({detail})" if detail else "Request timed out"
    return str(exc) or type(exc).__name__
