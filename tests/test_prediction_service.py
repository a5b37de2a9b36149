"""Tests for the prediction gateway service."""

import asyncio
from pathlib import Path

import httpx
import pytest

from nutri_tracker.errors import PredictionUnavailable, ValidationError
from nutri_tracker.services.prediction import PredictionService, normalize_prediction
from tests.conftest import FakePredictionClient


def _service(
    client: FakePredictionClient, tmp_path: Path, **kwargs
) -> PredictionService:
    return PredictionService(
        client=client,
        upload_dir=tmp_path / "uploads",
        retry_backoff_seconds=0,
        **kwargs,
    )


def test_predict_spools_file_and_removes_it(tmp_path: Path) -> None:
    client = FakePredictionClient()
    service = _service(client, tmp_path)

    result = asyncio.run(service.predict(b"image-bytes", "lunch.jpg", "image/jpeg"))

    assert result.detected == ["rice", "chicken"]
    assert result.nutrition[1].protein == 31
    assert result.nutrition[0].name == "rice"
    assert client.seen_files == [True]
    path, filename, content_type = client.calls[0]
    assert path.name.endswith("-lunch.jpg")
    assert filename == "lunch.jpg"
    assert content_type == "image/jpeg"
    assert list((tmp_path / "uploads").iterdir()) == []


def test_predict_failure_cleans_up_and_reports_upstream_error(tmp_path: Path) -> None:
    client = FakePredictionClient(errors=[httpx.ReadTimeout("timed out")])
    service = _service(client, tmp_path)

    with pytest.raises(PredictionUnavailable) as excinfo:
        asyncio.run(service.predict(b"image-bytes", "lunch.jpg"))

    assert "timed out" in (excinfo.value.detail or "")
    assert excinfo.value.status_code == 500
    assert list((tmp_path / "uploads").iterdir()) == []


def test_predict_is_single_attempt_by_default(tmp_path: Path) -> None:
    client = FakePredictionClient(errors=[httpx.ConnectError("refused")])
    service = _service(client, tmp_path)

    with pytest.raises(PredictionUnavailable):
        asyncio.run(service.predict(b"image-bytes", "lunch.jpg"))

    assert len(client.calls) == 1


def test_predict_retries_when_configured(tmp_path: Path) -> None:
    client = FakePredictionClient(
        errors=[httpx.ConnectError("refused"), httpx.ConnectError("refused")]
    )
    service = _service(client, tmp_path, max_retries=2)

    result = asyncio.run(service.predict(b"image-bytes", "lunch.jpg"))

    assert len(client.calls) == 3
    assert result.detected == ["rice", "chicken"]


def test_predict_rejects_empty_and_oversized_uploads(tmp_path: Path) -> None:
    client = FakePredictionClient()
    service = _service(client, tmp_path, max_upload_bytes=4)

    with pytest.raises(ValidationError):
        asyncio.run(service.predict(b"", "empty.jpg"))
    with pytest.raises(ValidationError):
        asyncio.run(service.predict(b"too-large", "big.jpg"))

    assert client.calls == []


def test_normalize_food_items_shape() -> None:
    raw = {
        "food_items": [
            {"name": "apple", "calories": 95, "protein": 0.5, "carbs": 25, "fat": 0.3}
        ]
    }

    result = normalize_prediction(raw)

    assert result.detected == ["apple"]
    assert result.nutrition[0].carbohydrates == 25
    response = result.to_response()
    assert response["food_items"] == raw["food_items"]
    assert response["detected"] == ["apple"]
    assert response["nutrition"][0]["carbohydrates"] == 25


def test_normalize_tolerates_missing_sections() -> None:
    result = normalize_prediction({"status": "no food found"})

    assert result.detected == []
    assert result.nutrition == []
    assert result.to_response()["status"] == "no food found"
