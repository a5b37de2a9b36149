"""HTTP client for the external food prediction endpoint."""

from dataclasses import dataclass
from pathlib import Path

import httpx

from nutri_tracker.services.prediction import PredictionClient


@dataclass
class HttpxPredictionClient(PredictionClient):
    """Uploads images as multipart form data using httpx."""

    url: str
    timeout_seconds: float
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, url: str, timeout_seconds: float = 30.0
    ) -> "HttpxPredictionClient":
        """Create a prediction client with a managed httpx session."""
        return cls(
            url=url, timeout_seconds=timeout_seconds, http_client=httpx.AsyncClient()
        )

    async def predict(
        self, image_path: Path, filename: str, content_type: str | None
    ) -> dict[str, object]:
        """POST the image under the ``image`` field and return the JSON body."""
        with image_path.open("rb") as image_file:
            response = await self.http_client.post(
                self.url,
                files={
                    "image": (
                        filename,
                        image_file,
                        content_type or "application/octet-stream",
                    )
                },
                timeout=self.timeout_seconds,
            )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Prediction service returned a non-object JSON body")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
