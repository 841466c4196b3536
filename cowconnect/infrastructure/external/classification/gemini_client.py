"""Gemini generateContent client (implements IClassificationClient).

One request per call, no retries. Every failure (missing key, transport
error, error status, empty candidates) is raised as
ClassificationServiceError, which the gate turns into an Unavailable verdict.
"""

from __future__ import annotations

from typing import Any

import httpx

from cowconnect.application.interfaces.services import ClassificationServiceError
from cowconnect.domain.value_objects.core import MediaPayload
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class GeminiClassificationClient:
    """Async client for the Gemini REST API."""

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        *,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    @staticmethod
    def build_body(prompt: str, media: MediaPayload | None = None) -> dict[str, Any]:
        parts: list[dict[str, Any]] = [{"text": prompt}]
        if media is not None:
            parts.append(
                {"inline_data": {"mime_type": media.mime_type, "data": media.data_base64}}
            )
        return {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"temperature": 0.0},
        }

    @staticmethod
    def extract_text(data: Any) -> str:
        """Concatenate the text parts of the first candidate."""
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates") if isinstance(data.get("candidates"), list) else []
        if not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        parts = content.get("parts") if isinstance(content, dict) else []
        texts = [str(part.get("text") or "") for part in parts or [] if isinstance(part, dict)]
        return "\n".join(chunk for chunk in texts if chunk).strip()

    async def generate(self, prompt: str, media: MediaPayload | None = None) -> str:
        """Send one generateContent request and return the reply text."""
        if not self._api_key:
            raise ClassificationServiceError("Classification service is not configured")
        try:
            response = await self._http.post(
                self.endpoint,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self._api_key,
                },
                json=self.build_body(prompt, media),
            )
        except httpx.HTTPError as e:
            raise ClassificationServiceError(f"Request failed: {type(e).__name__}") from e
        if response.status_code >= 400:
            logger.warning(
                "Gemini error %s: %s", response.status_code, response.text[:300]
            )
            raise ClassificationServiceError(f"Gemini error ({response.status_code})")
        try:
            data = response.json()
        except ValueError as e:
            raise ClassificationServiceError("Gemini returned a non-JSON body") from e
        text = self.extract_text(data)
        if not text:
            raise ClassificationServiceError("Gemini returned no text")
        return text
