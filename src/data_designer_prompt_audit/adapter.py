from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from data_designer_prompt_audit.errors import ExternalCallError
from data_designer_prompt_audit.extraction import extract_json
from data_designer_prompt_audit.instructions import ANALYSIS_INSTRUCTION, compose_request_text
from data_designer_prompt_audit.settings import PromptAuditSettings

logger = logging.getLogger(__name__)


def _dig(value: Any, *path: str | int) -> Any:
    for key in path:
        if isinstance(key, int):
            if not isinstance(value, list) or len(value) <= key:
                return None
        elif not isinstance(value, dict):
            return None
        value = value[key] if isinstance(key, int) else value.get(key)
    return value


def _joined_parts(envelope: Any) -> str | None:
    parts = _dig(envelope, "candidates", 0, "content", "parts")
    if not isinstance(parts, list):
        return None
    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    return "\n".join(texts) if texts else None


def candidate_text(envelope: Any) -> str | None:
    """Return the first non-empty text payload found in a response envelope."""
    candidates = (
        lambda: _dig(envelope, "candidates", 0, "content", "parts", 0, "text"),
        lambda: _joined_parts(envelope),
        lambda: _dig(envelope, "candidates", 0, "content", "text"),
        lambda: _dig(envelope, "output", 0, "content", "text"),
        lambda: _dig(envelope, "text"),
        lambda: envelope,
    )
    for candidate in candidates:
        text = candidate()
        if isinstance(text, str) and text:
            return text
    return None


class GeminiAnalysisAdapter:
    """Ask a Gemini model for weaknesses, rewrites and highlights of a prompt.

    The model is only *asked* for clean JSON, so the reply goes through
    :func:`extract_json` at two levels: the text found in the response
    envelope first, then the raw response body.

    Args:
        api_key: Gemini API key, sent as the ``key`` query parameter.
        model: Model name, e.g. ``"gemini-2.5-flash"``.
        api_base: Base URL up to and including the API version.
        instruction: Template placed ahead of the prompt.
        timeout: Seconds before the HTTP call gives up; ``None`` disables it.
        client: Optional pre-configured ``httpx.Client`` (used as-is).
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1alpha",
        instruction: str = ANALYSIS_INSTRUCTION,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.instruction = instruction
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: PromptAuditSettings, **kwargs: Any) -> GeminiAnalysisAdapter:
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            api_base=settings.api_base,
            timeout=settings.request_timeout,
            **kwargs,
        )

    def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GeminiAnalysisAdapter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def url(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": compose_request_text(prompt, self.instruction)}],
                }
            ]
        }

    def request_analysis(self, prompt: str) -> dict[str, Any]:
        """Send ``prompt`` to the model and return its parsed verdict.

        Raises:
            ExternalCallError: On transport failure, a non-2xx status, or a
                response from which no JSON object can be recovered.
        """
        if not self.api_key:
            raise ExternalCallError("GEMINI_API_KEY is not configured")

        try:
            response = self._client.post(
                self.url,
                params={"key": self.api_key},
                json=self.build_request_body(prompt),
            )
        except httpx.HTTPError as e:
            raise ExternalCallError(f"Gemini request failed: {type(e).__name__}: {e}") from e

        raw_body = response.text
        if not response.is_success:
            raise ExternalCallError("Gemini error", status=response.status_code, body=raw_body)

        return self._parse_response(raw_body)

    def _parse_response(self, raw_body: str) -> dict[str, Any]:
        try:
            envelope = json.loads(raw_body)
        except (json.JSONDecodeError, RecursionError):
            logger.debug("Gemini response body is not JSON, scanning it for an object")
            recovered = extract_json(raw_body)
            if recovered is not None:
                return recovered
            raise ExternalCallError("Gemini response was not valid JSON", body=raw_body) from None

        text = candidate_text(envelope)
        if text is None:
            recovered = extract_json(json.dumps(envelope))
            if recovered is not None:
                return recovered
            raise ExternalCallError("Gemini returned no usable text content", body=raw_body)

        extracted = extract_json(text)
        if extracted is not None:
            return extracted

        logger.debug(f"Could not parse model text, retrying on the raw body: {text[:200]!r}")
        recovered = extract_json(raw_body)
        if recovered is not None:
            return recovered
        raise ExternalCallError("Could not extract JSON from model response", body=raw_body)
