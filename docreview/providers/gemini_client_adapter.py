"""Gemini client over the Generative Language REST API.

Response format:
{
    "candidates": [{"content": {"parts": [{"text": "..."}]}}],
    "promptFeedback": {"blockReason": "..."}
}
Error format: {"error": {"code": 400, "message": "...", "status": "INVALID_ARGUMENT"}}
"""

import base64
from typing import Any

import httpx

from docreview.providers.client_base import BaseCompletionClient
from docreview.providers.exceptions import InvalidCredentialError, ProviderRequestError

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

_CREDENTIAL_STATUS_CODES = frozenset({401, 403})
_CREDENTIAL_MARKERS = ("API key not valid", "API_KEY_INVALID", "API key expired")


class GeminiClientAdapter(BaseCompletionClient):
    """Completion and vision client for Gemini models."""

    provider = "gemini"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds, connect=10.0),
            headers={"x-goog-api-key": api_key},
            transport=transport,
        )

    def complete(self, *, model: str, prompt: str) -> str:
        return self._generate(model, [{"text": prompt}])

    def describe_image(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
    ) -> str:
        image_part = {
            "inline_data": {
                "mime_type": mime_type,
                "data": base64.b64encode(image_bytes).decode("ascii"),
            }
        }
        return self._generate(model, [{"text": prompt}, image_part])

    def close(self) -> None:
        self._client.close()

    def _generate(self, model: str, parts: list[dict[str, Any]]) -> str:
        body = {"contents": [{"role": "user", "parts": parts}]}
        try:
            resp = self._client.post(f"/models/{model}:generateContent", json=body)
        except httpx.HTTPError as exc:
            raise ProviderRequestError(self.provider, f"network error: {exc}") from exc

        if resp.status_code != 200:
            message = self._extract_error_message(resp)
            if self._is_credential_rejection(resp.status_code, message):
                raise InvalidCredentialError(self.provider)
            raise ProviderRequestError(self.provider, f"HTTP {resp.status_code}: {message}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderRequestError(self.provider, "malformed JSON response") from exc
        return self._extract_text(data)

    def _extract_text(self, data: Any) -> str:
        if not isinstance(data, dict):
            raise ProviderRequestError(self.provider, "unexpected response shape")
        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback") or {}
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            if reason:
                raise ProviderRequestError(self.provider, f"response blocked: {reason}")
            raise ProviderRequestError(self.provider, "no candidates returned")
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts", []) if isinstance(content, dict) else []
        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        if not texts:
            raise ProviderRequestError(self.provider, "empty response")
        return "".join(texts)

    @staticmethod
    def _extract_error_message(resp: httpx.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text or "Unknown API error"
        error = data.get("error") if isinstance(data, dict) else None
        if isinstance(error, dict):
            return str(error.get("message") or "Unknown API error")
        if isinstance(error, str):
            return error
        return "Unknown API error"

    @staticmethod
    def _is_credential_rejection(status_code: int, message: str) -> bool:
        if status_code in _CREDENTIAL_STATUS_CODES:
            return True
        return any(marker in message for marker in _CREDENTIAL_MARKERS)
