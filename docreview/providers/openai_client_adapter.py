import base64
from typing import Any

import httpx
import openai

from docreview.providers.client_base import BaseCompletionClient
from docreview.providers.exceptions import InvalidCredentialError, ProviderRequestError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        provider: str = "openai",
        temperature: float | None = None,
    ) -> None:
        self.provider = provider
        self._temperature = temperature
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def complete(self, *, model: str, prompt: str) -> str:
        return self._chat(model, [{"role": "user", "content": prompt}])

    def describe_image(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
    ) -> str:
        encoded = base64.b64encode(image_bytes).decode("ascii")
        content = [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}},
        ]
        return self._chat(model, [{"role": "user", "content": content}])

    def close(self) -> None:
        self._client.close()

    def _chat(self, model: str, messages: list[dict[str, Any]]) -> str:
        kwargs: dict[str, Any] = {"model": model, "messages": messages}
        if self._temperature is not None:
            kwargs["temperature"] = self._temperature
        try:
            response = self._client.chat.completions.create(**kwargs)
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise InvalidCredentialError(self.provider) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderRequestError(self.provider, f"network error: {exc}") from exc
        except openai.APIError as exc:
            raise ProviderRequestError(self.provider, f"API error: {exc}") from exc

        if not response.choices:
            raise ProviderRequestError(self.provider, "no choices returned")
        content = response.choices[0].message.content
        if content is None:
            raise ProviderRequestError(self.provider, "empty response")
        return content
