"""Uniform entry point over the configured completion providers."""

from collections.abc import Callable

from docreview.logging.logger import Log
from docreview.prompts.loader import load_ocr_prompt
from docreview.providers.client_base import BaseCompletionClient
from docreview.providers.exceptions import (
    ProviderNotConfiguredError,
    UnsupportedProviderError,
)
from docreview.providers.model_id import parse_model_id

ClientBuilder = Callable[[str], BaseCompletionClient]


class CompletionGateway:
    """Resolves a model identifier to a provider client and invokes it.

    Each known provider has a builder that turns a credential into a client.
    A provider is usable only after configure() has been called for it with a
    non-empty credential. Calls are single blocking round trips: no caching,
    no retries, no streaming.
    """

    def __init__(
        self,
        builders: dict[str, ClientBuilder],
        *,
        ocr_model: str,
        ocr_prompt: str | None = None,
    ) -> None:
        self._builders = dict(builders)
        self._clients: dict[str, BaseCompletionClient] = {}
        self._ocr_model = parse_model_id(ocr_model)
        self._ocr_prompt = ocr_prompt if ocr_prompt is not None else load_ocr_prompt()

    @property
    def ocr_provider(self) -> str:
        return self._ocr_model.provider

    def known_providers(self) -> list[str]:
        return list(self._builders)

    def is_known(self, provider: str) -> bool:
        return provider in self._builders

    def is_configured(self, provider: str) -> bool:
        return provider in self._clients

    def configure(self, provider: str, credential: str) -> None:
        """(Re)build the client for a provider; an empty credential drops it.

        Raises:
            UnsupportedProviderError: if the provider has no registered builder.
        """
        builder = self._builders.get(provider)
        if builder is None:
            raise UnsupportedProviderError(provider)
        if not credential:
            self.deconfigure(provider)
            return
        client = builder(credential)
        previous = self._clients.get(provider)
        self._clients[provider] = client
        if previous is not None and previous is not client:
            previous.close()
        Log.debug(f"Configured {provider} client")

    def deconfigure(self, provider: str) -> None:
        client = self._clients.pop(provider, None)
        if client is not None:
            client.close()
            Log.debug(f"Dropped {provider} client")

    def complete(self, model_id: str, prompt_text: str) -> str:
        """Send one prompt to the model named by ``provider/model-name``.

        Raises:
            UnsupportedProviderError: malformed identifier or unknown provider.
            ProviderNotConfiguredError: no credential configured for the provider.
            InvalidCredentialError: the provider rejected the credential.
            ProviderRequestError: any other provider failure.
        """
        model = parse_model_id(model_id)
        client = self._client_for(model.provider, model_id)
        Log.debug(f"Dispatching prompt to {model_id} ({len(prompt_text)} chars)")
        return client.complete(model=model.model_name, prompt=prompt_text)

    def perform_ocr(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> str:
        """Transcribe one page image with the designated vision model."""
        model = self._ocr_model
        client = self._client_for(model.provider, str(model))
        Log.debug(f"Sending {len(image_bytes)} byte image to {model} for OCR")
        return client.describe_image(
            model=model.model_name,
            prompt=self._ocr_prompt,
            image_bytes=image_bytes,
            mime_type=mime_type,
        )

    def _client_for(self, provider: str, model_id: str) -> BaseCompletionClient:
        if provider not in self._builders:
            raise UnsupportedProviderError(provider, model_id)
        client = self._clients.get(provider)
        if client is None:
            raise ProviderNotConfiguredError(provider)
        return client
