from functools import partial
from typing import TYPE_CHECKING, ClassVar

from docreview.config.settings import Settings
from docreview.providers.client_base import BaseCompletionClient
from docreview.providers.example_client_adapter import ExampleClientAdapter
from docreview.providers.gateway import ClientBuilder, CompletionGateway
from docreview.providers.gemini_client_adapter import GeminiClientAdapter
from docreview.providers.openai_client_adapter import OpenAIClientAdapter

if TYPE_CHECKING:
    from docreview.credentials.store import CredentialStore


class GatewayFactory:
    """Creates a gateway with every known provider registered."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
    }

    @classmethod
    def create(cls, settings: Settings, credentials: "CredentialStore") -> CompletionGateway:
        """Build the gateway and configure each provider that has a credential."""
        gateway = CompletionGateway(cls.builders(settings), ocr_model=settings.ocr_model)
        for provider in gateway.known_providers():
            if credentials.is_configured(provider):
                gateway.configure(provider, credentials.get(provider))
        return gateway

    @classmethod
    def builders(cls, settings: Settings) -> dict[str, ClientBuilder]:
        builders: dict[str, ClientBuilder] = {
            "gemini": partial(cls._build_gemini, settings),
            "openai": partial(cls._build_openai, settings, "openai", None),
        }
        for provider, base_url in cls.OPENAI_COMPATIBLE_BASE_URLS.items():
            builders[provider] = partial(cls._build_openai, settings, provider, base_url)
        builders["example"] = ExampleClientAdapter
        return builders

    @staticmethod
    def _build_gemini(settings: Settings, credential: str) -> BaseCompletionClient:
        return GeminiClientAdapter(
            api_key=credential,
            timeout_seconds=settings.gemini_timeout_seconds,
            base_url=settings.gemini_base_url,
        )

    @staticmethod
    def _build_openai(
        settings: Settings,
        provider: str,
        base_url: str | None,
        credential: str,
    ) -> BaseCompletionClient:
        return OpenAIClientAdapter(
            api_key=credential,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=base_url,
            provider=provider,
            temperature=settings.openai_temperature,
        )
