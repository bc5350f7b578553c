from dataclasses import dataclass

from docreview.providers.exceptions import UnsupportedProviderError


@dataclass(frozen=True)
class ModelId:
    """A provider-qualified model identifier such as ``gemini/gemini-2.5-flash``."""

    provider: str
    model_name: str

    def __str__(self) -> str:
        return f"{self.provider}/{self.model_name}"


def provider_of(model_id: str) -> str:
    """Return the provider segment of a model identifier, or '' if it has none."""
    provider, sep, _ = model_id.partition("/")
    return provider.strip().lower() if sep else ""


def parse_model_id(model_id: str) -> ModelId:
    """Split ``provider/model-name`` on the first slash.

    Raises:
        UnsupportedProviderError: if either segment is missing.
    """
    provider, sep, model_name = model_id.partition("/")
    provider = provider.strip().lower()
    model_name = model_name.strip()
    if not sep or not provider or not model_name:
        raise UnsupportedProviderError(provider, model_id)
    return ModelId(provider=provider, model_name=model_name)
