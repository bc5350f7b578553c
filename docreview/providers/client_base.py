from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific completion clients.

    Implementations translate SDK and transport failures into the
    docreview.providers.exceptions taxonomy.
    """

    provider: str

    @abstractmethod
    def complete(self, *, model: str, prompt: str) -> str:
        """Return the provider's text reply to a single user prompt."""

    @abstractmethod
    def describe_image(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
    ) -> str:
        """Return the provider's text reply to a prompt with one attached image."""

    def close(self) -> None:
        """Release transport resources; the client is not used afterwards."""
