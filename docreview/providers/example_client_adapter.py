"""Offline completion client.

Use this module as a reference when implementing new provider adapters.
Implement BaseCompletionClient and register the provider in GatewayFactory.
"""

import json
from typing import ClassVar

from docreview.providers.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Adapter that answers every prompt with a fixed reply.

    No network calls. Useful for local development, demos, and tests. The
    reply wraps a JSON payload in a fenced block the way real agent prompts
    ask models to.
    """

    provider = "example"

    DEFAULT_PAYLOAD: ClassVar[dict[str, object]] = {
        "summary": "Example response generated offline.",
        "sentiment": "Neutral",
    }
    OCR_TEXT: ClassVar[str] = "Example OCR text."

    def __init__(self, credential: str = "") -> None:
        self._credential = credential

    def complete(self, *, model: str, prompt: str) -> str:
        _ = model, prompt
        return (
            "Here is the result.\n\n```json\n"
            + json.dumps(self.DEFAULT_PAYLOAD, indent=2)
            + "\n```"
        )

    def describe_image(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
    ) -> str:
        _ = model, prompt, image_bytes, mime_type
        return self.OCR_TEXT
