PROVIDER_LABELS: dict[str, str] = {
    "gemini": "Gemini",
    "openai": "OpenAI",
    "openrouter": "OpenRouter",
    "groq": "Groq",
    "together": "Together",
    "deepseek": "DeepSeek",
    "example": "Example",
}


def provider_label(provider: str) -> str:
    """Human-readable provider name used in user-facing messages."""
    return PROVIDER_LABELS.get(provider, provider)
