from docreview.providers.names import provider_label


class ProviderError(Exception):
    """Base exception for all completion provider failures."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider
        self.message = message


class ProviderNotConfiguredError(ProviderError):
    """Raised when no credential is configured for a provider."""

    def __init__(self, provider: str) -> None:
        super().__init__(provider, f"{provider_label(provider)} API key is not configured.")


class UnsupportedProviderError(ProviderError):
    """Raised when a model identifier names no known provider."""

    def __init__(self, provider: str, model_id: str | None = None) -> None:
        message = f"Unsupported provider: '{provider}'"
        if model_id is not None:
            message = f"{message} in model identifier '{model_id}'"
        super().__init__(provider, message)


class InvalidCredentialError(ProviderError):
    """Raised when the provider rejects the configured credential."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            provider,
            f"The provided {provider_label(provider)} API key is not valid. Please check it.",
        )


class ProviderRequestError(ProviderError):
    """Raised on any other provider failure: network, rate limit, bad response."""

    def __init__(self, provider: str, detail: str) -> None:
        super().__init__(
            provider,
            f"Failed to get response from {provider_label(provider)} API: {detail}",
        )
        self.detail = detail
