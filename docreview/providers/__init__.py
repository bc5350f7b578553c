from docreview.providers.client_base import BaseCompletionClient
from docreview.providers.exceptions import (
    InvalidCredentialError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderRequestError,
    UnsupportedProviderError,
)
from docreview.providers.factory import GatewayFactory
from docreview.providers.gateway import CompletionGateway

__all__ = [
    "BaseCompletionClient",
    "CompletionGateway",
    "GatewayFactory",
    "InvalidCredentialError",
    "ProviderError",
    "ProviderNotConfiguredError",
    "ProviderRequestError",
    "UnsupportedProviderError",
]
