"""Azure Foundry provider: configuration, transport, language model, factory."""

from azure_anthropic.provider.config import ModelOptions, ProviderSettings
from azure_anthropic.provider.factory import AzureAnthropicProvider, create_azure_anthropic
from azure_anthropic.provider.language_model import AzureAnthropicLanguageModel
from azure_anthropic.provider.transport import (
    FoundryAPIError,
    FoundryMessagesClient,
    MessagesClient,
    RequestAbortedError,
    TransportError,
)

__all__ = [
    "AzureAnthropicLanguageModel",
    "AzureAnthropicProvider",
    "FoundryAPIError",
    "FoundryMessagesClient",
    "MessagesClient",
    "ModelOptions",
    "ProviderSettings",
    "RequestAbortedError",
    "TransportError",
    "create_azure_anthropic",
]
