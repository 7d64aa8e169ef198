"""Azure Anthropic provider — unified model interface over Claude on Azure Foundry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from azure_anthropic.errors import AzureAnthropicError as AzureAnthropicError

__version__ = "0.1.0"

if TYPE_CHECKING:
    from azure_anthropic.provider.factory import (
        AzureAnthropicProvider as AzureAnthropicProvider,
    )
    from azure_anthropic.provider.factory import (
        create_azure_anthropic as create_azure_anthropic,
    )
    from azure_anthropic.provider.language_model import (
        AzureAnthropicLanguageModel as AzureAnthropicLanguageModel,
    )

_PROVIDER_EXPORTS = {
    "create_azure_anthropic": "azure_anthropic.provider.factory",
    "AzureAnthropicProvider": "azure_anthropic.provider.factory",
    "AzureAnthropicLanguageModel": "azure_anthropic.provider.language_model",
}


def __getattr__(name: str) -> object:
    module_path = _PROVIDER_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'azure_anthropic' has no attribute {name!r}")
