"""Provider factory — validates settings and builds language models."""

from __future__ import annotations

import logging

from azure_anthropic.errors import ProviderValidationError
from azure_anthropic.provider.config import ModelOptions, ProviderSettings
from azure_anthropic.provider.language_model import AzureAnthropicLanguageModel
from azure_anthropic.provider.transport import FoundryMessagesClient, MessagesClient

logger = logging.getLogger(__name__)


class AzureAnthropicProvider:
    """Builds :class:`AzureAnthropicLanguageModel` instances sharing one client.

    Callable directly or through :meth:`language_model`::

        provider = create_azure_anthropic(base_url=..., api_key=...)
        model = provider("claude-sonnet-4-5-20251001")
    """

    def __init__(self, settings: ProviderSettings, client: MessagesClient) -> None:
        self.settings = settings
        self.client = client

    def __call__(
        self, model_id: str, options: ModelOptions | None = None
    ) -> AzureAnthropicLanguageModel:
        return self.language_model(model_id, options)

    def language_model(
        self, model_id: str, options: ModelOptions | None = None
    ) -> AzureAnthropicLanguageModel:
        return AzureAnthropicLanguageModel(model_id, self.client, options)


def create_azure_anthropic(
    settings: ProviderSettings | None = None,
    *,
    base_url: str | None = None,
    api_key: str | None = None,
    headers: dict[str, str] | None = None,
    client: MessagesClient | None = None,
) -> AzureAnthropicProvider:
    """Create a provider for an Azure AI Foundry Anthropic endpoint.

    Keyword arguments override fields of *settings*. When *client* is not
    given a :class:`FoundryMessagesClient` is built from the settings.

    Raises:
        ProviderValidationError: ``base_url`` or ``api_key`` is empty.
    """
    resolved = settings or ProviderSettings()
    overrides = {
        key: value
        for key, value in (("base_url", base_url), ("api_key", api_key), ("headers", headers))
        if value is not None
    }
    if overrides:
        resolved = resolved.model_copy(update=overrides)

    if not resolved.base_url:
        msg = "base_url is required"
        raise ProviderValidationError(msg, field="base_url")
    if not resolved.api_key:
        msg = "api_key is required"
        raise ProviderValidationError(msg, field="api_key")

    if client is None:
        logger.debug("Creating Foundry messages client for %s", resolved.base_url)
        client = FoundryMessagesClient(resolved)
    return AzureAnthropicProvider(resolved, client)
