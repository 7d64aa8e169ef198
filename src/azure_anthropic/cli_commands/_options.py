"""Options and model construction shared by the CLI commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar

import click

from azure_anthropic.core.models import CallOptions, UnifiedMessage
from azure_anthropic.provider.config import (
    DEFAULT_MODEL_ID,
    ENV_API_KEY,
    ENV_BASE_URL,
    ENV_MODEL_ID,
    ProviderSettings,
)
from azure_anthropic.provider.factory import create_azure_anthropic

if TYPE_CHECKING:
    from azure_anthropic.provider.language_model import AzureAnthropicLanguageModel

F = TypeVar("F", bound=Callable[..., Any])


def model_options(func: F) -> F:
    """Attach the connection and generation options every command takes."""
    decorators = [
        click.argument("prompt"),
        click.option(
            "--model",
            "-m",
            envvar=ENV_MODEL_ID,
            default=DEFAULT_MODEL_ID,
            show_default=True,
            help="Deployment / model id.",
        ),
        click.option(
            "--base-url", envvar=ENV_BASE_URL, default="", help="Foundry Anthropic endpoint."
        ),
        click.option("--api-key", envvar=ENV_API_KEY, default="", help="Foundry API key."),
        click.option("--max-tokens", type=int, default=None, help="Maximum output tokens."),
        click.option("--system", "-s", default=None, help="System prompt."),
        click.option("--verbose", "-v", is_flag=True, help="Enable debug logging."),
        click.option("--telemetry", is_flag=True, help="Export trace spans to the console."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def setup_diagnostics(verbose: bool, telemetry: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if telemetry:
        from azure_anthropic.utils.telemetry import configure_telemetry

        configure_telemetry()


def build_model(model: str, base_url: str, api_key: str) -> AzureAnthropicLanguageModel:
    """Create a language model; raises ProviderValidationError on bad settings."""
    provider = create_azure_anthropic(ProviderSettings(base_url=base_url, api_key=api_key))
    return provider(model)


def build_call_options(prompt: str, system: str | None, max_tokens: int | None) -> CallOptions:
    messages: list[UnifiedMessage] = []
    if system:
        messages.append(UnifiedMessage.system(system))
    messages.append(UnifiedMessage.user(prompt))
    return CallOptions(prompt=messages, max_output_tokens=max_tokens)


async def close_client(model: AzureAnthropicLanguageModel) -> None:
    aclose = getattr(model.client, "aclose", None)
    if aclose is not None:
        await aclose()
