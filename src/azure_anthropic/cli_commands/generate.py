"""``azure-anthropic generate`` — one complete, non-streaming response."""

from __future__ import annotations

import asyncio
import sys

import click

from azure_anthropic.cli_commands._options import (
    build_call_options,
    build_model,
    close_client,
    model_options,
    setup_diagnostics,
)
from azure_anthropic.cli_commands._output import console, print_generate_result
from azure_anthropic.core.models import CallOptions, GenerateResult
from azure_anthropic.errors import AzureAnthropicError
from azure_anthropic.provider.language_model import AzureAnthropicLanguageModel


@click.command()
@model_options
def generate(
    prompt: str,
    model: str,
    base_url: str,
    api_key: str,
    max_tokens: int | None,
    system: str | None,
    verbose: bool,
    telemetry: bool,
) -> None:
    """Send PROMPT and print the full response."""
    setup_diagnostics(verbose, telemetry)

    try:
        language_model = build_model(model, base_url, api_key)
    except AzureAnthropicError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if verbose:
        console.print(f"Using model: {model}")
        console.print(f"Using base URL: {base_url}")

    options = build_call_options(prompt, system, max_tokens)
    try:
        result = asyncio.run(_run(language_model, options))
    except Exception as exc:
        console.print(f"[red]Request error:[/red] {exc}")
        sys.exit(1)

    print_generate_result(result)


async def _run(model: AzureAnthropicLanguageModel, options: CallOptions) -> GenerateResult:
    try:
        return await model.do_generate(options)
    finally:
        await close_client(model)
