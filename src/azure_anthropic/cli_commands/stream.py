"""``azure-anthropic stream`` — print a response as it is generated."""

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
from azure_anthropic.cli_commands._output import console, print_tool_call, print_usage
from azure_anthropic.core.models import (
    CallOptions,
    Finish,
    StreamError,
    TextDelta,
    TextEnd,
    ToolCallContent,
)
from azure_anthropic.errors import AzureAnthropicError
from azure_anthropic.provider.language_model import AzureAnthropicLanguageModel


@click.command()
@model_options
def stream(
    prompt: str,
    model: str,
    base_url: str,
    api_key: str,
    max_tokens: int | None,
    system: str | None,
    verbose: bool,
    telemetry: bool,
) -> None:
    """Send PROMPT and stream the response text."""
    setup_diagnostics(verbose, telemetry)

    try:
        language_model = build_model(model, base_url, api_key)
    except AzureAnthropicError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    options = build_call_options(prompt, system, max_tokens)
    try:
        ok = asyncio.run(_run(language_model, options))
    except Exception as exc:
        console.print(f"[red]Request error:[/red] {exc}")
        sys.exit(1)

    if not ok:
        sys.exit(1)


async def _run(model: AzureAnthropicLanguageModel, options: CallOptions) -> bool:
    """Print parts as they arrive; return ``False`` if the stream failed."""
    try:
        result = await model.do_stream(options)
        async for part in result.stream:
            if isinstance(part, TextDelta):
                console.out(part.delta, end="", highlight=False)
            elif isinstance(part, TextEnd):
                console.out("")
            elif isinstance(part, ToolCallContent):
                print_tool_call(part)
            elif isinstance(part, Finish):
                print_usage(part.usage, part.finish_reason.unified)
            elif isinstance(part, StreamError):
                console.print(f"[red]Stream error:[/red] {part.error}")
                return False
        return True
    finally:
        await close_client(model)
