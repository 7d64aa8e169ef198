"""Shared CLI output formatters."""

from __future__ import annotations

from rich.console import Console

from azure_anthropic.core.models import GenerateResult, TextPart, ToolCallContent, Usage

console = Console()


def print_generate_result(result: GenerateResult) -> None:
    """Pretty-print generated content followed by a usage summary."""
    for part in result.content:
        if isinstance(part, TextPart):
            console.print(part.text, markup=False, highlight=False)
        else:
            print_tool_call(part)
    print_usage(result.usage, result.finish_reason.unified)


def print_tool_call(part: ToolCallContent) -> None:
    console.print(f"[cyan]tool call[/cyan] {part.tool_name} ({part.tool_call_id})")
    console.print_json(part.input)


def print_usage(usage: Usage, finish_reason: str) -> None:
    console.print(
        f"[dim]finish: {finish_reason} | "
        f"input tokens: {usage.input_tokens.total} | "
        f"output tokens: {usage.output_tokens.total}[/dim]"
    )
