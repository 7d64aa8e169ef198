"""Vendor-specific transpiler implementations."""

from azure_anthropic.core.transpilers.anthropic import (
    AnthropicTranspiler,
    ConvertedPrompt,
    convert_prompt,
    convert_response,
    convert_stop_reason,
    convert_tool_choice,
    convert_tools,
)

__all__ = [
    "AnthropicTranspiler",
    "ConvertedPrompt",
    "convert_prompt",
    "convert_response",
    "convert_stop_reason",
    "convert_tool_choice",
    "convert_tools",
]
