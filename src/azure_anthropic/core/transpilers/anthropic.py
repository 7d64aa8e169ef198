"""Anthropic transpiler — system extraction, role alternation, response mapping.

Key differences from the unified protocol:
- The system prompt is a separate top-level parameter, not a message.
- Only ``user`` and ``assistant`` roles exist; tool results travel as user
  messages made of ``tool_result`` blocks.
- Consecutive same-role messages must be merged.
- A lone text block is sent as a bare string.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from azure_anthropic.core.models import (
    FinishReason,
    FinishReasonKind,
    FunctionTool,
    GeneratedContent,
    GenerateResult,
    InputTokens,
    OutputTokens,
    RequiredToolChoice,
    ResponseMetadata,
    SpecificToolChoice,
    TextPart,
    ToolChoice,
    ToolResultPart,
    UnifiedMessage,
    Usage,
)
from azure_anthropic.core.transpilers.content import (
    ConversationRole,
    convert_content_part,
    convert_response_block,
    convert_tool_result_part,
)
from azure_anthropic.core.vendor import MessagesResponse

logger = logging.getLogger(__name__)

VendorContent = str | list[dict[str, Any]]


@dataclass(frozen=True)
class ConvertedPrompt:
    """Vendor-ready prompt: extracted system text plus alternating messages."""

    system: str | None = None
    messages: list[dict[str, Any]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Prompt conversion
# ---------------------------------------------------------------------------


def convert_prompt(prompt: list[UnifiedMessage]) -> ConvertedPrompt:
    """Convert a unified conversation to the vendor message list.

    Only the last system message survives. Conversion errors propagate to
    the caller unchanged.
    """
    system: str | None = None
    messages: list[dict[str, Any]] = []

    for message in prompt:
        if message.role == "system":
            system = extract_system_content(message)
        elif message.role == "tool":
            messages.append(_tool_message_to_anthropic(message))
        else:
            messages.append(
                {
                    "role": message.role,
                    "content": _content_for_role(message.content, message.role),
                }
            )

    return ConvertedPrompt(system=system, messages=merge_consecutive_roles(messages))


def extract_system_content(message: UnifiedMessage) -> str:
    if isinstance(message.content, str):
        return message.content
    return "\n".join(part.text for part in message.content if isinstance(part, TextPart))


def _content_for_role(
    content: str | list[Any], role: ConversationRole
) -> VendorContent:
    """Convert message content; a single text block collapses to a string."""
    if isinstance(content, str):
        return content

    blocks = [convert_content_part(part, role) for part in content]
    if len(blocks) == 1 and blocks[0]["type"] == "text":
        text: str = blocks[0]["text"]
        return text
    return blocks


def _tool_message_to_anthropic(message: UnifiedMessage) -> dict[str, Any]:
    """Tool results become one user message of ``tool_result`` blocks."""
    if isinstance(message.content, str):
        return {"role": "user", "content": message.content}

    blocks: list[dict[str, Any]] = []
    for part in message.content:
        if isinstance(part, ToolResultPart):
            blocks.append(convert_tool_result_part(part))
        else:
            logger.debug("Dropping %s part from tool message", part.type)
    return {"role": "user", "content": blocks}


def merge_consecutive_roles(messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Merge consecutive messages with the same role.

    The vendor requires strict user/assistant alternation. Merged content is
    the concatenation of both block sequences in their original order.
    """
    merged: list[dict[str, Any]] = []
    for msg in messages:
        if merged and merged[-1]["role"] == msg["role"]:
            merged[-1] = {
                "role": msg["role"],
                "content": _as_blocks(merged[-1]["content"]) + _as_blocks(msg["content"]),
            }
        else:
            merged.append(msg)
    return merged


def _as_blocks(content: VendorContent) -> list[dict[str, Any]]:
    if isinstance(content, str):
        return [{"type": "text", "text": content}]
    return list(content)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def convert_tools(tools: list[FunctionTool]) -> list[dict[str, Any]]:
    result: list[dict[str, Any]] = []
    for tool in tools:
        converted: dict[str, Any] = {"name": tool.name, "input_schema": tool.input_schema}
        if tool.description is not None:
            converted["description"] = tool.description
        result.append(converted)
    return result


def convert_tool_choice(choice: ToolChoice) -> dict[str, Any]:
    """Map a unified tool choice onto the vendor's ``auto``/``any``/``tool``.

    The vendor has no ``none``; it falls back to ``auto``, so the model may
    still call tools.
    """
    if isinstance(choice, RequiredToolChoice):
        return {"type": "any"}
    if isinstance(choice, SpecificToolChoice):
        return {"type": "tool", "name": choice.tool_name}
    return {"type": "auto"}


# ---------------------------------------------------------------------------
# Response conversion
# ---------------------------------------------------------------------------


def convert_stop_reason(reason: str | None) -> FinishReasonKind:
    if reason in ("end_turn", "stop_sequence"):
        return "stop"
    if reason == "max_tokens":
        return "length"
    if reason == "tool_use":
        return "tool-calls"
    return "other"


def convert_content(response: MessagesResponse) -> list[GeneratedContent]:
    return [convert_response_block(block) for block in response.content]


def convert_usage(response: MessagesResponse) -> Usage:
    usage = response.usage
    return Usage(
        input_tokens=InputTokens(
            total=usage.input_tokens,
            cache_read=usage.cache_read_input_tokens,
        ),
        output_tokens=OutputTokens(total=usage.output_tokens, text=usage.output_tokens),
    )


def convert_response(raw: Any, request_body: dict[str, Any] | None = None) -> GenerateResult:
    """Convert a non-streaming vendor response into a unified result."""
    response = MessagesResponse.model_validate(raw)
    return GenerateResult(
        content=convert_content(response),
        finish_reason=FinishReason(
            unified=convert_stop_reason(response.stop_reason),
            raw=response.stop_reason,
        ),
        usage=convert_usage(response),
        request={"body": request_body} if request_body is not None else {},
        response=ResponseMetadata(
            id=response.id,
            model_id=response.model,
            timestamp=datetime.now(timezone.utc),
            body=raw,
        ),
    )


class AnthropicTranspiler:
    """Converts between the unified protocol and the vendor Messages API."""

    def to_provider(self, prompt: list[UnifiedMessage]) -> dict[str, Any]:
        """Return ``{"messages": [...]}`` plus ``"system"`` when one was given."""
        converted = convert_prompt(prompt)
        result: dict[str, Any] = {"messages": converted.messages}
        if converted.system:
            result["system"] = converted.system
        return result

    def from_provider(self, response: Any) -> GenerateResult:
        return convert_response(response)
