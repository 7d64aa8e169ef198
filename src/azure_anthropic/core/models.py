"""Unified protocol — the vendor-agnostic shapes used by the model layer.

Attributes are snake_case; aliases carry the unified wire names, so
``model_dump(by_alias=True)`` produces ``toolCallId``, ``finishReason`` and
friends. Every model is frozen: conversion never mutates its input.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any, AsyncIterator, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UnifiedModel(BaseModel):
    """Base for all unified protocol models."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Content Parts — prompt building blocks
# ---------------------------------------------------------------------------


class TextPart(UnifiedModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class ReasoningPart(UnifiedModel):
    """Model reasoning replayed in an assistant turn."""

    type: Literal["reasoning"] = "reasoning"
    text: str


class FilePart(UnifiedModel):
    """Inline file content: raw bytes, a base64 string, or a ``data:`` URL."""

    type: Literal["file"] = "file"
    data: bytes | str
    media_type: str
    filename: str | None = None


class ToolCallPart(UnifiedModel):
    """A tool invocation previously emitted by the assistant.

    ``args`` is either a JSON-encoded string or an already structured value.
    """

    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str
    tool_name: str
    args: str | dict[str, Any] = Field(default_factory=dict)


class ToolResultPart(UnifiedModel):
    """The outcome of a tool invocation, carried by a tool-role message."""

    type: Literal["tool-result"] = "tool-result"
    tool_call_id: str
    tool_name: str | None = None
    result: Any = None
    is_error: bool | None = None


ContentPart = Annotated[
    TextPart | ReasoningPart | FilePart | ToolCallPart | ToolResultPart,
    Field(discriminator="type"),
]

Role = Literal["system", "user", "assistant", "tool"]


class UnifiedMessage(UnifiedModel):
    """One turn of a conversation."""

    role: Role
    content: str | list[ContentPart]

    @classmethod
    def system(cls, text: str) -> UnifiedMessage:
        return cls(role="system", content=text)

    @classmethod
    def user(cls, *parts: str | ContentPart) -> UnifiedMessage:
        """Create a user message from text and/or content parts."""
        return cls(role="user", content=_as_parts(parts))

    @classmethod
    def assistant(cls, *parts: str | ContentPart) -> UnifiedMessage:
        """Create an assistant message from text and/or content parts."""
        return cls(role="assistant", content=_as_parts(parts))

    @classmethod
    def tool(cls, *results: ToolResultPart) -> UnifiedMessage:
        return cls(role="tool", content=list(results))


def _as_parts(parts: tuple[str | ContentPart, ...]) -> list[ContentPart]:
    return [TextPart(text=p) if isinstance(p, str) else p for p in parts]


# ---------------------------------------------------------------------------
# Tools and tool choice
# ---------------------------------------------------------------------------


class FunctionTool(UnifiedModel):
    """A caller-defined function the model may invoke."""

    type: Literal["function"] = "function"
    name: str
    description: str | None = None
    input_schema: dict[str, Any] = Field(default_factory=dict)


class ProviderTool(UnifiedModel):
    """A provider-defined tool; the vendor protocol here has no slot for it."""

    type: Literal["provider"] = "provider"
    id: str
    name: str
    args: dict[str, Any] = Field(default_factory=dict)


Tool = Annotated[FunctionTool | ProviderTool, Field(discriminator="type")]


class AutoToolChoice(UnifiedModel):
    type: Literal["auto"] = "auto"


class NoneToolChoice(UnifiedModel):
    type: Literal["none"] = "none"


class RequiredToolChoice(UnifiedModel):
    type: Literal["required"] = "required"


class SpecificToolChoice(UnifiedModel):
    type: Literal["tool"] = "tool"
    tool_name: str


ToolChoice = Annotated[
    AutoToolChoice | NoneToolChoice | RequiredToolChoice | SpecificToolChoice,
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Call options
# ---------------------------------------------------------------------------


class CallOptions(UnifiedModel):
    """Conversation plus generation parameters for a single model call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    prompt: list[UnifiedMessage]
    max_output_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    stop_sequences: list[str] | None = None
    tools: list[Tool] | None = None
    tool_choice: ToolChoice | None = None
    abort_signal: asyncio.Event | None = None


# ---------------------------------------------------------------------------
# Results — finish reason, usage, generated content
# ---------------------------------------------------------------------------

FinishReasonKind = Literal["stop", "length", "content-filter", "tool-calls", "error", "other"]


class FinishReason(UnifiedModel):
    unified: FinishReasonKind
    raw: str | None = None


class InputTokens(UnifiedModel):
    total: int | None = None
    no_cache: int | None = None
    cache_read: int | None = None
    cache_write: int | None = None


class OutputTokens(UnifiedModel):
    total: int | None = None
    text: int | None = None
    reasoning: int | None = None


class Usage(UnifiedModel):
    """Token accounting. Fields the vendor does not report stay ``None``."""

    input_tokens: InputTokens = Field(default_factory=InputTokens)
    output_tokens: OutputTokens = Field(default_factory=OutputTokens)


class ToolCallContent(UnifiedModel):
    """A fully assembled tool call; ``input`` is the JSON arguments text."""

    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str
    tool_name: str
    input: str


GeneratedContent = Annotated[TextPart | ToolCallContent, Field(discriminator="type")]


class ResponseMetadata(UnifiedModel):
    id: str | None = None
    model_id: str | None = None
    timestamp: datetime
    body: Any = None


class GenerateResult(UnifiedModel):
    """Outcome of a non-streaming call."""

    content: list[GeneratedContent]
    finish_reason: FinishReason
    usage: Usage
    warnings: list[Any] = Field(default_factory=list)
    request: dict[str, Any] = Field(default_factory=dict)
    response: ResponseMetadata | None = None


# ---------------------------------------------------------------------------
# Stream parts — incremental output of a streaming call
# ---------------------------------------------------------------------------


class StreamStart(UnifiedModel):
    type: Literal["stream-start"] = "stream-start"
    warnings: list[Any] = Field(default_factory=list)


class TextStart(UnifiedModel):
    type: Literal["text-start"] = "text-start"
    id: str


class TextDelta(UnifiedModel):
    type: Literal["text-delta"] = "text-delta"
    id: str
    delta: str


class TextEnd(UnifiedModel):
    type: Literal["text-end"] = "text-end"
    id: str


class Finish(UnifiedModel):
    type: Literal["finish"] = "finish"
    finish_reason: FinishReason
    usage: Usage


class StreamError(UnifiedModel):
    """Terminal part emitted when the vendor event source itself fails."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: Literal["error"] = "error"
    error: BaseException


StreamPart = StreamStart | TextStart | TextDelta | TextEnd | ToolCallContent | Finish | StreamError


@dataclass
class StreamResult:
    """Outcome of a streaming call: the lazy part sequence plus the sent body."""

    stream: AsyncIterator[StreamPart]
    request: dict[str, Any] = field(default_factory=dict)
