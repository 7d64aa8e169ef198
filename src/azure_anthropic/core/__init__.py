"""Unified protocol models and the vendor conversion engine."""

from azure_anthropic.core.models import (
    CallOptions,
    ContentPart,
    FilePart,
    Finish,
    FinishReason,
    FunctionTool,
    GenerateResult,
    ReasoningPart,
    StreamError,
    StreamPart,
    StreamResult,
    StreamStart,
    TextDelta,
    TextEnd,
    TextPart,
    TextStart,
    ToolCallContent,
    ToolCallPart,
    ToolResultPart,
    UnifiedMessage,
    Usage,
)
from azure_anthropic.core.stream import StreamState, process_stream
from azure_anthropic.core.transpiler import Transpiler

__all__ = [
    "CallOptions",
    "ContentPart",
    "FilePart",
    "Finish",
    "FinishReason",
    "FunctionTool",
    "GenerateResult",
    "ReasoningPart",
    "StreamError",
    "StreamPart",
    "StreamResult",
    "StreamStart",
    "StreamState",
    "TextDelta",
    "TextEnd",
    "TextPart",
    "TextStart",
    "ToolCallContent",
    "ToolCallPart",
    "ToolResultPart",
    "Transpiler",
    "UnifiedMessage",
    "Usage",
    "process_stream",
]
