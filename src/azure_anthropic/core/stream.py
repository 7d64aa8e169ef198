"""Stream processing — vendor streaming events to unified stream parts.

:func:`process_stream` is an async generator: each unified part is produced
only when the consumer asks for it, and each vendor event is handled by the
pure step function :func:`process_stream_event` against a
:class:`StreamState` owned by that one stream.

Out-of-order or unknown events (a stop without a start, a JSON delta for an
index with no open tool call) are ignored rather than raised. Only a failure
of the event source itself ends the stream, with a single ``error`` part in
place of ``finish``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterable, AsyncIterator

from azure_anthropic.core.models import (
    Finish,
    FinishReason,
    InputTokens,
    OutputTokens,
    StreamError,
    StreamPart,
    StreamStart,
    TextDelta,
    TextEnd,
    TextStart,
    ToolCallContent,
    Usage,
)
from azure_anthropic.core.transpilers.anthropic import convert_stop_reason
from azure_anthropic.core.vendor import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    MessageDeltaEvent,
    MessageStartEvent,
    StreamEvent,
    parse_stream_event,
)

logger = logging.getLogger(__name__)

DEFAULT_FINISH_REASON = "other"
EMPTY_TOOL_INPUT = "{}"


@dataclass
class ToolCallAccumulator:
    """Tool-call arguments collected across ``input_json_delta`` fragments."""

    id: str
    name: str
    args_text: str = ""


@dataclass
class StreamState:
    """Per-stream accumulation state; never shared between streams."""

    tool_calls: dict[int, ToolCallAccumulator] = field(default_factory=dict)
    text_blocks: set[int] = field(default_factory=set)
    input_tokens: int = 0
    output_tokens: int = 0
    finish_reason_raw: str = DEFAULT_FINISH_REASON


def text_id(index: int) -> str:
    """Synthetic id correlating the start/delta/end parts of a text block."""
    return f"text-{index}"


async def process_stream(events: AsyncIterable[Any]) -> AsyncIterator[StreamPart]:
    """Translate a vendor event stream into unified stream parts.

    ``stream-start`` precedes the first translated part and is omitted when
    the source yields nothing. Not restartable: a fresh source is needed for
    every call.
    """
    state = StreamState()
    started = False

    try:
        try:
            async for raw in events:
                if not started:
                    started = True
                    yield StreamStart()

                event = parse_stream_event(raw)
                if event is None:
                    continue
                for part in process_stream_event(event, state):
                    yield part
        except Exception as exc:
            logger.warning("Vendor event stream failed: %s", exc)
            yield StreamError(error=exc)
            return

        yield finish_part(state)
    finally:
        # Release the source (and its HTTP response) when the consumer stops early.
        aclose = getattr(events, "aclose", None)
        if aclose is not None:
            await aclose()


def process_stream_event(event: StreamEvent, state: StreamState) -> list[StreamPart]:
    """Apply one vendor event to *state* and return the parts it produces."""
    parts: list[StreamPart] = []

    if isinstance(event, MessageStartEvent):
        usage = event.message.usage if event.message is not None else None
        if usage is not None and usage.input_tokens is not None:
            state.input_tokens = usage.input_tokens

    elif isinstance(event, ContentBlockStartEvent):
        block = event.content_block
        if block.type == "text":
            state.text_blocks.add(event.index)
            parts.append(TextStart(id=text_id(event.index)))
        if block.type == "tool_use" and block.id and block.name:
            state.tool_calls[event.index] = ToolCallAccumulator(id=block.id, name=block.name)

    elif isinstance(event, ContentBlockDeltaEvent):
        delta = event.delta
        if delta.type == "text_delta" and delta.text is not None:
            if event.index not in state.text_blocks:
                state.text_blocks.add(event.index)
                parts.append(TextStart(id=text_id(event.index)))
            parts.append(TextDelta(id=text_id(event.index), delta=delta.text))
        if delta.type == "input_json_delta" and delta.partial_json:
            accumulator = state.tool_calls.get(event.index)
            if accumulator is not None:
                accumulator.args_text += delta.partial_json
            else:
                logger.debug("Dropping input_json_delta for unknown block %d", event.index)

    elif isinstance(event, ContentBlockStopEvent):
        if event.index in state.text_blocks:
            parts.append(TextEnd(id=text_id(event.index)))
        accumulator = state.tool_calls.pop(event.index, None)
        if accumulator is not None:
            parts.append(
                ToolCallContent(
                    tool_call_id=accumulator.id,
                    tool_name=accumulator.name,
                    input=accumulator.args_text or EMPTY_TOOL_INPUT,
                )
            )

    elif isinstance(event, MessageDeltaEvent):
        if event.usage is not None and event.usage.output_tokens is not None:
            state.output_tokens = event.usage.output_tokens
        if event.delta is not None and event.delta.stop_reason is not None:
            state.finish_reason_raw = event.delta.stop_reason

    return parts


def finish_part(state: StreamState) -> Finish:
    return Finish(
        finish_reason=FinishReason(
            unified=convert_stop_reason(state.finish_reason_raw),
            raw=state.finish_reason_raw,
        ),
        usage=Usage(
            input_tokens=InputTokens(total=state.input_tokens),
            output_tokens=OutputTokens(total=state.output_tokens, text=state.output_tokens),
        ),
    )
