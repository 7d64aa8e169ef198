"""Vendor wire models — the Anthropic Messages API as served by Azure Foundry.

Only the inbound side is modelled: the non-streaming response and the
streaming events. Outbound request bodies are plain dicts built by the
transpiler. Inputs are accepted as decoded JSON mappings or as SDK-style
attribute objects; unknown fields are ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class VendorModel(BaseModel):
    model_config = ConfigDict(extra="ignore", from_attributes=True)


# ---------------------------------------------------------------------------
# Non-streaming response
# ---------------------------------------------------------------------------


class TextBlock(VendorModel):
    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(VendorModel):
    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Any = Field(default_factory=dict)


class ResponseUsage(VendorModel):
    input_tokens: int
    output_tokens: int
    cache_read_input_tokens: int | None = None


class MessagesResponse(VendorModel):
    """Body of a completed ``POST /v1/messages`` call."""

    id: str
    model: str
    content: list[TextBlock | ToolUseBlock]
    stop_reason: str | None = None
    usage: ResponseUsage

    @field_validator("content", mode="before")
    @classmethod
    def _known_blocks_only(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        kept: list[Any] = []
        for block in value:
            block_type = _get(block, "type")
            if block_type in ("text", "tool_use"):
                kept.append(block)
            else:
                logger.debug("Skipping unsupported response block type: %s", block_type)
        return kept


# ---------------------------------------------------------------------------
# Streaming events
# ---------------------------------------------------------------------------


class StartUsage(VendorModel):
    input_tokens: int | None = None


class StartMessage(VendorModel):
    usage: StartUsage | None = None


class MessageStartEvent(VendorModel):
    type: Literal["message_start"] = "message_start"
    message: StartMessage | None = None


class StartedBlock(VendorModel):
    type: str
    id: str | None = None
    name: str | None = None
    text: str | None = None


class ContentBlockStartEvent(VendorModel):
    type: Literal["content_block_start"] = "content_block_start"
    index: int
    content_block: StartedBlock


class BlockDelta(VendorModel):
    type: str
    text: str | None = None
    partial_json: str | None = None


class ContentBlockDeltaEvent(VendorModel):
    type: Literal["content_block_delta"] = "content_block_delta"
    index: int
    delta: BlockDelta


class ContentBlockStopEvent(VendorModel):
    type: Literal["content_block_stop"] = "content_block_stop"
    index: int


class MessageDelta(VendorModel):
    stop_reason: str | None = None


class DeltaUsage(VendorModel):
    output_tokens: int | None = None


class MessageDeltaEvent(VendorModel):
    type: Literal["message_delta"] = "message_delta"
    delta: MessageDelta | None = None
    usage: DeltaUsage | None = None


StreamEvent = (
    MessageStartEvent
    | ContentBlockStartEvent
    | ContentBlockDeltaEvent
    | ContentBlockStopEvent
    | MessageDeltaEvent
)

_EVENT_MODELS: dict[str, type[VendorModel]] = {
    "message_start": MessageStartEvent,
    "content_block_start": ContentBlockStartEvent,
    "content_block_delta": ContentBlockDeltaEvent,
    "content_block_stop": ContentBlockStopEvent,
    "message_delta": MessageDeltaEvent,
}


def parse_stream_event(raw: Any) -> StreamEvent | None:
    """Validate one vendor streaming event.

    Returns ``None`` for event types that carry nothing to translate
    (``ping``, ``message_stop``, ...) and for events that fail validation.
    """
    if isinstance(raw, VendorModel):
        return raw  # type: ignore[return-value]
    event_type = _get(raw, "type")
    model = _EVENT_MODELS.get(event_type) if isinstance(event_type, str) else None
    if model is None:
        logger.debug("Ignoring stream event type: %s", event_type)
        return None
    try:
        return model.model_validate(raw)  # type: ignore[return-value]
    except ValidationError as exc:
        logger.debug("Ignoring malformed %s event: %s", event_type, exc)
        return None


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)
