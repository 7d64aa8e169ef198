"""Tests for the vendor wire models."""

from __future__ import annotations

from types import SimpleNamespace

from azure_anthropic.core.vendor import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    MessageDeltaEvent,
    MessagesResponse,
    TextBlock,
    ToolUseBlock,
    parse_stream_event,
)


def _response(**overrides: object) -> dict[str, object]:
    raw: dict[str, object] = {
        "id": "msg_1",
        "type": "message",
        "role": "assistant",
        "model": "claude-sonnet-4-5",
        "content": [{"type": "text", "text": "Hi"}],
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 3, "output_tokens": 1},
    }
    raw.update(overrides)
    return raw


class TestMessagesResponse:
    def test_parses_dict(self) -> None:
        response = MessagesResponse.model_validate(_response())
        assert response.content == [TextBlock(text="Hi")]
        assert response.usage.cache_read_input_tokens is None

    def test_skips_unknown_blocks(self) -> None:
        response = MessagesResponse.model_validate(
            _response(
                content=[
                    {"type": "thinking", "thinking": "hmm"},
                    {"type": "tool_use", "id": "t1", "name": "f", "input": {"a": 1}},
                ]
            )
        )
        assert response.content == [ToolUseBlock(id="t1", name="f", input={"a": 1})]

    def test_parses_attribute_objects(self) -> None:
        raw = SimpleNamespace(
            id="msg_2",
            model="m",
            content=[SimpleNamespace(type="text", text="ok")],
            stop_reason=None,
            usage=SimpleNamespace(input_tokens=1, output_tokens=2, cache_read_input_tokens=None),
        )
        response = MessagesResponse.model_validate(raw)
        assert response.id == "msg_2"
        assert response.content == [TextBlock(text="ok")]
        assert response.stop_reason is None


class TestParseStreamEvent:
    def test_known_types(self) -> None:
        event = parse_stream_event(
            {
                "type": "content_block_delta",
                "index": 1,
                "delta": {"type": "text_delta", "text": "x"},
            }
        )
        assert isinstance(event, ContentBlockDeltaEvent)
        assert event.index == 1
        assert event.delta.text == "x"

    def test_block_start(self) -> None:
        event = parse_stream_event(
            {
                "type": "content_block_start",
                "index": 0,
                "content_block": {"type": "tool_use", "id": "t", "name": "n", "input": {}},
            }
        )
        assert isinstance(event, ContentBlockStartEvent)
        assert event.content_block.id == "t"

    def test_message_delta_without_usage(self) -> None:
        event = parse_stream_event({"type": "message_delta", "delta": {"stop_reason": "end_turn"}})
        assert isinstance(event, MessageDeltaEvent)
        assert event.usage is None

    def test_ignored_types(self) -> None:
        assert parse_stream_event({"type": "ping"}) is None
        assert parse_stream_event({"type": "message_stop"}) is None
        assert parse_stream_event({}) is None

    def test_malformed_is_ignored(self) -> None:
        assert parse_stream_event({"type": "content_block_stop"}) is None

    def test_already_parsed_passes_through(self) -> None:
        event = MessageDeltaEvent()
        assert parse_stream_event(event) is event
