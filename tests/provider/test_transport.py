"""Tests for the Foundry messages transport."""

from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator

import httpx
import pytest

from azure_anthropic.provider.config import ProviderSettings
from azure_anthropic.provider.transport import (
    FoundryAPIError,
    FoundryMessagesClient,
    MessagesClient,
    RequestAbortedError,
    ServerSentEvent,
    TransportError,
    iter_sse,
)

_SETTINGS = ProviderSettings(
    base_url="https://res.services.ai.azure.com/anthropic/",
    api_key="secret",
    headers={"x-custom": "yes"},
)


def _client(handler: Any) -> FoundryMessagesClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FoundryMessagesClient(_SETTINGS, http_client=http)


def _sse(*events: tuple[str, dict[str, Any]]) -> bytes:
    chunks = [f"event: {name}\ndata: {json.dumps(data)}\n\n" for name, data in events]
    return "".join(chunks).encode()


async def _lines(*lines: str) -> AsyncIterator[str]:
    for line in lines:
        yield line


class TestIterSSE:
    async def test_groups_events(self) -> None:
        events = [
            e
            async for e in iter_sse(
                _lines("event: ping", "data: {}", "", ": comment", "data: a", "data: b", "")
            )
        ]
        assert events == [
            ServerSentEvent(event="ping", data="{}"),
            ServerSentEvent(event=None, data="a\nb"),
        ]

    async def test_flushes_trailing_event(self) -> None:
        events = [e async for e in iter_sse(_lines("data:x"))]
        assert events == [ServerSentEvent(event=None, data="x")]

    async def test_event_without_data_is_dropped(self) -> None:
        events = [e async for e in iter_sse(_lines("event: ping", "", "id: 1", ""))]
        assert events == []


class TestCreate:
    async def test_posts_body_with_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "msg_1"})

        async with _client(handler) as client:
            result = await client.create({"model": "m", "messages": []})

        assert result == {"id": "msg_1"}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://res.services.ai.azure.com/anthropic/v1/messages"
        assert request.headers["api-key"] == "secret"
        assert request.headers["anthropic-version"] == "2023-06-01"
        assert request.headers["x-custom"] == "yes"
        assert json.loads(request.content) == {"model": "m", "messages": []}

    async def test_error_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text="unauthorized")

        async with _client(handler) as client:
            with pytest.raises(FoundryAPIError, match="HTTP 401: unauthorized") as exc_info:
                await client.create({"model": "m", "messages": []})
        assert exc_info.value.status_code == 401

    async def test_malformed_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>gateway</html>")

        async with _client(handler) as client:
            with pytest.raises(TransportError, match="Malformed response body"):
                await client.create({"model": "m", "messages": []})

    async def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(TransportError, match="refused"):
                await client.create({"model": "m", "messages": []})

    async def test_aborted_before_send(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={})

        signal = asyncio.Event()
        signal.set()
        async with _client(handler) as client:
            with pytest.raises(RequestAbortedError, match="Request aborted"):
                await client.create({"model": "m", "messages": []}, abort_signal=signal)
        assert calls == []

    def test_satisfies_protocol(self) -> None:
        client = FoundryMessagesClient(_SETTINGS, http_client=httpx.AsyncClient())
        assert isinstance(client, MessagesClient)


class TestCreateStream:
    async def test_yields_decoded_events(self) -> None:
        body = _sse(
            ("message_start", {"type": "message_start", "message": {"usage": {"input_tokens": 3}}}),
            ("ping", {"type": "ping"}),
            ("message_stop", {"type": "message_stop"}),
        )

        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content)["stream"] is True
            return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

        async with _client(handler) as client:
            events = await client.create({"model": "m", "messages": [], "stream": True})
            received = [e async for e in events]

        assert [e["type"] for e in received] == ["message_start", "ping", "message_stop"]

    async def test_error_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(529, text="overloaded")

        async with _client(handler) as client:
            with pytest.raises(FoundryAPIError, match="HTTP 529") as exc_info:
                await client.create({"model": "m", "messages": [], "stream": True})
        assert exc_info.value.body == "overloaded"

    async def test_error_event(self) -> None:
        body = _sse(
            ("message_start", {"type": "message_start", "message": {}}),
            (
                "error",
                {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}},
            ),
        )

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body)

        async with _client(handler) as client:
            events = await client.create({"model": "m", "messages": [], "stream": True})
            first = await events.__anext__()
            assert first["type"] == "message_start"
            with pytest.raises(FoundryAPIError, match="Overloaded"):
                await events.__anext__()

    async def test_malformed_data(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"data: {not json\n\n")

        async with _client(handler) as client:
            events = await client.create({"model": "m", "messages": [], "stream": True})
            with pytest.raises(TransportError, match="Malformed stream event"):
                _ = [e async for e in events]

    async def test_abort_mid_stream(self) -> None:
        body = _sse(
            ("message_start", {"type": "message_start", "message": {}}),
            ("message_stop", {"type": "message_stop"}),
        )

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body)

        signal = asyncio.Event()
        async with _client(handler) as client:
            events = await client.create(
                {"model": "m", "messages": [], "stream": True}, abort_signal=signal
            )
            await events.__anext__()
            signal.set()
            with pytest.raises(RequestAbortedError):
                await events.__anext__()
