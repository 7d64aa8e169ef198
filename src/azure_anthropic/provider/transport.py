"""Messages transport — the single "create message" call against Azure Foundry.

:class:`FoundryMessagesClient` satisfies :class:`MessagesClient`. It returns
the decoded response for a regular request and an async iterator of decoded
Server-Sent Events when the body sets ``"stream": true``.

Retries are not attempted here.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterable, AsyncIterator, Protocol, runtime_checkable

import httpx

from azure_anthropic.provider.config import ProviderSettings

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/v1/messages"


class TransportError(Exception):
    """Base error for failures talking to the vendor service."""


class FoundryAPIError(TransportError):
    """The service answered with an error status or a stream ``error`` event."""

    def __init__(self, message: str, status_code: int | None = None, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        prefix = f"HTTP {status_code}: " if status_code is not None else ""
        super().__init__(prefix + message)


class RequestAbortedError(TransportError):
    """The caller's abort signal was set."""

    def __init__(self) -> None:
        super().__init__("Request aborted")


@runtime_checkable
class MessagesClient(Protocol):
    """Transport collaborator consumed by the language model."""

    async def create(
        self, body: dict[str, Any], *, abort_signal: asyncio.Event | None = None
    ) -> Any: ...


@dataclass
class ServerSentEvent:
    event: str | None
    data: str


async def iter_sse(lines: AsyncIterable[str]) -> AsyncIterator[ServerSentEvent]:
    """Group raw SSE lines into events; comments and unknown fields are skipped."""
    event: str | None = None
    data: list[str] = []

    async for line in lines:
        if not line:
            if data:
                yield ServerSentEvent(event=event, data="\n".join(data))
            event, data = None, []
            continue
        if line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        value = value.removeprefix(" ")
        if name == "event":
            event = value
        elif name == "data":
            data.append(value)

    if data:
        yield ServerSentEvent(event=event, data="\n".join(data))


def _check_aborted(signal: asyncio.Event | None) -> None:
    if signal is not None and signal.is_set():
        raise RequestAbortedError


class FoundryMessagesClient:
    """HTTP client for the Anthropic Messages API hosted on Azure Foundry.

    Usage::

        async with FoundryMessagesClient(settings) as client:
            response = await client.create({"model": ..., "messages": ...})
    """

    def __init__(
        self, settings: ProviderSettings, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._settings = settings
        self._url = settings.base_url.rstrip("/") + MESSAGES_PATH
        self._client = http_client or httpx.AsyncClient(timeout=settings.timeout)

    async def __aenter__(self) -> FoundryMessagesClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "api-key": self._settings.api_key,
            "anthropic-version": self._settings.api_version,
            "content-type": "application/json",
            **self._settings.headers,
        }

    async def create(
        self, body: dict[str, Any], *, abort_signal: asyncio.Event | None = None
    ) -> Any:
        """POST *body* to the messages endpoint."""
        _check_aborted(abort_signal)
        if body.get("stream"):
            return await self._create_stream(body, abort_signal)

        try:
            response = await self._client.post(self._url, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc
        if response.is_error:
            raise FoundryAPIError(response.text, response.status_code, response.text)
        try:
            return response.json()
        except ValueError as exc:
            msg = f"Malformed response body: {response.text[:200]}"
            raise TransportError(msg) from exc

    async def _create_stream(
        self, body: dict[str, Any], abort_signal: asyncio.Event | None
    ) -> AsyncIterator[dict[str, Any]]:
        request = self._client.build_request(
            "POST", self._url, json=body, headers=self._headers()
        )
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc
        if response.is_error:
            try:
                await response.aread()
            finally:
                await response.aclose()
            raise FoundryAPIError(response.text, response.status_code, response.text)
        return self._iter_events(response, abort_signal)

    async def _iter_events(
        self, response: httpx.Response, abort_signal: asyncio.Event | None
    ) -> AsyncIterator[dict[str, Any]]:
        try:
            async for sse in iter_sse(response.aiter_lines()):
                _check_aborted(abort_signal)
                try:
                    payload: dict[str, Any] = json.loads(sse.data)
                except json.JSONDecodeError as exc:
                    msg = f"Malformed stream event data: {sse.data[:200]}"
                    raise TransportError(msg) from exc
                if sse.event == "error" or payload.get("type") == "error":
                    error = payload.get("error")
                    detail = error.get("message") if isinstance(error, dict) else error
                    raise FoundryAPIError(str(detail or "stream error"), body=payload)
                yield payload
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc
        finally:
            await response.aclose()
