"""AzureAnthropicLanguageModel — unified model interface over the Messages API.

Renders unified call options into a vendor request body, hands it to the
transport collaborator, and converts what comes back: a complete response
through the response transpiler, an event stream through the stream
processor.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Literal

from azure_anthropic.core.models import CallOptions, FunctionTool, GenerateResult, StreamResult
from azure_anthropic.core.stream import process_stream
from azure_anthropic.core.transpilers.anthropic import (
    convert_prompt,
    convert_response,
    convert_tool_choice,
    convert_tools,
)
from azure_anthropic.provider.config import DEFAULT_MAX_OUTPUT_TOKENS, ModelOptions
from azure_anthropic.utils.telemetry import (
    ATTR_FINISH_REASON,
    ATTR_MESSAGE_COUNT,
    ATTR_MODEL,
    ATTR_PROVIDER,
    ATTR_STREAMING,
    ATTR_TOKENS_CACHE_READ,
    ATTR_TOKENS_INPUT,
    ATTR_TOKENS_OUTPUT,
    ATTR_TOOL_COUNT,
    get_tracer,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from azure_anthropic.provider.transport import MessagesClient

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


class AzureAnthropicLanguageModel:
    """A single Claude deployment on Azure Foundry.

    Usage::

        model = AzureAnthropicLanguageModel("claude-sonnet-4-5-20251001", client)
        result = await model.do_generate(CallOptions(prompt=[UnifiedMessage.user("Hi")]))
    """

    specification_version: Literal["v3"] = "v3"
    provider = "azure-anthropic"
    default_object_generation_mode: Literal["tool"] = "tool"

    def __init__(
        self,
        model_id: str,
        client: MessagesClient,
        options: ModelOptions | None = None,
    ) -> None:
        self.model_id = model_id
        self.client = client
        self.options = options or ModelOptions()
        # No URL-based content fetching; every file must be inlined.
        self.supported_urls: dict[str, list[re.Pattern[str]]] = {}

    async def do_generate(self, options: CallOptions) -> GenerateResult:
        """Generate a complete (non-streaming) response."""
        with _tracer.start_as_current_span("model.generate") as span:
            body = self.build_request_body(options, streaming=False)
            self._annotate(span, body)

            response = await self.client.create(body, abort_signal=options.abort_signal)
            result = convert_response(response, request_body=body)

            usage = result.usage
            if usage.input_tokens.total is not None:
                span.set_attribute(ATTR_TOKENS_INPUT, usage.input_tokens.total)
            if usage.output_tokens.total is not None:
                span.set_attribute(ATTR_TOKENS_OUTPUT, usage.output_tokens.total)
            if usage.input_tokens.cache_read is not None:
                span.set_attribute(ATTR_TOKENS_CACHE_READ, usage.input_tokens.cache_read)
            span.set_attribute(ATTR_FINISH_REASON, result.finish_reason.unified)

            return result

    async def do_stream(self, options: CallOptions) -> StreamResult:
        """Start a streaming response.

        The returned stream is lazy; vendor events are consumed only as the
        caller iterates it.
        """
        with _tracer.start_as_current_span("model.stream") as span:
            body = self.build_request_body(options, streaming=True)
            self._annotate(span, body)

            events = await self.client.create(body, abort_signal=options.abort_signal)

        return StreamResult(stream=process_stream(events), request={"body": body})

    def build_request_body(self, options: CallOptions, streaming: bool) -> dict[str, Any]:
        """Render call options into a vendor request body.

        Optional fields appear only when the caller supplied them.
        """
        converted = convert_prompt(options.prompt)

        function_tools = [t for t in options.tools or [] if isinstance(t, FunctionTool)]
        if options.tools and len(function_tools) < len(options.tools):
            logger.debug(
                "Ignoring %d provider-defined tool(s)", len(options.tools) - len(function_tools)
            )

        max_tokens = options.max_output_tokens
        if max_tokens is None:
            max_tokens = self.options.max_output_tokens
        if max_tokens is None:
            max_tokens = DEFAULT_MAX_OUTPUT_TOKENS

        body: dict[str, Any] = {
            "model": self.model_id,
            "max_tokens": max_tokens,
            "messages": converted.messages,
        }
        if streaming:
            body["stream"] = True
        if converted.system:
            body["system"] = converted.system
        if options.temperature is not None:
            body["temperature"] = options.temperature
        if options.top_p is not None:
            body["top_p"] = options.top_p
        if options.top_k is not None:
            body["top_k"] = options.top_k
        if options.stop_sequences:
            body["stop_sequences"] = list(options.stop_sequences)
        if function_tools:
            body["tools"] = convert_tools(function_tools)
        if options.tool_choice is not None:
            body["tool_choice"] = convert_tool_choice(options.tool_choice)
        return body

    def _annotate(self, span: Span, body: dict[str, Any]) -> None:
        span.set_attribute(ATTR_MODEL, self.model_id)
        span.set_attribute(ATTR_PROVIDER, self.provider)
        span.set_attribute(ATTR_STREAMING, bool(body.get("stream")))
        span.set_attribute(ATTR_MESSAGE_COUNT, len(body["messages"]))
        span.set_attribute(ATTR_TOOL_COUNT, len(body.get("tools", [])))
