"""Tracing for model calls.

Spans are created through the OpenTelemetry API only; with no SDK installed
they are no-ops, so the model layer traces unconditionally::

    _tracer = get_tracer(__name__)
    with _tracer.start_as_current_span("model.generate") as span:
        span.set_attribute(ATTR_MODEL, model_id)

``azure-anthropic --telemetry`` calls :func:`configure_telemetry` to print
spans to the console (``otel`` extra).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_MODEL = "azure_anthropic.model"
ATTR_PROVIDER = "azure_anthropic.provider"
ATTR_STREAMING = "azure_anthropic.streaming"
ATTR_MESSAGE_COUNT = "azure_anthropic.messages"
ATTR_TOOL_COUNT = "azure_anthropic.tools"
ATTR_TOKENS_INPUT = "azure_anthropic.tokens.input"
ATTR_TOKENS_OUTPUT = "azure_anthropic.tokens.output"
ATTR_TOKENS_CACHE_READ = "azure_anthropic.tokens.cache_read"
ATTR_FINISH_REASON = "azure_anthropic.finish_reason"

_INSTRUMENTATION_NAME = "azure_anthropic"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(*, service_name: str = "azure-anthropic") -> Any:
    """Install an SDK tracer provider that prints finished spans to stdout.

    Requires the ``otel`` extra. Returns the installed provider so callers
    can flush or shut it down.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install azure-anthropic-provider[otel]"
        )
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    return provider
