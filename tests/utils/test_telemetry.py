"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from azure_anthropic.utils.telemetry import (
    ATTR_FINISH_REASON,
    ATTR_MODEL,
    _INSTRUMENTATION_NAME,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        tracer = get_tracer("test.module")
        assert isinstance(tracer, trace.Tracer)

    def test_default_name(self) -> None:
        tracer = get_tracer()
        assert isinstance(tracer, trace.Tracer)

    def test_noop_span(self) -> None:
        """Without SDK configured, spans should be no-ops."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("test") as span:
            span.set_attribute(ATTR_MODEL, "claude")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_installs_console_provider(self) -> None:
        try:
            from opentelemetry.sdk.trace import TracerProvider
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch("azure_anthropic.utils.telemetry.trace.set_tracer_provider") as set_provider:
            provider = configure_telemetry(service_name="test-svc")

        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "test-svc"
        set_provider.assert_called_once_with(provider)


class TestAttributeConstants:
    def test_constants_are_namespaced(self) -> None:
        assert ATTR_MODEL.startswith("azure_anthropic.")
        assert ATTR_FINISH_REASON.startswith("azure_anthropic.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "azure_anthropic"
