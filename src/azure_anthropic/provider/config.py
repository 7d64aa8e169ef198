"""Provider configuration — endpoint, credentials, per-model options."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field

ENV_BASE_URL = "AZURE_ANTHROPIC_BASE_URL"
ENV_API_KEY = "AZURE_ANTHROPIC_API_KEY"
ENV_MODEL_ID = "AZURE_ANTHROPIC_MODEL_ID"

DEFAULT_MODEL_ID = "claude-sonnet-4-5-20251001"
DEFAULT_MAX_OUTPUT_TOKENS = 4096
ANTHROPIC_VERSION = "2023-06-01"


class ProviderSettings(BaseModel):
    """Connection settings for an Azure AI Foundry Anthropic endpoint.

    ``base_url`` is the resource's Anthropic root, e.g.
    ``https://my-resource.services.ai.azure.com/anthropic``.
    """

    base_url: str = ""
    api_key: str = ""
    headers: dict[str, str] = Field(default_factory=lambda: dict[str, str]())
    api_version: str = ANTHROPIC_VERSION
    timeout: float = 600.0

    @classmethod
    def from_env(cls, **overrides: Any) -> ProviderSettings:
        """Build settings from ``AZURE_ANTHROPIC_*`` variables.

        Non-``None`` keyword overrides take precedence over the environment.
        """
        values: dict[str, Any] = {
            "base_url": os.environ.get(ENV_BASE_URL, ""),
            "api_key": os.environ.get(ENV_API_KEY, ""),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class ModelOptions(BaseModel):
    """Per-model defaults applied when a call does not set them."""

    max_output_tokens: int | None = None
