"""Error taxonomy for the Azure Anthropic provider.

Two kinds only: ``validation`` (provider configuration rejected before any
conversion runs) and ``conversion`` (a content part or media type the
vendor protocol cannot carry).
"""

from __future__ import annotations

from typing import Literal

ErrorCode = Literal["validation", "conversion"]

SUPPORTED_IMAGE_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
)


class AzureAnthropicError(Exception):
    """Base error for all provider failures."""

    provider = "azure-anthropic"

    def __init__(self, code: ErrorCode, message: str, field: str | None = None) -> None:
        self.code: ErrorCode = code
        self.field = field
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class ProviderValidationError(AzureAnthropicError):
    """Provider settings are missing or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__("validation", message, field)


class ConversionError(AzureAnthropicError):
    """Content could not be converted to or from the vendor format."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__("conversion", message, field)


class UnsupportedContentPartError(ConversionError):
    """A content part type is not allowed for the enclosing message role."""

    def __init__(self, part_type: str, role: str) -> None:
        self.part_type = part_type
        self.role = role
        super().__init__(f"Unsupported {role} content part type: {part_type}")


class UnsupportedMediaTypeError(ConversionError):
    """A file part carries a media type outside the image allow-list."""

    def __init__(self, media_type: str) -> None:
        self.media_type = media_type
        super().__init__(
            f"Unsupported image media type: {media_type}. "
            f"Supported: {', '.join(SUPPORTED_IMAGE_TYPES)}",
            field="mediaType",
        )
