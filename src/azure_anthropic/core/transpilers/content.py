"""Content-part conversion between the unified and vendor content models.

Request side turns one unified part into one vendor content block, gated by
the role of the enclosing message. Response side turns one vendor response
block into one unified content item.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Literal

from azure_anthropic.core.models import (
    ContentPart,
    FilePart,
    GeneratedContent,
    TextPart,
    ToolCallContent,
    ToolCallPart,
    ToolResultPart,
)
from azure_anthropic.core.vendor import TextBlock, ToolUseBlock
from azure_anthropic.errors import (
    SUPPORTED_IMAGE_TYPES,
    UnsupportedContentPartError,
    UnsupportedMediaTypeError,
)

ConversationRole = Literal["user", "assistant"]


def dump_json(value: Any) -> str:
    """Serialize *value* compactly, the way the vendor writes JSON."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


# ---------------------------------------------------------------------------
# Request side: unified -> vendor
# ---------------------------------------------------------------------------


def convert_content_part(part: ContentPart, role: ConversationRole) -> dict[str, Any]:
    """Convert a single unified content part into a vendor content block.

    Raises:
        UnsupportedContentPartError: the part type is not allowed for *role*.
        UnsupportedMediaTypeError: a file part is not a supported image type.
    """
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}
    if isinstance(part, FilePart):
        if role != "user":
            raise UnsupportedContentPartError(part.type, role)
        return convert_file_part(part)
    if isinstance(part, ToolCallPart):
        if role != "assistant":
            raise UnsupportedContentPartError(part.type, role)
        return convert_tool_call_part(part)
    raise UnsupportedContentPartError(part.type, role)


def convert_file_part(part: FilePart) -> dict[str, Any]:
    if part.media_type not in SUPPORTED_IMAGE_TYPES:
        raise UnsupportedMediaTypeError(part.media_type)
    return {
        "type": "image",
        "source": {
            "type": "base64",
            "media_type": part.media_type,
            "data": extract_base64_data(part.data),
        },
    }


def extract_base64_data(data: bytes | str) -> str:
    """Normalize file data to a bare base64 payload.

    Bytes are encoded; a ``data:`` URL is cut after its first comma; any other
    string is assumed to be base64 already.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(data)).decode("ascii")
    if data.startswith("data:"):
        _, comma, payload = data.partition(",")
        if comma:
            return payload
    return data


def convert_tool_call_part(part: ToolCallPart) -> dict[str, Any]:
    return {
        "type": "tool_use",
        "id": part.tool_call_id,
        "name": part.tool_name,
        "input": parse_tool_arguments(part.args),
    }


def parse_tool_arguments(args: str | dict[str, Any]) -> Any:
    """Best-effort parse of tool-call arguments.

    Unparseable JSON degrades to an empty object; this never raises.
    """
    if not isinstance(args, str):
        return args
    try:
        return json.loads(args)
    except ValueError:
        return {}


def convert_tool_result_part(part: ToolResultPart) -> dict[str, Any]:
    """Convert a tool result; the vendor block's content is always a string."""
    content = part.result if isinstance(part.result, str) else dump_json(part.result)
    block: dict[str, Any] = {
        "type": "tool_result",
        "tool_use_id": part.tool_call_id,
        "content": content,
    }
    if part.is_error is not None:
        block["is_error"] = part.is_error
    return block


# ---------------------------------------------------------------------------
# Response side: vendor -> unified
# ---------------------------------------------------------------------------


def convert_response_block(block: TextBlock | ToolUseBlock) -> GeneratedContent:
    if isinstance(block, TextBlock):
        return TextPart(text=block.text)
    return ToolCallContent(
        tool_call_id=block.id,
        tool_name=block.name,
        input=dump_json(block.input),
    )
