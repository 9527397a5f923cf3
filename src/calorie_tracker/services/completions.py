"""Helpers shared by the chat-completion based gateways."""

import base64
import re
from typing import Protocol

_FENCE_PATTERN = re.compile(r"```(?:json)?")


class ChatCompletionsClient(Protocol):
    """Interface for a single chat completion request."""

    async def complete(self, payload: dict[str, object]) -> dict[str, object]:
        """Send a chat completion request and return the decoded body."""


def first_choice_content(body: dict[str, object]) -> str | None:
    """Return the first choice's message content, if it is a string."""
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    choice = choices[0]
    if not isinstance(choice, dict):
        return None
    message = choice.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def strip_code_fences(content: str) -> str:
    """Remove Markdown code fences and surrounding whitespace."""
    return _FENCE_PATTERN.sub("", content).strip()


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
