"""Gateway data models.

Per-call request models shared by the classifier, builder, transport and extractor.
Nothing here outlives a single formula invocation.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class Protocol(str, Enum):
    """Upstream request/response shape."""

    LEGACY_COMPLETION = "legacy_completion"
    CHAT_COMPLETION = "chat_completion"
    IMAGE_GENERATION = "image_generation"


class GenerationOptions(BaseModel):
    """Text generation options. ``None`` leaves the upstream default in place."""

    max_tokens: int | None = Field(default=None, ge=0)
    temperature: float | None = Field(default=None, ge=0.0, le=1.0)
    stop: list[str] | None = Field(default=None, max_length=4)


class ImageOptions(BaseModel):
    """Image generation options."""

    size: str = "512x512"
    style: str | None = None


class ChatMessage(BaseModel):
    """A single chat message."""

    role: Literal["system", "user"]
    content: str


class LogicalRequest(BaseModel):
    """Protocol-agnostic generation request."""

    protocol_hint: Protocol = Protocol.LEGACY_COMPLETION
    model: str
    primary_text: str
    system_text: str | None = None
    example_text: str | None = None
    template: str = "identity"
    options: GenerationOptions = Field(default_factory=GenerationOptions)
    image: ImageOptions = Field(default_factory=ImageOptions)
    # Reject the call instead of upgrading when the model classifies differently
    strict_protocol: bool = False


class WireRequest(BaseModel):
    """Protocol-specific request ready for the transport."""

    protocol: Protocol
    url: str
    body: dict[str, Any]
