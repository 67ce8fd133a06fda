"""Language-model gateway.

Routes text and image generation requests to the OpenAI completion, chat
completion and image endpoints and unwraps the single field each caller needs.
"""

from .classifier import classify, resolve_protocol
from .errors import (
    GatewayError,
    MalformedResponseError,
    QuotaError,
    TransportError,
    ValidationFailure,
)
from .gateway import QUOTA_EXCEEDED_MESSAGE, Gateway, complete, get_gateway
from .models import (
    ChatMessage,
    GenerationOptions,
    ImageOptions,
    LogicalRequest,
    Protocol,
    WireRequest,
)

__all__ = [
    "Gateway",
    "get_gateway",
    "complete",
    "classify",
    "resolve_protocol",
    "Protocol",
    "ChatMessage",
    "GenerationOptions",
    "ImageOptions",
    "LogicalRequest",
    "WireRequest",
    "GatewayError",
    "QuotaError",
    "TransportError",
    "MalformedResponseError",
    "ValidationFailure",
    "QUOTA_EXCEEDED_MESSAGE",
]
