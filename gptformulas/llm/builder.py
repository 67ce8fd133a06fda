"""Request building.

Turns a LogicalRequest into the body for one of the three fixed endpoints.
Options left as None are omitted from the body rather than sent as null.
"""

from types import MappingProxyType
from typing import Any

from .models import ChatMessage, LogicalRequest, Protocol, WireRequest

API_BASE_URL = "https://api.openai.com/v1"

ENDPOINT_PATHS = MappingProxyType({
    Protocol.LEGACY_COMPLETION: "/completions",
    Protocol.CHAT_COMPLETION: "/chat/completions",
    Protocol.IMAGE_GENERATION: "/images/generations",
})

IMAGE_RESPONSE_FORMAT = "b64_json"

STYLE_PHRASES = MappingProxyType({
    "Cave wall": "drawn on a cave wall",
    "Basquiat": "in the style of Basquiat",
    "Digital art": "as digital art",
    "Photorealistic": "in a photorealistic style",
    "Andy Warhol": "in the style of Andy Warhol",
    "Pencil drawing": "as a pencil drawing",
    "1990s Saturday morning cartoon": "as a 1990s Saturday morning cartoon",
    "Steampunk": "in a steampunk style",
    "Solarpunk": "in a solarpunk style",
    "Studio Ghibli": "in the style of Studio Ghibli",
    "Movie poster": "as a movie poster",
    "Book cover": "as a book cover",
    "Album cover": "as an album cover",
    "3D Icon": "as a 3D icon",
    "Ukiyo-e": "in the style of Ukiyo-e",
})


def style_phrase(style: str) -> str:
    """Look up the prompt phrase for a style name, passing unknown names through."""
    return STYLE_PHRASES.get(style, style)


def endpoint_url(protocol: Protocol) -> str:
    """Full URL of the endpoint serving a protocol."""
    return API_BASE_URL + ENDPOINT_PATHS[protocol]


def build_messages(request: LogicalRequest) -> list[ChatMessage]:
    """Chat messages for a request: optional system message, then the user text."""
    messages = []
    if request.system_text:
        messages.append(ChatMessage(role="system", content=request.system_text))
    messages.append(ChatMessage(role="user", content=request.primary_text))
    return messages


def build_request(request: LogicalRequest, protocol: Protocol) -> WireRequest:
    """Build the wire request for an already resolved protocol.

    ``request.primary_text`` is used as-is; prompt templates are applied
    before this point.
    """
    if protocol == Protocol.IMAGE_GENERATION:
        body = _build_image_body(request)
    else:
        body = _build_text_body(request, protocol)

    return WireRequest(protocol=protocol, url=endpoint_url(protocol), body=body)


def _build_text_body(request: LogicalRequest, protocol: Protocol) -> dict[str, Any]:
    body: dict[str, Any] = {"model": request.model}

    if protocol == Protocol.CHAT_COMPLETION:
        body["messages"] = [msg.model_dump() for msg in build_messages(request)]
    else:
        body["prompt"] = request.primary_text

    options = request.options
    if options.max_tokens is not None:
        body["max_tokens"] = options.max_tokens
    if options.temperature is not None:
        body["temperature"] = options.temperature
    if options.stop:
        body["stop"] = list(options.stop)

    return body


def _build_image_body(request: LogicalRequest) -> dict[str, Any]:
    prompt = request.primary_text
    if request.image.style:
        prompt = f"{prompt} {style_phrase(request.image.style)}"

    return {
        "size": request.image.size,
        "prompt": prompt,
        "response_format": IMAGE_RESPONSE_FORMAT,
    }
