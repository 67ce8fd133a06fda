"""Response extraction.

Reads the single field each endpoint's reply is useful for. A reply missing
that field is an error, never an empty string.
"""

from typing import Any

from .errors import MalformedResponseError
from .models import Protocol

IMAGE_DATA_URI_PREFIX = "data:image/png;base64,"


def extract(raw: Any, protocol: Protocol) -> str:
    """Extract generated text, or an image data URI, from a raw response.

    Args:
        raw: Decoded JSON response.
        protocol: Protocol the request was sent with.

    Returns:
        Trimmed text for completion protocols, a PNG data URI for images.

    Raises:
        MalformedResponseError: If the expected path is missing or empty.
    """
    if protocol == Protocol.IMAGE_GENERATION:
        item = _first(raw, "data")
        payload = _field(item, "b64_json", "data[0].b64_json")
        return f"{IMAGE_DATA_URI_PREFIX}{payload}"

    choice = _first(raw, "choices")
    if protocol == Protocol.CHAT_COMPLETION:
        message = choice.get("message")
        if not isinstance(message, dict):
            raise MalformedResponseError("Upstream response is missing choices[0].message")
        return _field(message, "content", "choices[0].message.content").strip()

    return _field(choice, "text", "choices[0].text").strip()


def _first(raw: Any, key: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise MalformedResponseError("Upstream response is not a JSON object")

    items = raw.get(key)
    if not isinstance(items, list) or not items:
        raise MalformedResponseError(f"Upstream response has no {key}")

    first = items[0]
    if not isinstance(first, dict):
        raise MalformedResponseError(f"Upstream response {key}[0] is not an object")
    return first


def _field(obj: dict[str, Any], key: str, path: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise MalformedResponseError(f"Upstream response is missing {path}")
    return value
