"""Model classification.

Decides which wire protocol a model id speaks. Matching is by substring so
dated snapshots ("gpt-4-0314", "gpt-3.5-turbo-0301", "gpt-4-32k") route
without being listed. A name that merely contains one of the markers is
routed to chat as well.
"""

from .errors import ValidationFailure
from .models import LogicalRequest, Protocol

CHAT_MODEL_MARKERS = ("gpt-3.5-turbo", "gpt-4")


def classify(model: str) -> Protocol:
    """Return the text protocol for a model id."""
    if any(marker in model for marker in CHAT_MODEL_MARKERS):
        return Protocol.CHAT_COMPLETION
    return Protocol.LEGACY_COMPLETION


def resolve_protocol(request: LogicalRequest) -> Protocol:
    """Resolve the protocol for a request.

    Image generation is only ever chosen by the caller. For text, the
    classified protocol wins over the hint unless the request is strict.

    Raises:
        ValidationFailure: If the request is strict and the model classifies
            to a different protocol than hinted.
    """
    if request.protocol_hint == Protocol.IMAGE_GENERATION:
        return Protocol.IMAGE_GENERATION

    protocol = classify(request.model)
    if request.strict_protocol and protocol != request.protocol_hint:
        raise ValidationFailure(
            f"Model '{request.model}' requires {protocol.value} but this formula "
            f"only supports {request.protocol_hint.value}"
        )
    return protocol
