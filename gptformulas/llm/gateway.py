"""Language-model gateway facade.

Composes classification, prompt templating, request building, transport and
response extraction into a single call, and translates quota exhaustion into
a user-actionable error.
"""

import logging
import time

from .builder import build_request
from .classifier import resolve_protocol
from .errors import QuotaError, TransportError
from .extractor import extract
from .models import LogicalRequest
from .prompts import render
from .transport.base import Transport
from .transport.openai import OpenAITransport

logger = logging.getLogger(__name__)

QUOTA_ERROR_TYPE = "insufficient_quota"
QUOTA_EXCEEDED_MESSAGE = (
    "You have exceeded your OpenAI quota. Check your plan and billing details at "
    "https://platform.openai.com/account/billing"
)


class Gateway:
    """Single-call gateway to the completion, chat and image endpoints.

    Stateless between calls apart from the transport, so one instance can
    serve concurrent callers. No retries are performed.
    """

    def __init__(self, transport: Transport | None = None):
        """Initialize the gateway.

        Args:
            transport: Transport used to reach upstream. Defaults to an
                OpenAITransport configured from the environment.
        """
        self._transport = transport or OpenAITransport()

    @property
    def transport(self) -> Transport:
        return self._transport

    async def complete(self, request: LogicalRequest) -> str:
        """Run a logical request end to end.

        Args:
            request: Protocol-agnostic request.

        Returns:
            The generated text, an image data URI, or "" for empty input.

        Raises:
            ValidationFailure: Before any network call, on bad arguments.
            QuotaError: Upstream reported exhausted billing quota.
            TransportError: Any other network or HTTP failure.
            MalformedResponseError: Response lacked the expected fields.
        """
        if not request.primary_text:
            logger.debug("Empty prompt, skipping upstream call", extra={"model": request.model})
            return ""

        protocol = resolve_protocol(request)
        prompt = render(request.template, request.primary_text, request.example_text)
        wire = build_request(request.model_copy(update={"primary_text": prompt}), protocol)

        logger.debug(
            "Sending %s request to %s",
            protocol.value,
            wire.url,
            extra={
                "model": request.model,
                "protocol": protocol.value,
                "transport": self._transport.name,
            },
        )

        start_time = time.perf_counter()
        try:
            raw = await self._transport.send(wire)
        except TransportError as e:
            if e.status_code == 429 and e.error_type == QUOTA_ERROR_TYPE:
                logger.warning(
                    "Upstream quota exhausted",
                    extra={"model": request.model, "protocol": protocol.value},
                )
                raise QuotaError(QUOTA_EXCEEDED_MESSAGE) from e

            logger.error(
                "Upstream request failed: %s",
                e.message,
                extra={
                    "model": request.model,
                    "protocol": protocol.value,
                    "status_code": e.status_code,
                    "error_type": e.error_type,
                },
            )
            raise

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        result = extract(raw, protocol)

        logger.info(
            "Gateway request succeeded",
            extra={
                "model": request.model,
                "protocol": protocol.value,
                "latency_ms": latency_ms,
            },
        )
        return result


# Convenience functions for module-level access
_default_gateway: Gateway | None = None


def get_gateway() -> Gateway:
    """Get the default gateway singleton."""
    global _default_gateway
    if _default_gateway is None:
        _default_gateway = Gateway()
    return _default_gateway


def set_gateway(gateway: Gateway | None) -> None:
    """Replace the default gateway (for testing)."""
    global _default_gateway
    _default_gateway = gateway


async def complete(request: LogicalRequest) -> str:
    """Run a request through the default gateway."""
    return await get_gateway().complete(request)
