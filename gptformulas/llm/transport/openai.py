"""OpenAI transport implementation.

Delivers wire requests through the official SDK client, one resource per
endpoint. The SDK's own retries are disabled: a call is sent exactly once.
"""

import os
from typing import Any

from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from ..errors import TransportError
from ..models import Protocol, WireRequest
from .base import Transport


class OpenAITransport(Transport):
    """Transport backed by ``AsyncOpenAI``.

    Configuration (env vars):
    - OPENAI_API_KEY: Bearer token for the API
    - OPENAI_BASE_URL: API root (default: https://api.openai.com/v1)
    - GATEWAY_TIMEOUT_SECONDS: Request timeout (default: 60)
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    DEFAULT_TIMEOUT = 60.0

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the transport.

        Args:
            api_key: OpenAI API key. Defaults to OPENAI_API_KEY env var.
            base_url: API root. Defaults to OPENAI_BASE_URL env var.
            timeout: Request timeout in seconds. Defaults to GATEWAY_TIMEOUT_SECONDS env var.
        """
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self._base_url = base_url or os.environ.get("OPENAI_BASE_URL", self.DEFAULT_BASE_URL)
        self._timeout = (
            timeout
            if timeout is not None
            else float(os.environ.get("GATEWAY_TIMEOUT_SECONDS", self.DEFAULT_TIMEOUT))
        )
        self._client: AsyncOpenAI | None = None

    @property
    def name(self) -> str:
        """Transport identifier."""
        return "openai"

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-initialized OpenAI client."""
        if self._client is None:
            if not self._api_key:
                raise TransportError(
                    "OpenAI API key not configured. Set OPENAI_API_KEY environment variable.",
                    status_code=401,
                )
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    async def send(self, wire: WireRequest) -> dict[str, Any]:
        """Send a wire request to OpenAI.

        Raises:
            TransportError: On any SDK-level failure.
        """
        try:
            response = await self._dispatch(wire)

        except APITimeoutError as e:
            raise TransportError(
                f"OpenAI request timed out after {self._timeout}s",
            ) from e

        except APIConnectionError as e:
            raise TransportError(
                f"Failed to connect to OpenAI: {e}",
            ) from e

        except APIStatusError as e:
            raise self._status_error(e) from e

        return response.model_dump()

    async def _dispatch(self, wire: WireRequest) -> Any:
        if wire.protocol == Protocol.CHAT_COMPLETION:
            return await self.client.chat.completions.create(**wire.body)
        if wire.protocol == Protocol.IMAGE_GENERATION:
            return await self.client.images.generate(**wire.body)
        return await self.client.completions.create(**wire.body)

    def _status_error(self, error: APIStatusError) -> TransportError:
        """Convert an SDK status error, keeping the upstream error body."""
        body = error.body
        message = str(error.message) if hasattr(error, "message") else str(error)
        error_type = None

        # The SDK unwraps {"error": {...}} so body is the inner object
        if isinstance(body, dict):
            message = body.get("message") or message
            error_type = body.get("type")

        return TransportError(
            message,
            status_code=error.status_code,
            error_type=error_type,
            body=body,
        )
