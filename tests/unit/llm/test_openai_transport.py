"""Unit tests for the OpenAI transport.

Tests cover:
- Configuration from arguments and environment variables
- Endpoint dispatch per protocol
- Error mapping with the upstream error body preserved
"""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from openai import APIConnectionError, APIStatusError, APITimeoutError

from gptformulas.llm.errors import TransportError
from gptformulas.llm.models import Protocol, WireRequest
from gptformulas.llm.transport.openai import OpenAITransport

COMPLETIONS_URL = "https://api.openai.com/v1/completions"


def make_status_error(status_code: int, body: dict | None) -> APIStatusError:
    """Build a real SDK status error for a fake response."""
    request = httpx.Request("POST", COMPLETIONS_URL)
    response = httpx.Response(status_code, request=request)
    return APIStatusError(f"Error code: {status_code}", response=response, body=body)


def make_mock_client(return_value: dict) -> MagicMock:
    """Mock AsyncOpenAI client whose resources return ``return_value``."""
    mock_response = MagicMock()
    mock_response.model_dump = MagicMock(return_value=return_value)

    mock_client = MagicMock()
    mock_client.completions.create = AsyncMock(return_value=mock_response)
    mock_client.chat.completions.create = AsyncMock(return_value=mock_response)
    mock_client.images.generate = AsyncMock(return_value=mock_response)
    return mock_client


class TestOpenAITransportInit:
    """Tests for transport configuration."""

    def test_transport_name(self):
        """Test transport name is correct."""
        assert OpenAITransport(api_key="test-key").name == "openai"

    def test_defaults(self):
        """Test default base URL and timeout."""
        with patch.dict(os.environ, {}, clear=True):
            transport = OpenAITransport(api_key="test-key")
        assert transport._base_url == "https://api.openai.com/v1"
        assert transport._timeout == 60.0

    def test_environment_configuration(self):
        """Test configuration from environment variables."""
        with patch.dict(os.environ, {
            "OPENAI_API_KEY": "env-key",
            "OPENAI_BASE_URL": "http://localhost:8080/v1",
            "GATEWAY_TIMEOUT_SECONDS": "15",
        }):
            transport = OpenAITransport()
        assert transport._api_key == "env-key"
        assert transport._base_url == "http://localhost:8080/v1"
        assert transport._timeout == 15.0

    def test_explicit_arguments_win(self):
        """Test constructor arguments override the environment."""
        with patch.dict(os.environ, {"GATEWAY_TIMEOUT_SECONDS": "15"}):
            transport = OpenAITransport(api_key="k", timeout=5.0)
        assert transport._timeout == 5.0

    def test_client_disables_retries(self):
        """Test the SDK client is built without retries."""
        transport = OpenAITransport(api_key="test-key")
        assert transport.client.max_retries == 0

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        """Test sending without a key raises TransportError."""
        with patch.dict(os.environ, {}, clear=True):
            transport = OpenAITransport()
        wire = WireRequest(
            protocol=Protocol.LEGACY_COMPLETION,
            url=COMPLETIONS_URL,
            body={"model": "text-ada-001", "prompt": "hi"},
        )

        with pytest.raises(TransportError) as exc_info:
            await transport.send(wire)

        assert "OPENAI_API_KEY" in exc_info.value.message


class TestOpenAITransportDispatch:
    """Tests for endpoint dispatch."""

    @pytest.mark.asyncio
    async def test_legacy_completion(self):
        """Test legacy bodies go to completions.create."""
        transport = OpenAITransport(api_key="test-key")
        mock_client = make_mock_client({"choices": [{"text": "hi"}]})
        wire = WireRequest(
            protocol=Protocol.LEGACY_COMPLETION,
            url=COMPLETIONS_URL,
            body={"model": "text-ada-001", "prompt": "hi", "max_tokens": 5},
        )

        with patch.object(transport, "_client", mock_client):
            raw = await transport.send(wire)

        assert raw == {"choices": [{"text": "hi"}]}
        mock_client.completions.create.assert_awaited_once_with(
            model="text-ada-001", prompt="hi", max_tokens=5
        )
        mock_client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_chat_completion(self):
        """Test chat bodies go to chat.completions.create."""
        transport = OpenAITransport(api_key="test-key")
        mock_client = make_mock_client({"choices": [{"message": {"content": "hi"}}]})
        messages = [{"role": "user", "content": "hi"}]
        wire = WireRequest(
            protocol=Protocol.CHAT_COMPLETION,
            url="https://api.openai.com/v1/chat/completions",
            body={"model": "gpt-4", "messages": messages},
        )

        with patch.object(transport, "_client", mock_client):
            await transport.send(wire)

        mock_client.chat.completions.create.assert_awaited_once_with(
            model="gpt-4", messages=messages
        )
        mock_client.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_image_generation(self):
        """Test image bodies go to images.generate."""
        transport = OpenAITransport(api_key="test-key")
        mock_client = make_mock_client({"data": [{"b64_json": "QUJD"}]})
        body = {"size": "512x512", "prompt": "a cat", "response_format": "b64_json"}
        wire = WireRequest(
            protocol=Protocol.IMAGE_GENERATION,
            url="https://api.openai.com/v1/images/generations",
            body=body,
        )

        with patch.object(transport, "_client", mock_client):
            raw = await transport.send(wire)

        assert raw["data"][0]["b64_json"] == "QUJD"
        mock_client.images.generate.assert_awaited_once_with(**body)


class TestOpenAITransportErrors:
    """Tests for SDK error mapping."""

    def _wire(self) -> WireRequest:
        return WireRequest(
            protocol=Protocol.LEGACY_COMPLETION,
            url=COMPLETIONS_URL,
            body={"model": "text-ada-001", "prompt": "hi"},
        )

    @pytest.mark.asyncio
    async def test_status_error_keeps_body(self):
        """Test status errors keep status, type, message and body."""
        transport = OpenAITransport(api_key="test-key")
        body = {
            "message": "You exceeded your current quota",
            "type": "insufficient_quota",
            "code": "insufficient_quota",
        }
        error = make_status_error(429, body)
        mock_client = MagicMock()
        mock_client.completions.create = AsyncMock(side_effect=error)

        with patch.object(transport, "_client", mock_client):
            with pytest.raises(TransportError) as exc_info:
                await transport.send(self._wire())

        assert exc_info.value.status_code == 429
        assert exc_info.value.error_type == "insufficient_quota"
        assert exc_info.value.message == "You exceeded your current quota"
        assert exc_info.value.body == body
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_status_error_without_body(self):
        """Test status errors without a JSON body keep the SDK message."""
        transport = OpenAITransport(api_key="test-key")
        error = make_status_error(502, None)
        mock_client = MagicMock()
        mock_client.completions.create = AsyncMock(side_effect=error)

        with patch.object(transport, "_client", mock_client):
            with pytest.raises(TransportError) as exc_info:
                await transport.send(self._wire())

        assert exc_info.value.status_code == 502
        assert exc_info.value.error_type is None
        assert "502" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test timeouts become TransportError."""
        transport = OpenAITransport(api_key="test-key", timeout=3.0)
        error = APITimeoutError(request=httpx.Request("POST", COMPLETIONS_URL))
        mock_client = MagicMock()
        mock_client.completions.create = AsyncMock(side_effect=error)

        with patch.object(transport, "_client", mock_client):
            with pytest.raises(TransportError) as exc_info:
                await transport.send(self._wire())

        assert "timed out" in exc_info.value.message
        assert exc_info.value.status_code is None
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_connection_error(self):
        """Test connection failures become TransportError."""
        transport = OpenAITransport(api_key="test-key")
        error = APIConnectionError(request=httpx.Request("POST", COMPLETIONS_URL))
        mock_client = MagicMock()
        mock_client.completions.create = AsyncMock(side_effect=error)

        with patch.object(transport, "_client", mock_client):
            with pytest.raises(TransportError) as exc_info:
                await transport.send(self._wire())

        assert "Failed to connect" in exc_info.value.message
