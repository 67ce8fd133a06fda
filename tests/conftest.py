"""Pytest fixtures for testing."""

from typing import Any

import pytest

from gptformulas.llm.gateway import Gateway
from gptformulas.llm.models import WireRequest
from gptformulas.llm.transport.base import Transport


class StubTransport(Transport):
    """Call-counting transport that replays a canned response or error."""

    def __init__(self, response: Any = None, error: Exception | None = None):
        self.response = response if response is not None else {"choices": [{"text": "ok"}]}
        self.error = error
        self.calls: list[WireRequest] = []

    @property
    def name(self) -> str:
        return "stub"

    async def send(self, wire: WireRequest) -> dict[str, Any]:
        self.calls.append(wire)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def stub_transport() -> StubTransport:
    """Transport returning a legacy completion of "ok"."""
    return StubTransport()


@pytest.fixture
def gateway(stub_transport: StubTransport) -> Gateway:
    """Gateway wired to the stub transport."""
    return Gateway(transport=stub_transport)
