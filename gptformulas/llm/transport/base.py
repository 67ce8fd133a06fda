"""Abstract base class for transports.

Defines the interface the gateway uses to deliver a prepared request.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..models import WireRequest


class Transport(ABC):
    """Base interface for delivering wire requests upstream."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Transport identifier, used in logs."""
        ...

    @abstractmethod
    async def send(self, wire: WireRequest) -> dict[str, Any]:
        """Send a wire request and return the decoded JSON response.

        Args:
            wire: Protocol-specific request built by the gateway.

        Returns:
            The response body as a plain dict.

        Raises:
            TransportError: Non-2xx status, timeout, or connection failure.
                The structured upstream error body is kept on the exception.
        """
        ...
