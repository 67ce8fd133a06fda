"""Transport implementations.

This package contains implementations of the Transport interface.
"""

from .base import Transport
from .openai import OpenAITransport

__all__ = [
    "Transport",
    "OpenAITransport",
]
