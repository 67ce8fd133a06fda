"""API routes package."""

from . import formulas, health

__all__ = ["formulas", "health"]
