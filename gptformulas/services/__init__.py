"""Services package for formula business logic."""

from . import formula_service

__all__ = ["formula_service"]
