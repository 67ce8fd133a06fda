"""Response models and envelope helpers for the formula API."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str


class ApiResponse(BaseModel):
    """Envelope for catalogue and system endpoints."""

    data: Any | None = None
    error: ErrorDetail | None = None


class FormulaResponse(BaseModel):
    """Result of a formula call: generated text or an image data URI."""

    result: str


def success_response(data: Any) -> dict[str, Any]:
    """Wrap data in the envelope."""
    return {"data": data, "error": None}


def error_response(code: str, message: str) -> dict[str, Any]:
    """Wrap an error code and message in the envelope."""
    return {"data": None, "error": {"code": code, "message": message}}
