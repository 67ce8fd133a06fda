"""Health check endpoint."""

from fastapi import APIRouter

from gptformulas import __version__
from gptformulas.api.response import ApiResponse, success_response

router = APIRouter(tags=["System"])


@router.get("/health", response_model=ApiResponse)
async def health_check() -> dict:
    """Report liveness and the running version. Does not call upstream."""
    return success_response({"status": "ok", "version": __version__})
