"""FastAPI application setup."""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gptformulas import __version__
from gptformulas.api.response import error_response
from gptformulas.api.routes import formulas, health
from gptformulas.llm import (
    MalformedResponseError,
    QuotaError,
    TransportError,
    ValidationFailure,
)

app = FastAPI(
    title="GPT Formulas API",
    description="Spreadsheet formulas backed by the OpenAI completion, chat and image endpoints",
    version=__version__,
)


# Exception handlers
@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    """Handle invalid formula arguments."""
    return JSONResponse(
        status_code=400,
        content=error_response("VALIDATION_ERROR", exc.message),
    )


@app.exception_handler(QuotaError)
async def quota_error_handler(request: Request, exc: QuotaError) -> JSONResponse:
    """Handle exhausted upstream quota."""
    return JSONResponse(
        status_code=429,
        content=error_response("QUOTA_EXCEEDED", exc.message),
    )


@app.exception_handler(MalformedResponseError)
async def malformed_response_handler(
    request: Request, exc: MalformedResponseError
) -> JSONResponse:
    """Handle upstream replies missing the expected fields."""
    return JSONResponse(
        status_code=502,
        content=error_response("MALFORMED_RESPONSE", exc.message),
    )


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
    """Handle upstream network and HTTP failures."""
    return JSONResponse(
        status_code=502,
        content=error_response("UPSTREAM_ERROR", exc.message),
    )


# Register routes
app.include_router(health.router)
app.include_router(formulas.router, prefix="/api")
