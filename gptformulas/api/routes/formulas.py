"""Formula endpoints.

Provides endpoints for:
- GET /formulas: List the available formulas
- GET /formulas/autocomplete/{field}: Suggestions for models, sizes and styles
- POST /formulas/<formula>: Run one formula on the supplied text

Argument defaults live on the formula config models; fields left out of a
request body take those defaults.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from gptformulas.api.response import (
    ApiResponse,
    FormulaResponse,
    error_response,
    success_response,
)
from gptformulas.services import formula_service

router = APIRouter(prefix="/formulas", tags=["Formulas"])


class TextFormulaRequest(BaseModel):
    """Request body for the text formulas."""

    text: str
    model: str | None = None
    max_tokens: int | None = None
    temperature: float | None = None
    stop: list[str] | None = None


class PromptRequest(TextFormulaRequest):
    """Request body for GPT3Prompt."""

    system_prompt: str | None = None


class PromptExamplesRequest(TextFormulaRequest):
    """Request body for GPT3PromptExamples."""

    training_prompts: list[str]
    training_responses: list[str]


class ImageRequest(BaseModel):
    """Request body for CreateDalleImage."""

    text: str
    size: str | None = None
    style: str | None = None


async def _run(name: str, request: BaseModel) -> FormulaResponse:
    args = request.model_dump(exclude_none=True, exclude={"text"})
    result = await formula_service.run_formula(name, request.text, args)
    return FormulaResponse(result=result)


@router.get("", response_model=ApiResponse)
async def list_formulas() -> dict:
    """List formula names and descriptions."""
    return success_response(formula_service.list_formulas())


@router.get("/autocomplete/{field}", response_model=ApiResponse)
async def autocomplete(field: str):
    """Return suggestions for a formula argument."""
    if field not in formula_service.AUTOCOMPLETE:
        return JSONResponse(
            status_code=404,
            content=error_response("UNKNOWN_FIELD", f"No suggestions for '{field}'"),
        )
    return success_response(formula_service.AUTOCOMPLETE[field])


@router.post("/prompt", response_model=FormulaResponse)
async def prompt(request: PromptRequest) -> FormulaResponse:
    """Complete text from a prompt."""
    return await _run("GPT3Prompt", request)


@router.post("/prompt-examples", response_model=FormulaResponse)
async def prompt_examples(request: PromptExamplesRequest) -> FormulaResponse:
    """Complete text from a prompt and example prompt/response pairs.

    Only legacy completion models are accepted.
    """
    return await _run("GPT3PromptExamples", request)


@router.post("/question-answer", response_model=FormulaResponse)
async def question_answer(request: TextFormulaRequest) -> FormulaResponse:
    """Answer a natural language question."""
    return await _run("QuestionAnswer", request)


@router.post("/summarize", response_model=FormulaResponse)
async def summarize(request: TextFormulaRequest) -> FormulaResponse:
    """Summarize a large chunk of text."""
    return await _run("Summarize", request)


@router.post("/keywords", response_model=FormulaResponse)
async def keywords(request: TextFormulaRequest) -> FormulaResponse:
    """Extract keywords from a large chunk of text."""
    return await _run("Keywords", request)


@router.post("/mood-to-color", response_model=FormulaResponse)
async def mood_to_color(request: TextFormulaRequest) -> FormulaResponse:
    """Generate a CSS hex color for a mood."""
    return await _run("MoodToColor", request)


@router.post("/sentiment", response_model=FormulaResponse)
async def sentiment(request: TextFormulaRequest) -> FormulaResponse:
    """Classify sentiment as positive, neutral, or negative."""
    return await _run("SentimentClassifier", request)


@router.post("/image", response_model=FormulaResponse)
async def image(request: ImageRequest) -> FormulaResponse:
    """Create an image from a prompt, returned as a PNG data URI."""
    return await _run("CreateDalleImage", request)
