"""Formula service.

Defines the spreadsheet formulas and runs them through the gateway:
- GPT3Prompt: complete text from a prompt
- GPT3PromptExamples: complete text from a prompt and example pairs
- QuestionAnswer, Summarize, Keywords, MoodToColor, SentimentClassifier:
  fixed prompt templates over the user's text
- CreateDalleImage: generate an image and return it as a data URI

Each formula has an explicit config model whose field defaults are the
formula's documented defaults.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from gptformulas.llm import (
    GenerationOptions,
    ImageOptions,
    LogicalRequest,
    Protocol,
    ValidationFailure,
    get_gateway,
)
from gptformulas.llm.builder import STYLE_PHRASES
from gptformulas.llm.gateway import Gateway
from gptformulas.llm.prompts import build_examples

DEFAULT_MODEL = "text-davinci-002"

# Autocomplete suggestions; any model id is accepted
MODEL_SUGGESTIONS = [
    "text-davinci-002",
    "text-curie-001",
    "text-babbage-001",
    "text-ada-001",
    "gpt-3.5-turbo",
    "gpt-4",
]

IMAGE_SIZES = ["256x256", "512x512", "1024x1024"]


class TextFormulaConfig(BaseModel):
    """Arguments shared by the text formulas.

    max_tokens defaults to 512; most legacy models cap at 2048 (4000 for davinci).
    temperature must be between 0.0 and 1.0; None uses the upstream default of 1.0.
    stop takes up to 4 sequences.
    """

    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=512, ge=0)
    temperature: float | None = Field(default=None, ge=0.0, le=1.0)
    stop: list[str] | None = Field(default=None, max_length=4)

    def options(self) -> GenerationOptions:
        return GenerationOptions(
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            stop=self.stop,
        )


class PromptConfig(TextFormulaConfig):
    """GPT3Prompt. ``system_prompt`` is sent only when the model is a chat model."""

    system_prompt: str | None = None


class ExamplesConfig(TextFormulaConfig):
    """GPT3PromptExamples. Both lists must have the same, non-zero length."""

    training_prompts: list[str] = Field(default_factory=list)
    training_responses: list[str] = Field(default_factory=list)


class QuestionAnswerConfig(TextFormulaConfig):
    max_tokens: int = Field(default=128, ge=0)


class SummarizeConfig(TextFormulaConfig):
    max_tokens: int = Field(default=64, ge=0)


class KeywordsConfig(TextFormulaConfig):
    max_tokens: int = Field(default=64, ge=0)


class MoodToColorConfig(TextFormulaConfig):
    max_tokens: int = Field(default=6, ge=0)


class SentimentConfig(TextFormulaConfig):
    max_tokens: int = Field(default=20, ge=0)


class ImageConfig(BaseModel):
    """CreateDalleImage. ``style`` may be any STYLE_PHRASES key or free text."""

    size: str = "512x512"
    style: str | None = None


@dataclass(frozen=True)
class Formula:
    """A formula exposed to the host."""

    name: str
    description: str
    template: str
    config_cls: type[BaseModel]


FORMULAS: dict[str, Formula] = {
    formula.name: formula
    for formula in (
        Formula("GPT3Prompt", "Complete text from a prompt", "identity", PromptConfig),
        Formula(
            "GPT3PromptExamples",
            "Complete text from a prompt and a set of examples",
            "examples",
            ExamplesConfig,
        ),
        Formula(
            "QuestionAnswer",
            "Answer a question, simply provide a natural language question that you "
            "might ask Google or Wikipedia",
            "question_answer",
            QuestionAnswerConfig,
        ),
        Formula("Summarize", "Summarize a large chunk of text", "summarize", SummarizeConfig),
        Formula(
            "Keywords",
            "Extract keywords from a large chunk of text",
            "keywords",
            KeywordsConfig,
        ),
        Formula("MoodToColor", "Generate a color for a mood", "mood_to_color", MoodToColorConfig),
        Formula(
            "SentimentClassifier",
            "Categorizes sentiment of text into positive, neutral, or negative",
            "sentiment",
            SentimentConfig,
        ),
        Formula("CreateDalleImage", "Create image from prompt", "identity", ImageConfig),
    )
}

AUTOCOMPLETE: dict[str, list[str]] = {
    "models": MODEL_SUGGESTIONS,
    "sizes": IMAGE_SIZES,
    "styles": list(STYLE_PHRASES),
}


def get_formula(name: str) -> Formula:
    """Look up a formula by name.

    Raises:
        ValidationFailure: If the formula does not exist.
    """
    if name not in FORMULAS:
        raise ValidationFailure(f"Unknown formula: {name}. Available: {list(FORMULAS)}")
    return FORMULAS[name]


def make_config(formula: Formula, config: BaseModel | dict[str, Any] | None) -> BaseModel:
    """Coerce caller arguments into the formula's config model.

    Raises:
        ValidationFailure: If an argument violates its constraints.
    """
    if isinstance(config, formula.config_cls):
        return config
    if isinstance(config, BaseModel):
        config = config.model_dump(exclude_unset=True)

    try:
        return formula.config_cls(**(config or {}))
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationFailure(f"Invalid arguments for {formula.name}: {details}") from e


async def run_formula(
    name: str,
    text: str,
    config: BaseModel | dict[str, Any] | None = None,
    gateway: Gateway | None = None,
) -> str:
    """Run a formula on the user's text.

    Args:
        name: Formula name, e.g. "Summarize".
        text: The user's text. Empty text returns "" without calling upstream.
        config: Formula arguments; missing fields take the formula defaults.
        gateway: Gateway to use. Defaults to the module-level gateway.

    Returns:
        The generated text, or a PNG data URI for CreateDalleImage.

    Raises:
        GatewayError: ValidationFailure before any network call, or the
            gateway's Quota, Transport and MalformedResponse errors.
    """
    formula = get_formula(name)
    args = make_config(formula, config)
    gateway = gateway or get_gateway()

    if isinstance(args, ImageConfig):
        request = LogicalRequest(
            protocol_hint=Protocol.IMAGE_GENERATION,
            model="",
            primary_text=text,
            image=ImageOptions(size=args.size, style=args.style),
        )
        return await gateway.complete(request)

    example_text = None
    strict_protocol = False
    if isinstance(args, ExamplesConfig):
        example_text = build_examples(args.training_prompts, args.training_responses)
        if not text:
            return ""
        if not args.training_responses:
            raise ValidationFailure("Please provide some training responses")
        strict_protocol = True

    request = LogicalRequest(
        protocol_hint=Protocol.LEGACY_COMPLETION,
        model=args.model,
        primary_text=text,
        system_text=getattr(args, "system_prompt", None),
        example_text=example_text,
        template=formula.template,
        options=args.options(),
        strict_protocol=strict_protocol,
    )
    return await gateway.complete(request)


def list_formulas() -> list[dict[str, str]]:
    """Formula catalogue for the host."""
    return [
        {"name": formula.name, "description": formula.description}
        for formula in FORMULAS.values()
    ]
