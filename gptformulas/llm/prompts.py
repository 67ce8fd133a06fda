"""Prompt templates for the formulas.

Each template is a pure rewrite of the user's text applied before the wire
request is built. Templates never affect protocol routing.
"""

from collections.abc import Callable, Sequence

from .errors import ValidationFailure

EXAMPLE_DELIMITER = "```"

QUESTION_ANSWER_PREAMBLE = """I am a highly intelligent question answering bot. If you ask me a question that is rooted in truth, I will give you the answer. If you ask me a question that is nonsense, trickery, or has no clear answer, I will respond with "Unknown".

Q: What is human life expectancy in the United States?
A: Human life expectancy in the United States is 78 years.

Q: Who was president of the United States in 1955?
A: Dwight D. Eisenhower was president of the United States in 1955.

Q: Which party did he belong to?
A: He belonged to the Republican Party.

Q: What is the square root of banana?
A: Unknown

Q: How does a telescope work?
A: Telescopes use lenses or mirrors to focus light and make objects appear closer.

Q: Where were the 1992 Olympics held?
A: The 1992 Olympics were held in Barcelona, Spain.

Q: How many squigs are in a bonk?
A: Unknown

"""


def identity(text: str, example_text: str | None = None) -> str:
    return text


def question_answer(text: str, example_text: str | None = None) -> str:
    return f"{QUESTION_ANSWER_PREAMBLE}Q: {text}\nA: "


def summarize(text: str, example_text: str | None = None) -> str:
    return f"{text}\ntldr;\n"


def keywords(text: str, example_text: str | None = None) -> str:
    return f"Extract keywords from this text:\n{text}"


def sentiment(text: str, example_text: str | None = None) -> str:
    return (
        "Decide whether the text's sentiment is positive, neutral, or negative.\n"
        f"Text: {text}\n"
        "Sentiment: "
    )


def mood_to_color(text: str, example_text: str | None = None) -> str:
    return f"The css code for a color like {text}:\nbackground-color: #"


def examples(text: str, example_text: str | None = None) -> str:
    """Append the real prompt after the rendered example block."""
    return f"{example_text or ''}{EXAMPLE_DELIMITER}{text}\n"


TEMPLATES: dict[str, Callable[[str, str | None], str]] = {
    "identity": identity,
    "question_answer": question_answer,
    "summarize": summarize,
    "keywords": keywords,
    "sentiment": sentiment,
    "mood_to_color": mood_to_color,
    "examples": examples,
}


def render(template: str, text: str, example_text: str | None = None) -> str:
    """Apply a named template to the user's text.

    Raises:
        ValidationFailure: If the template name is unknown.
    """
    try:
        rewrite = TEMPLATES[template]
    except KeyError:
        raise ValidationFailure(
            f"Unknown prompt template: {template}. Available: {list(TEMPLATES)}"
        ) from None
    return rewrite(text, example_text)


def build_examples(
    training_prompts: Sequence[str],
    training_responses: Sequence[str],
) -> str:
    """Render example pairs as ``"{prompt}\\n{response}"`` joined by the delimiter.

    Raises:
        ValidationFailure: If the two lists differ in length.
    """
    if len(training_prompts) != len(training_responses):
        raise ValidationFailure(
            "Must have same number of example prompts as example responses"
        )
    return EXAMPLE_DELIMITER.join(
        f"{prompt}\n{response}"
        for prompt, response in zip(training_prompts, training_responses)
    )
