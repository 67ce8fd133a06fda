"""GPT formulas: spreadsheet formulas backed by the OpenAI API."""

__version__ = "1.0.0"
