"""FastAPI host surface for the formulas."""
