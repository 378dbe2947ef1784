"""FastAPI route definitions and request dependencies."""
