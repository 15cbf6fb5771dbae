"""Composición de la app FastAPI (main, exception handlers)."""
