"""FastAPI delivery layer for historial reports."""
