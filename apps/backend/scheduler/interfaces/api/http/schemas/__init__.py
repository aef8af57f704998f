"""DTOs HTTP (pydantic)."""
