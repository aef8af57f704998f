"""API entrypoint (FastAPI app + exception handlers)."""
