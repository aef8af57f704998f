"""HTTP API (FastAPI routers + schemas)."""
