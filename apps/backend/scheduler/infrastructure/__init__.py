"""Infrastructure: adaptadores concretos (PostgreSQL, in-memory)."""
