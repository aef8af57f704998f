"""Adaptadores de persistencia (in_memory / postgres)."""
