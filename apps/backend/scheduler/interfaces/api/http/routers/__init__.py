"""Routers HTTP por bounded context."""
