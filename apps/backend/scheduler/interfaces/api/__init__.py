"""Interfaces API."""
