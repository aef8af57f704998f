"""
===============================================================================
TARJETA CRC — domain/errors.py
===============================================================================

Responsabilidades:
    - Nombrar los rechazos de integridad que solo el store puede decidir de
      forma atómica (unicidad, referencias borradas en paralelo).
    - Los repositorios los lanzan; los casos de uso los traducen a
      CONFLICT / NOT_FOUND. Nunca llegan al borde HTTP como 5xx.

Colaboradores:
    - infrastructure.repositories (in_memory / postgres)
    - application.usecases (users, assignments, reservations)
===============================================================================
"""

from __future__ import annotations


class DuplicateUserError(Exception):
    """username o email ya pertenecen a otro usuario."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{field} '{value}' already in use")
        self.field = field
        self.value = value


class MissingReferenceError(Exception):
    """La fila referida (User / Duty) desapareció antes del insert."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
