"""
===============================================================================
USE CASES: Duty Catalog Queries (read-only)
===============================================================================

Business Goal:
    Exponer las vistas del catálogo de duties:
      - activos: priority DESC, created_at DESC
      - filtro por priority AND is_active: created_at DESC
      - búsqueda libre sobre name OR description (case-insensitive):
        priority DESC, name ASC

Notas:
    - El orden de prioridad es total: URGENT > HIGH > MEDIUM > LOW
      (DutyPriority.rank), nunca alfabético.
    - Todas las lecturas requieren actor autenticado; ninguna muta estado.
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import DutyPriority
from ....domain.policy import Actor
from ....domain.repositories import DutyRepository
from ..results import DutyListResult, unauthorized, validation_error


def _missing_actor() -> DutyListResult:
    return DutyListResult(
        duties=[], error=unauthorized("Actor is required to query duties.")
    )


class ListActiveDutiesUseCase:
    def __init__(self, duty_repository: DutyRepository) -> None:
        self._duties = duty_repository

    def execute(self, actor: Actor | None) -> DutyListResult:
        if actor is None:
            return _missing_actor()
        return DutyListResult(duties=self._duties.list_active_duties())


class FilterDutiesUseCase:
    def __init__(self, duty_repository: DutyRepository) -> None:
        self._duties = duty_repository

    def execute(
        self,
        actor: Actor | None,
        *,
        priority: DutyPriority,
        is_active: bool = True,
    ) -> DutyListResult:
        if actor is None:
            return _missing_actor()
        return DutyListResult(
            duties=self._duties.list_duties_by_priority_and_status(priority, is_active)
        )


class SearchDutiesUseCase:
    def __init__(self, duty_repository: DutyRepository) -> None:
        self._duties = duty_repository

    def execute(self, actor: Actor | None, term: str) -> DutyListResult:
        if actor is None:
            return _missing_actor()

        cleaned = (term or "").strip()
        if not cleaned:
            return DutyListResult(
                duties=[], error=validation_error("Search term is required.")
            )

        return DutyListResult(duties=self._duties.search_duties(cleaned))
