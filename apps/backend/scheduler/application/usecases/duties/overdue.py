"""
===============================================================================
USE CASES: Overdue derivation (read-only)
===============================================================================

Business Goal:
    Detectar trabajo atrasado: una asignación vence si su duty está activo,
    sigue en ASSIGNED y su assigned_date es anterior a hoy - N días
    (N = overdue_after_days, 7 por defecto).

Why:
    - "Overdue" NO se persiste: se recalcula en cada consulta a partir de los
      datos actuales y del reloj, para no quedar desactualizado.

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) cutoff = overdue_cutoff(today, N)
2) repo: pares (asignación, duty) ASSIGNED con assigned_date < cutoff y
   duty activo, leídos en UN snapshot (assigned_date ASC)
3) is_overdue() sobre cada par (la regla vive en el dominio)
4) duties: distintos, en el orden de su asignación vencida más vieja
===============================================================================
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from ....domain.entities import Duty, DutyAssignment
from ....domain.lifecycle import (
    DEFAULT_OVERDUE_AFTER_DAYS,
    is_overdue,
    overdue_cutoff,
)
from ....domain.policy import Actor
from ....domain.repositories import DutyAssignmentRepository
from ..results import AssignmentListResult, DutyListResult, unauthorized


class _OverdueQuery:
    """Base compartida: resuelve asignaciones vencidas + sus duties."""

    def __init__(
        self,
        assignment_repository: DutyAssignmentRepository,
        *,
        overdue_after_days: int = DEFAULT_OVERDUE_AFTER_DAYS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._assignments = assignment_repository
        self._overdue_after_days = overdue_after_days
        self._today = today

    def _overdue(self) -> list[tuple[DutyAssignment, Duty]]:
        today = self._today()
        rows = self._assignments.list_overdue_assignments(
            overdue_cutoff(today, self._overdue_after_days)
        )
        return [
            (assignment, duty)
            for assignment, duty in rows
            if is_overdue(assignment, duty, today, self._overdue_after_days)
        ]


class ListOverdueAssignmentsUseCase(_OverdueQuery):
    """Asignaciones vencidas, assigned_date ASC (la más vieja primero)."""

    def execute(self, actor: Actor | None) -> AssignmentListResult:
        if actor is None:
            return AssignmentListResult(
                assignments=[],
                error=unauthorized("Actor is required to query assignments."),
            )
        return AssignmentListResult(
            assignments=[assignment for assignment, _ in self._overdue()]
        )


class ListOverdueDutiesUseCase(_OverdueQuery):
    """Duties con al menos una asignación vencida (sin duplicados)."""

    def execute(self, actor: Actor | None) -> DutyListResult:
        if actor is None:
            return DutyListResult(
                duties=[], error=unauthorized("Actor is required to query duties.")
            )
        seen: set[int] = set()
        ordered: list[Duty] = []
        for _, duty in self._overdue():
            if duty.id in seen:
                continue
            seen.add(duty.id)
            ordered.append(duty)
        return DutyListResult(duties=ordered)
