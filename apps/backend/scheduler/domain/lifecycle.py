"""
===============================================================================
TARJETA CRC — domain/lifecycle.py
===============================================================================

Módulo:
    Ciclo de vida de DutyAssignment + derivación de "overdue"

Responsabilidades:
    - Tabla de transiciones permitidas entre AssignmentStatus.
    - Resolver desde qué estados se puede llegar a un estado destino
      (lo usan los repos para escribir de forma atómica con guarda de estado).
    - Calcular el cutoff de vencimiento y decidir si una asignación vence.

Colaboradores:
    - domain.entities: AssignmentStatus, DutyAssignment, Duty
    - application.usecases.assignments (complete / transition)
    - application.usecases.duties (overdue queries)

Reglas:
    - ASSIGNED    -> IN_PROGRESS | COMPLETED | CANCELLED
    - IN_PROGRESS -> COMPLETED | CANCELLED
    - COMPLETED   -> COMPLETED (re-escritura benigna de completed_date)
    - CANCELLED   -> (terminal)
    - overdue: duty activo AND status == ASSIGNED AND
      assigned_date < today - overdue_after_days. Nunca se persiste.
===============================================================================
"""

from __future__ import annotations

from datetime import date, timedelta

from .entities import AssignmentStatus, Duty, DutyAssignment

DEFAULT_OVERDUE_AFTER_DAYS: int = 7

ALLOWED_TRANSITIONS: dict[AssignmentStatus, frozenset[AssignmentStatus]] = {
    AssignmentStatus.ASSIGNED: frozenset(
        {
            AssignmentStatus.IN_PROGRESS,
            AssignmentStatus.COMPLETED,
            AssignmentStatus.CANCELLED,
        }
    ),
    AssignmentStatus.IN_PROGRESS: frozenset(
        {AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED}
    ),
    AssignmentStatus.COMPLETED: frozenset({AssignmentStatus.COMPLETED}),
    AssignmentStatus.CANCELLED: frozenset(),
}


def can_transition(current: AssignmentStatus, target: AssignmentStatus) -> bool:
    """True si la tabla permite current -> target."""
    return target in ALLOWED_TRANSITIONS[current]


def allowed_sources(target: AssignmentStatus) -> frozenset[AssignmentStatus]:
    """Estados desde los cuales se puede llegar a target."""
    return frozenset(
        source for source, targets in ALLOWED_TRANSITIONS.items() if target in targets
    )


def completed_date_for(target: AssignmentStatus, today: date) -> date | None:
    """completed_date que corresponde al estado destino (invariante)."""
    return today if target == AssignmentStatus.COMPLETED else None


def overdue_cutoff(
    today: date, overdue_after_days: int = DEFAULT_OVERDUE_AFTER_DAYS
) -> date:
    """Asignaciones con assigned_date estrictamente anterior a esto vencen."""
    return today - timedelta(days=overdue_after_days)


def is_overdue(
    assignment: DutyAssignment,
    duty: Duty | None,
    today: date,
    overdue_after_days: int = DEFAULT_OVERDUE_AFTER_DAYS,
) -> bool:
    """Derivación pura de "overdue" (se recalcula en cada consulta)."""
    if duty is None or not duty.is_active:
        return False
    if assignment.status != AssignmentStatus.ASSIGNED:
        return False
    return assignment.assigned_date < overdue_cutoff(today, overdue_after_days)
