"""
===============================================================================
USE CASE: Complete Assignment
===============================================================================

Business Rules:
    R1) NOT_FOUND -> UNAUTHORIZED -> chequeo de lifecycle -> escritura atómica.
    R2) completed_date = hoy (reloj del server, precisión de día).
    R3) Completar dos veces es una re-escritura benigna (nueva fecha = hoy).
    R4) Completar una asignación CANCELLED -> CONFLICT.
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import AssignmentStatus
from ....domain.policy import Actor
from ..results import AssignmentResult
from .transition_assignment import TransitionAssignmentUseCase


class CompleteAssignmentUseCase(TransitionAssignmentUseCase):
    """Driver de ASSIGNED/IN_PROGRESS/COMPLETED -> COMPLETED."""

    def execute(  # type: ignore[override]
        self, assignment_id: int, actor: Actor | None
    ) -> AssignmentResult:
        return super().execute(assignment_id, actor, AssignmentStatus.COMPLETED)
