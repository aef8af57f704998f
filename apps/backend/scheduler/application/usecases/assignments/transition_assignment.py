"""
===============================================================================
USE CASE: Transition Assignment (state machine)
===============================================================================

Business Goal:
    Mover una asignación a otro estado respetando la tabla de transiciones:

        ASSIGNED    -> IN_PROGRESS | COMPLETED | CANCELLED
        IN_PROGRESS -> COMPLETED | CANCELLED
        COMPLETED   -> COMPLETED   (re-escritura benigna de completed_date)
        CANCELLED   -> (terminal)

Business Rules:
    R1) La asignación debe existir (NOT_FOUND).
    R2) can_mutate(actor, owner) o UNAUTHORIZED.
    R3) Transición fuera de la tabla -> CONFLICT.
    R4) status + completed_date se escriben juntos en UNA operación atómica
        del repositorio (guarded update): nunca se observa COMPLETED sin fecha.
    R5) Si otro request cambió el estado entre la lectura y la escritura,
        el guard falla y se responde CONFLICT (gana el primero).

Notas:
    - CompleteAssignmentUseCase es el único driver expuesto por HTTP;
      IN_PROGRESS / CANCELLED quedan disponibles por este caso de uso.
===============================================================================
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.entities import AssignmentStatus
from ....domain.lifecycle import allowed_sources, can_transition, completed_date_for
from ....domain.policy import Actor, can_mutate
from ....domain.repositories import DutyAssignmentRepository
from ..results import AssignmentResult, conflict, not_found, unauthorized


class TransitionAssignmentUseCase:
    def __init__(
        self,
        assignment_repository: DutyAssignmentRepository,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._assignments = assignment_repository
        self._today = today

    def execute(
        self,
        assignment_id: int,
        actor: Actor | None,
        to_status: AssignmentStatus,
    ) -> AssignmentResult:
        if actor is None:
            return AssignmentResult(
                error=unauthorized("Actor is required to update assignments.")
            )

        assignment = self._assignments.get_assignment(assignment_id)
        if assignment is None:
            return AssignmentResult(error=not_found("Assignment", assignment_id))

        if not can_mutate(actor, assignment.user_id):
            logger.warning(
                "Assignment transition denied",
                extra={
                    "assignment_id": assignment_id,
                    "actor_id": actor.user_id,
                    "to_status": to_status.value,
                },
            )
            return AssignmentResult(
                error=unauthorized("Not authorized to update this assignment.")
            )

        if not can_transition(assignment.status, to_status):
            return AssignmentResult(
                error=conflict(
                    f"Assignment {assignment_id} cannot move from "
                    f"{assignment.status.value} to {to_status.value}."
                )
            )

        updated = self._assignments.transition_assignment(
            assignment_id,
            to_status=to_status,
            allowed_from=allowed_sources(to_status),
            completed_date=completed_date_for(to_status, self._today()),
        )
        if updated is None:
            # Lost a race: the stored state no longer admits this transition.
            current = self._assignments.get_assignment(assignment_id)
            if current is None:
                return AssignmentResult(error=not_found("Assignment", assignment_id))
            return AssignmentResult(
                error=conflict(
                    f"Assignment {assignment_id} cannot move from "
                    f"{current.status.value} to {to_status.value}."
                )
            )

        logger.info(
            "Assignment transitioned",
            extra={
                "assignment_id": assignment_id,
                "from_status": assignment.status.value,
                "to_status": to_status.value,
                "actor_id": actor.user_id,
            },
        )
        return AssignmentResult(assignment=updated)
