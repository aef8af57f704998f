"""
===============================================================================
USE CASE: Assign Duty
===============================================================================

Business Goal:
    Crear una ocurrencia de un duty del catálogo para un usuario concreto.

Business Rules:
    R1) Actor requerido (cualquier usuario autenticado puede asignar).
    R2) user y duty deben existir; se chequea primero el user, así que si
        faltan ambos el error nombra al User. Si la referencia desaparece
        entre el chequeo y el insert, el repo lo informa y sigue siendo
        NOT_FOUND.
    R3) Un duty inactivo no admite nuevas asignaciones (soft delete).
    R4) Estado inicial ASSIGNED, completed_date ausente.
    R5) assigned_date default = hoy (reloj inyectable).
    R6) notes opcionales y acotadas.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  AssignDutyUseCase

Collaborators:
  - DutyRepository / UserRepository: existencia de referencias
  - DutyAssignmentRepository: create_assignment
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.entities import AssignmentStatus, DutyAssignment
from ....domain.errors import MissingReferenceError
from ....domain.policy import Actor
from ....domain.repositories import (
    DutyAssignmentRepository,
    DutyRepository,
    UserRepository,
)
from ..reservations.create_reservation import DEFAULT_MAX_NOTES_CHARS
from ..results import AssignmentResult, not_found, unauthorized, validation_error


@dataclass(frozen=True)
class AssignDutyInput:
    actor: Actor | None
    duty_id: int
    user_id: int
    assigned_date: date | None = None
    notes: str | None = None


class AssignDutyUseCase:
    def __init__(
        self,
        assignment_repository: DutyAssignmentRepository,
        duty_repository: DutyRepository,
        user_repository: UserRepository,
        *,
        max_notes_chars: int = DEFAULT_MAX_NOTES_CHARS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._assignments = assignment_repository
        self._duties = duty_repository
        self._users = user_repository
        self._max_notes_chars = max_notes_chars
        self._today = today

    def execute(self, input_data: AssignDutyInput) -> AssignmentResult:
        if input_data.actor is None:
            return AssignmentResult(
                error=unauthorized("Actor is required to assign duties.")
            )

        user = self._users.get_user(input_data.user_id)
        if user is None:
            return AssignmentResult(error=not_found("User", input_data.user_id))

        duty = self._duties.get_duty(input_data.duty_id)
        if duty is None:
            return AssignmentResult(error=not_found("Duty", input_data.duty_id))

        if not duty.is_active:
            return AssignmentResult(
                error=validation_error(
                    f"Duty {duty.id} is inactive and cannot be assigned."
                )
            )

        notes = (input_data.notes or "").strip() or None
        if notes is not None and len(notes) > self._max_notes_chars:
            return AssignmentResult(
                error=validation_error(
                    f"Notes must be at most {self._max_notes_chars} characters."
                )
            )

        try:
            created = self._assignments.create_assignment(
                DutyAssignment(
                    id=None,
                    duty_id=duty.id,
                    user_id=user.id,
                    assigned_date=input_data.assigned_date or self._today(),
                    status=AssignmentStatus.ASSIGNED,
                    completed_date=None,
                    notes=notes,
                )
            )
        except MissingReferenceError as exc:
            return AssignmentResult(error=not_found(exc.entity, exc.entity_id))

        logger.info(
            "Duty assigned",
            extra={
                "assignment_id": created.id,
                "duty_id": created.duty_id,
                "user_id": created.user_id,
                "actor_id": input_data.actor.user_id,
            },
        )
        return AssignmentResult(assignment=created)
