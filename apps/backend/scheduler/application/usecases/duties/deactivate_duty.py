"""
===============================================================================
USE CASE: Deactivate Duty (soft delete, admin-only)
===============================================================================

Business Rules:
    R1) Solo ADMIN.
    R2) El duty debe existir.
    R3) Idempotente: desactivar un duty inactivo es éxito.
    R4) Nunca se borra físicamente: las asignaciones históricas lo referencian.
===============================================================================
"""

from __future__ import annotations

from ....domain.policy import Actor, is_admin
from ....domain.repositories import DutyRepository
from ..results import DutyResult, not_found, unauthorized


class DeactivateDutyUseCase:
    def __init__(self, duty_repository: DutyRepository) -> None:
        self._duties = duty_repository

    def execute(self, duty_id: int, actor: Actor | None) -> DutyResult:
        if not is_admin(actor):
            return DutyResult(error=unauthorized("Only admins can deactivate duties."))

        duty = self._duties.get_duty(duty_id)
        if duty is None:
            return DutyResult(error=not_found("Duty", duty_id))

        if not duty.is_active:
            return DutyResult(duty=duty)

        updated = self._duties.set_duty_active(duty_id, False)
        if updated is None:
            return DutyResult(error=not_found("Duty", duty_id))
        return DutyResult(duty=updated)
