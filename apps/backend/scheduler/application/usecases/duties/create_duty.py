"""
===============================================================================
USE CASE: Create Duty (catálogo, admin-only)
===============================================================================

Business Rules:
    R1) Solo ADMIN crea duties (no aplica ownership).
    R2) name requerido (no vacío luego de strip), largo acotado.
    R3) description acotada; estimated_hours >= 0 si viene.
    R4) priority default MEDIUM; is_active siempre True al crear.

Error Mapping:
    - UNAUTHORIZED: actor ausente o no ADMIN.
    - VALIDATION_ERROR: R2/R3.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.entities import Duty, DutyPriority
from ....domain.policy import Actor, is_admin
from ....domain.repositories import DutyRepository
from ..results import DutyResult, unauthorized, validation_error


@dataclass(frozen=True)
class CreateDutyInput:
    actor: Actor | None
    name: str
    description: str | None = None
    estimated_hours: int | None = None
    priority: DutyPriority | None = None


class CreateDutyUseCase:
    def __init__(
        self,
        duty_repository: DutyRepository,
        *,
        max_name_chars: int = 100,
        max_description_chars: int = 500,
    ) -> None:
        self._duties = duty_repository
        self._max_name_chars = max_name_chars
        self._max_description_chars = max_description_chars

    def execute(self, input_data: CreateDutyInput) -> DutyResult:
        if not is_admin(input_data.actor):
            return DutyResult(error=unauthorized("Only admins can create duties."))

        name = (input_data.name or "").strip()
        if not name:
            return DutyResult(error=validation_error("Duty name is required."))
        if len(name) > self._max_name_chars:
            return DutyResult(
                error=validation_error(
                    f"Duty name must be at most {self._max_name_chars} characters."
                )
            )

        description = (input_data.description or "").strip() or None
        if description is not None and len(description) > self._max_description_chars:
            return DutyResult(
                error=validation_error(
                    "Duty description must be at most "
                    f"{self._max_description_chars} characters."
                )
            )

        if input_data.estimated_hours is not None and input_data.estimated_hours < 0:
            return DutyResult(
                error=validation_error("estimated_hours must be >= 0.")
            )

        created = self._duties.create_duty(
            Duty(
                id=None,
                name=name,
                description=description,
                estimated_hours=input_data.estimated_hours,
                priority=input_data.priority or DutyPriority.MEDIUM,
                is_active=True,
            )
        )
        logger.info(
            "Duty created",
            extra={"duty_id": created.id, "priority": created.priority.value},
        )
        return DutyResult(duty=created)
