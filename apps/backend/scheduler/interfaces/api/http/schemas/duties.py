"""
===============================================================================
TARJETA CRC — schemas/duties.py
===============================================================================

Responsabilidades:
    - DTOs del catálogo de duties y de las asignaciones.
    - Límites (name/description/notes/estimated_hours) desde settings.
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, Field

from scheduler.crosscutting.config import get_settings
from scheduler.domain.entities import (
    AssignmentStatus,
    Duty,
    DutyAssignment,
    DutyPriority,
)

_settings = get_settings()


# -----------------------------------------------------------------------------
# Duties
# -----------------------------------------------------------------------------
class CreateDutyReq(BaseModel):
    name: Annotated[
        str,
        Field(..., min_length=1, max_length=_settings.max_duty_name_chars),
    ]
    description: str | None = Field(
        default=None, max_length=_settings.max_description_chars
    )
    estimated_hours: int | None = Field(default=None, ge=0)
    priority: DutyPriority = DutyPriority.MEDIUM


class DutyRes(BaseModel):
    id: int
    name: str
    description: str | None = None
    estimated_hours: int | None = None
    priority: DutyPriority
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, d: Duty) -> "DutyRes":
        return cls(
            id=d.id,
            name=d.name,
            description=d.description,
            estimated_hours=d.estimated_hours,
            priority=d.priority,
            is_active=d.is_active,
            created_at=d.created_at,
            updated_at=d.updated_at,
        )


class DutiesListRes(BaseModel):
    duties: list[DutyRes]


# -----------------------------------------------------------------------------
# Assignments
# -----------------------------------------------------------------------------
class AssignDutyReq(BaseModel):
    user_id: int
    assigned_date: date | None = None
    notes: str | None = Field(default=None, max_length=_settings.max_notes_chars)


class AssignmentRes(BaseModel):
    id: int
    duty_id: int
    user_id: int
    assigned_date: date
    status: AssignmentStatus
    completed_date: date | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, a: DutyAssignment) -> "AssignmentRes":
        return cls(
            id=a.id,
            duty_id=a.duty_id,
            user_id=a.user_id,
            assigned_date=a.assigned_date,
            status=a.status,
            completed_date=a.completed_date,
            notes=a.notes,
            created_at=a.created_at,
            updated_at=a.updated_at,
        )


class AssignmentsListRes(BaseModel):
    assignments: list[AssignmentRes]
