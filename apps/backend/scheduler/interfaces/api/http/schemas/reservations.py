"""
===============================================================================
TARJETA CRC — schemas/reservations.py
===============================================================================

Responsabilidades:
    - DTOs de request/response para reservas.
    - Límites de notes desde settings (mismo tope que el caso de uso).

Notas:
    - start_date <= end_date se valida en el caso de uso, no acá, para que
      el error sea el mismo desde HTTP o desde otro adaptador.
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from scheduler.crosscutting.config import get_settings
from scheduler.domain.entities import Reservation, ReservationStatus

_settings = get_settings()


class CreateReservationReq(BaseModel):
    start_date: date
    end_date: date
    notes: str | None = Field(default=None, max_length=_settings.max_notes_chars)


class ReservationRes(BaseModel):
    id: int
    start_date: date
    end_date: date
    user_id: int
    notes: str | None = None
    status: ReservationStatus
    days: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, r: Reservation) -> "ReservationRes":
        return cls(
            id=r.id,
            start_date=r.start_date,
            end_date=r.end_date,
            user_id=r.user_id,
            notes=r.notes,
            status=r.status,
            days=r.days,
            created_at=r.created_at,
            updated_at=r.updated_at,
        )


class ReservationsListRes(BaseModel):
    reservations: list[ReservationRes]
