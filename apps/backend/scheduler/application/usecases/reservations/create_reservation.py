"""
===============================================================================
USE CASE: Create Reservation (check-and-create)
===============================================================================

Business Goal:
    Reservar el recurso compartido para un rango de fechas inclusivo, siempre
    que no exista otra reserva que lo solape. Todo o nada: no hay asignación
    parcial ni "mejor esfuerzo".

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateReservationUseCase

Responsibilities:
    - Validar actor y existencia del usuario owner.
    - Validar rango (start <= end) y largo de notes.
    - Delegar el check-then-insert atómico al repositorio (book_reservation).
    - Traducir el BookingAttempt a un ReservationResult tipado.

Collaborators:
    - ReservationRepository.book_reservation(reservation) -> BookingAttempt
    - UserRepository.get_user(user_id)
    - domain.policy.Actor

-------------------------------------------------------------------------------
Error Mapping:
    - UNAUTHORIZED: sin actor.
    - NOT_FOUND: el usuario del actor no existe (o se borró entre el chequeo
      y el insert; el repo lo informa con MissingReferenceError).
    - VALIDATION_ERROR: start > end, notes demasiado largas.
    - CONFLICT: hay reservas que comparten al menos un día con el rango.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ....crosscutting.logger import logger
from ....domain.entities import Reservation
from ....domain.errors import MissingReferenceError
from ....domain.policy import Actor
from ....domain.repositories import ReservationRepository, UserRepository
from ..results import (
    ReservationResult,
    conflict,
    not_found,
    unauthorized,
    validation_error,
)

DEFAULT_MAX_NOTES_CHARS = 500


@dataclass(frozen=True)
class CreateReservationInput:
    """DTO de entrada. Fechas calendario, sin zona horaria."""

    actor: Actor | None
    start_date: date
    end_date: date
    notes: str | None = None


class CreateReservationUseCase:
    """Orquesta la creación de una reserva sin solapamientos."""

    def __init__(
        self,
        reservation_repository: ReservationRepository,
        user_repository: UserRepository,
        *,
        max_notes_chars: int = DEFAULT_MAX_NOTES_CHARS,
    ) -> None:
        self._reservations = reservation_repository
        self._users = user_repository
        self._max_notes_chars = max_notes_chars

    def execute(self, input_data: CreateReservationInput) -> ReservationResult:
        actor = input_data.actor
        if actor is None:
            return ReservationResult(
                error=unauthorized("Actor is required to create a reservation.")
            )

        if self._users.get_user(actor.user_id) is None:
            return ReservationResult(error=not_found("User", actor.user_id))

        if input_data.start_date > input_data.end_date:
            return ReservationResult(
                error=validation_error("start_date must be on or before end_date.")
            )

        notes = self._normalize_notes(input_data.notes)
        if notes is not None and len(notes) > self._max_notes_chars:
            return ReservationResult(
                error=validation_error(
                    f"notes must be at most {self._max_notes_chars} characters."
                )
            )

        try:
            attempt = self._reservations.book_reservation(
                Reservation(
                    id=None,
                    start_date=input_data.start_date,
                    end_date=input_data.end_date,
                    user_id=actor.user_id,
                    notes=notes,
                )
            )
        except MissingReferenceError as exc:
            return ReservationResult(error=not_found(exc.entity, exc.entity_id))

        if not attempt.accepted:
            conflicting_ids = [r.id for r in attempt.conflicts]
            logger.info(
                "Reservation rejected: dates conflict",
                extra={
                    "user_id": actor.user_id,
                    "start_date": input_data.start_date.isoformat(),
                    "end_date": input_data.end_date.isoformat(),
                    "conflicting_ids": conflicting_ids,
                },
            )
            return ReservationResult(
                error=conflict(
                    "Dates conflict with existing reservation(s): "
                    + ", ".join(str(i) for i in conflicting_ids)
                ),
                conflicts=list(attempt.conflicts),
            )

        logger.info(
            "Reservation created",
            extra={"reservation_id": attempt.created.id, "user_id": actor.user_id},
        )
        return ReservationResult(reservation=attempt.created)

    @staticmethod
    def _normalize_notes(raw: str | None) -> str | None:
        if raw is None:
            return None
        cleaned = raw.strip()
        return cleaned or None
