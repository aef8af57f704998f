"""
===============================================================================
USE CASE: Delete Reservation (hard delete)
===============================================================================

Business Rules:
    R1) La reserva debe existir (NOT_FOUND).
    R2) Solo el owner o un ADMIN pueden borrarla (UNAUTHORIZED).
    R3) Borrado físico: no hay estado "cancelada".

Collaborators:
    - ReservationRepository: get_reservation / delete_reservation
    - domain.policy.can_mutate
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.policy import Actor, can_mutate
from ....domain.repositories import ReservationRepository
from ..results import DeleteResult, not_found, unauthorized


class DeleteReservationUseCase:
    def __init__(self, reservation_repository: ReservationRepository) -> None:
        self._reservations = reservation_repository

    def execute(self, reservation_id: int, actor: Actor | None) -> DeleteResult:
        reservation = self._reservations.get_reservation(reservation_id)
        if reservation is None:
            return DeleteResult(
                deleted=False, error=not_found("Reservation", reservation_id)
            )

        if not can_mutate(actor, reservation.user_id):
            logger.warning(
                "Reservation delete denied",
                extra={
                    "reservation_id": reservation_id,
                    "actor_id": actor.user_id if actor else None,
                },
            )
            return DeleteResult(
                deleted=False,
                error=unauthorized("Not authorized to delete this reservation."),
            )

        # Race: otra request pudo borrarla entre el get y el delete.
        if not self._reservations.delete_reservation(reservation_id):
            return DeleteResult(
                deleted=False, error=not_found("Reservation", reservation_id)
            )

        return DeleteResult(deleted=True)
