"""
===============================================================================
USE CASES: Reservation listings (read-only)
===============================================================================

- ListUpcomingReservationsUseCase: end_date >= hoy, start_date ASC (vista canónica).
- ListMyReservationsUseCase: reservas del actor, start_date ASC.
- ListReservationsBetweenUseCase: reservas contenidas en [start, end].

Notas:
    - "hoy" se obtiene de un reloj inyectable (date.today por defecto).
    - Lecturas sin efectos colaterales; requieren actor autenticado.
===============================================================================
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from ....domain.policy import Actor
from ....domain.repositories import ReservationRepository
from ..results import ReservationListResult, unauthorized, validation_error


def _missing_actor() -> ReservationListResult:
    return ReservationListResult(
        reservations=[], error=unauthorized("Actor is required to list reservations.")
    )


class ListUpcomingReservationsUseCase:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._reservations = reservation_repository
        self._today = today

    def execute(self, actor: Actor | None) -> ReservationListResult:
        if actor is None:
            return _missing_actor()
        return ReservationListResult(
            reservations=self._reservations.list_current_and_future(self._today())
        )


class ListMyReservationsUseCase:
    def __init__(self, reservation_repository: ReservationRepository) -> None:
        self._reservations = reservation_repository

    def execute(self, actor: Actor | None) -> ReservationListResult:
        if actor is None:
            return _missing_actor()
        return ReservationListResult(
            reservations=self._reservations.list_reservations_by_user(actor.user_id)
        )


class ListReservationsBetweenUseCase:
    def __init__(self, reservation_repository: ReservationRepository) -> None:
        self._reservations = reservation_repository

    def execute(
        self, actor: Actor | None, start_date: date, end_date: date
    ) -> ReservationListResult:
        if actor is None:
            return _missing_actor()
        if start_date > end_date:
            return ReservationListResult(
                reservations=[],
                error=validation_error("start_date must be on or before end_date."),
            )
        return ReservationListResult(
            reservations=self._reservations.list_reservations_between(
                start_date, end_date
            )
        )
