"""Reservation use cases (create / delete / listings)."""

from .create_reservation import CreateReservationInput, CreateReservationUseCase
from .delete_reservation import DeleteReservationUseCase
from .list_reservations import (
    ListMyReservationsUseCase,
    ListReservationsBetweenUseCase,
    ListUpcomingReservationsUseCase,
)

__all__ = [
    "CreateReservationInput",
    "CreateReservationUseCase",
    "DeleteReservationUseCase",
    "ListMyReservationsUseCase",
    "ListReservationsBetweenUseCase",
    "ListUpcomingReservationsUseCase",
]
