"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/reservation.py
============================================================
Class: InMemoryReservationRepository

Responsibilities:
  - Almacenar reservas del recurso compartido en memoria.
  - book_reservation: check-then-insert atómico bajo el mismo Lock que
    protege toda la "tabla" (dos bookings solapados concurrentes nunca
    ganan ambos; el primero que toma el lock gana).
  - Listados ordenados por start_date ASC, id ASC.

Collaborators:
  - domain.scheduling.find_conflicts / BookingAttempt
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import Reservation
from ....domain.repositories import ReservationRepository
from ....domain.scheduling import BookingAttempt, find_conflicts
from ._common import id_sequence, utc_now


def _by_start(items) -> List[Reservation]:
    return sorted(items, key=lambda r: (r.start_date, r.id))


class InMemoryReservationRepository(ReservationRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._reservations: Dict[int, Reservation] = {}
        self._next_id = id_sequence()

    def _values(self) -> List[Reservation]:
        with self._lock:
            return list(self._reservations.values())

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        with self._lock:
            return self._reservations.get(reservation_id)

    def book_reservation(self, reservation: Reservation) -> BookingAttempt:
        with self._lock:
            conflicts = find_conflicts(
                reservation.start_date,
                reservation.end_date,
                self._reservations.values(),
            )
            if conflicts:
                return BookingAttempt(conflicts=conflicts)

            now = utc_now()
            stored = replace(
                reservation, id=self._next_id(), created_at=now, updated_at=now
            )
            self._reservations[stored.id] = stored
            return BookingAttempt(created=stored)

    def delete_reservation(self, reservation_id: int) -> bool:
        with self._lock:
            return self._reservations.pop(reservation_id, None) is not None

    def find_overlapping(self, start_date: date, end_date: date) -> List[Reservation]:
        return find_conflicts(start_date, end_date, self._values())

    def list_current_and_future(self, today: date) -> List[Reservation]:
        return _by_start(r for r in self._values() if r.end_date >= today)

    def list_reservations_by_user(self, user_id: int) -> List[Reservation]:
        return _by_start(r for r in self._values() if r.user_id == user_id)

    def list_reservations_between(
        self, start_date: date, end_date: date
    ) -> List[Reservation]:
        return _by_start(
            r
            for r in self._values()
            if r.start_date >= start_date and r.end_date <= end_date
        )
