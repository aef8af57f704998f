"""
===============================================================================
TARJETA CRC — domain/scheduling.py
===============================================================================

Módulo:
    Detección de conflictos de reservas

Responsabilidades:
    - Definir el test de solapamiento de intervalos cerrados [start, end].
    - Calcular qué reservas existentes chocan con un intervalo propuesto.
    - Modelar el resultado atómico de "reservar si está libre" (BookingAttempt).

Colaboradores:
    - domain.entities.Reservation
    - infrastructure repositories (in-memory usa overlaps(); Postgres replica
      la misma condición en SQL).
    - application.usecases.reservations.create_reservation

Reglas:
    - s <= proposed_end AND e >= proposed_start => solapa.
    - Extremos que se tocan (mismo día) cuentan como solapamiento.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from .entities import Reservation


def overlaps(
    start: date, end: date, other_start: date, other_end: date
) -> bool:
    """Intersección de intervalos cerrados (inclusivos)."""
    return other_start <= end and other_end >= start


def find_conflicts(
    start: date, end: date, existing: Iterable[Reservation]
) -> list[Reservation]:
    """
    Devuelve las reservas existentes que solapan [start, end],
    ordenadas por start_date.
    """
    conflicts = [
        r for r in existing if overlaps(start, end, r.start_date, r.end_date)
    ]
    return sorted(conflicts, key=lambda r: (r.start_date, r.id or 0))


@dataclass(frozen=True)
class BookingAttempt:
    """
    Resultado de un check-then-insert atómico.

    Contrato:
      - created != None  => no había conflictos y la reserva quedó persistida.
      - created is None  => conflicts tiene al menos una reserva.
    """

    created: Reservation | None = None
    conflicts: list[Reservation] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.created is not None
