"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Reservation, Duty, DutyAssignment)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Exponer helpers mínimos: rango de fechas de una reserva, rank de
      prioridad, estado terminal de una asignación.

Colaboradores:
    - domain.scheduling: solapamiento de reservas.
    - domain.lifecycle: transiciones y derivación de "overdue".
    - domain.repositories: persisten/recuperan estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Ids enteros asignados por el storage (None hasta persistir).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Reservation
# ---------------------------------------------------------------------------


class ReservationStatus(str, Enum):
    """Estado de la reserva. Hoy solo existe ACTIVE (no hay cancelación)."""

    ACTIVE = "ACTIVE"


@dataclass(frozen=True)
class Reservation:
    """
    Reserva exclusiva del recurso compartido sobre un rango de fechas
    inclusivo [start_date, end_date].
    """

    id: Optional[int]
    start_date: date
    end_date: date
    user_id: int
    notes: Optional[str] = None
    status: ReservationStatus = ReservationStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def days(self) -> int:
        """Cantidad de días calendario cubiertos (ambos extremos incluidos)."""
        return (self.end_date - self.start_date).days + 1


# ---------------------------------------------------------------------------
# Duty (catálogo)
# ---------------------------------------------------------------------------


class DutyPriority(str, Enum):
    """Prioridad de una tarea. Orden total: URGENT > HIGH > MEDIUM > LOW."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[DutyPriority, int] = {
    DutyPriority.LOW: 1,
    DutyPriority.MEDIUM: 2,
    DutyPriority.HIGH: 3,
    DutyPriority.URGENT: 4,
}


@dataclass(frozen=True)
class Duty:
    """Entrada del catálogo de tareas. Soft-delete vía is_active."""

    id: Optional[int]
    name: str
    description: Optional[str] = None
    estimated_hours: Optional[int] = None
    priority: DutyPriority = DutyPriority.MEDIUM
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# DutyAssignment
# ---------------------------------------------------------------------------


class AssignmentStatus(str, Enum):
    """Estados del ciclo de vida de una asignación."""

    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class DutyAssignment:
    """
    Una ocurrencia de un Duty asignada a un usuario.

    Invariante: completed_date != None  <=>  status == COMPLETED.
    user_id y duty_id son inmutables luego de crear.
    """

    id: Optional[int]
    duty_id: int
    user_id: int
    assigned_date: date
    status: AssignmentStatus = AssignmentStatus.ASSIGNED
    completed_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
