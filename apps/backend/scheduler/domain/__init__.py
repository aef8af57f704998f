"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    AssignmentStatus,
    Duty,
    DutyAssignment,
    DutyPriority,
    Reservation,
    ReservationStatus,
)
from .lifecycle import (
    ALLOWED_TRANSITIONS,
    DEFAULT_OVERDUE_AFTER_DAYS,
    allowed_sources,
    can_transition,
    is_overdue,
    overdue_cutoff,
)
from .policy import Actor, can_mutate, is_admin
from .repositories import (
    DutyAssignmentRepository,
    DutyRepository,
    ReservationRepository,
    UserRepository,
)
from .scheduling import BookingAttempt, find_conflicts, overlaps

__all__ = [
    "ALLOWED_TRANSITIONS",
    "DEFAULT_OVERDUE_AFTER_DAYS",
    "Actor",
    "AssignmentStatus",
    "BookingAttempt",
    "Duty",
    "DutyAssignment",
    "DutyAssignmentRepository",
    "DutyPriority",
    "DutyRepository",
    "Reservation",
    "ReservationRepository",
    "ReservationStatus",
    "UserRepository",
    "allowed_sources",
    "can_mutate",
    "can_transition",
    "find_conflicts",
    "is_admin",
    "is_overdue",
    "overdue_cutoff",
    "overlaps",
]
