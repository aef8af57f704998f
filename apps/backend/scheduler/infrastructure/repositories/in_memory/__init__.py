"""In-memory repositories (tests / local dev)."""

from .assignment import InMemoryDutyAssignmentRepository
from .duty import InMemoryDutyRepository
from .reservation import InMemoryReservationRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryDutyAssignmentRepository",
    "InMemoryDutyRepository",
    "InMemoryReservationRepository",
    "InMemoryUserRepository",
]
