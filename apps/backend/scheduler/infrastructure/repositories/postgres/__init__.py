"""PostgreSQL repositories (psycopg + psycopg_pool, SQL crudo)."""

from .assignment import PostgresDutyAssignmentRepository
from .duty import PostgresDutyRepository
from .reservation import PostgresReservationRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresDutyAssignmentRepository",
    "PostgresDutyRepository",
    "PostgresReservationRepository",
    "PostgresUserRepository",
]
