"""
===============================================================================
SCHEDULER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de reservas, duties, asignaciones y usuarios, con un contrato explícito
    que distingue:
      - validaciones
      - autorización
      - recursos no encontrados
      - conflictos (fechas solapadas / transición inválida / unicidad)

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      hacia afuera: el borde HTTP mapea code -> status y los tests verifican
      el code exacto.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - SchedulerErrorCode: set acotado de categorías estables.
    - SchedulerError (code + message) como contrato de error.
    - Resultados por forma de payload (single / list / delete).
    - Factories de error para evitar mensajes inconsistentes.

Collaborators:
    - domain.entities / identity.users (tipos retornados)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ...domain.entities import Duty, DutyAssignment, Reservation
from ...identity.users import User


class SchedulerErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: input estructuralmente imposible o incompleto.
      - UNAUTHORIZED: la política de autorización negó la acción.
      - NOT_FOUND: la entidad referenciada no existe.
      - CONFLICT: solapamiento de reservas, transición inválida o unicidad.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class SchedulerError:
    """Error de caso de uso: categoría estable + mensaje que nombra la regla."""

    code: SchedulerErrorCode
    message: str


def validation_error(message: str) -> SchedulerError:
    return SchedulerError(code=SchedulerErrorCode.VALIDATION_ERROR, message=message)


def unauthorized(message: str) -> SchedulerError:
    return SchedulerError(code=SchedulerErrorCode.UNAUTHORIZED, message=message)


def not_found(entity: str, entity_id: object) -> SchedulerError:
    return SchedulerError(
        code=SchedulerErrorCode.NOT_FOUND, message=f"{entity} {entity_id} not found."
    )


def conflict(message: str) -> SchedulerError:
    return SchedulerError(code=SchedulerErrorCode.CONFLICT, message=message)


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------
# Contrato común: error is None => payload presente (éxito).


@dataclass
class ReservationResult:
    reservation: Reservation | None = None
    error: SchedulerError | None = None
    # Solo en CONFLICT: las reservas que bloquearon el rango pedido.
    conflicts: List[Reservation] = field(default_factory=list)


@dataclass
class ReservationListResult:
    reservations: List[Reservation]
    error: SchedulerError | None = None


@dataclass
class DeleteResult:
    deleted: bool
    error: SchedulerError | None = None


@dataclass
class DutyResult:
    duty: Duty | None = None
    error: SchedulerError | None = None


@dataclass
class DutyListResult:
    duties: List[Duty]
    error: SchedulerError | None = None


@dataclass
class AssignmentResult:
    assignment: DutyAssignment | None = None
    error: SchedulerError | None = None


@dataclass
class AssignmentListResult:
    assignments: List[DutyAssignment]
    error: SchedulerError | None = None


@dataclass
class UserResult:
    user: User | None = None
    error: SchedulerError | None = None


@dataclass
class UserListResult:
    users: List[User]
    error: SchedulerError | None = None
