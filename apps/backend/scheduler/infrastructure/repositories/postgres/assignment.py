"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/assignment.py
============================================================
Class: PostgresDutyAssignmentRepository

Responsibilities:
  - Asignaciones sobre la tabla duty_assignments (nunca se borran).
  - transition_assignment: UN solo UPDATE guardado
        WHERE id = :id AND status = ANY(:allowed) RETURNING ...
    status y completed_date cambian juntos o no cambian; dos completes
    concurrentes se serializan por el row lock del UPDATE.
  - CHECK constraint en DB refuerza (completed_date IS NOT NULL) <=> COMPLETED.
  - create_assignment: una FK rota (duty / user borrado en paralelo) sale
    como MissingReferenceError nombrando la entidad, no como DatabaseError.
  - list_overdue_assignments: un solo SELECT con JOIN a duties (un snapshot).
============================================================
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from psycopg import errors as pg_errors

from ....domain.entities import AssignmentStatus, Duty, DutyAssignment
from ....domain.errors import MissingReferenceError
from ._base import PostgresRepositoryBase
from .duty import DUTY_COLUMNS, row_to_duty

_COLUMNS = """
    id, duty_id, user_id, assigned_date, status, completed_date, notes,
    created_at, updated_at
"""

_ORDER_BY = "ORDER BY assigned_date ASC, id ASC"


def _qualified(columns: str, alias: str) -> list[str]:
    return [f"{alias}.{c.strip()}" for c in columns.split(",") if c.strip()]


_ASSIGNMENT_FIELDS = _qualified(_COLUMNS, "a")

# R: assignment + duty en un solo statement: el filtro is_active y el status
# se evalúan sobre el mismo snapshot.
_OVERDUE_FIELDS = ", ".join(_ASSIGNMENT_FIELDS + _qualified(DUTY_COLUMNS, "d"))
_OVERDUE_SQL = f"""
    SELECT {_OVERDUE_FIELDS}
    FROM duty_assignments a
    JOIN duties d ON d.id = a.duty_id
    WHERE d.is_active AND a.status = %s AND a.assigned_date < %s
    ORDER BY a.assigned_date ASC, a.id ASC
"""


def _row_to_assignment(row: tuple) -> DutyAssignment:
    (
        assignment_id,
        duty_id,
        user_id,
        assigned_date,
        status,
        completed_date,
        notes,
        created_at,
        updated_at,
    ) = row
    return DutyAssignment(
        id=assignment_id,
        duty_id=duty_id,
        user_id=user_id,
        assigned_date=assigned_date,
        status=AssignmentStatus(status),
        completed_date=completed_date,
        notes=notes,
        created_at=created_at,
        updated_at=updated_at,
    )


class PostgresDutyAssignmentRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de asignaciones."""

    def _select(self, where_sql: str, params: list, extra: dict) -> List[DutyAssignment]:
        rows = self._fetchall(
            query=f"SELECT {_COLUMNS} FROM duty_assignments {where_sql} {_ORDER_BY}",
            params=params,
            context_msg="Error al listar asignaciones",
            extra=extra,
        )
        return [_row_to_assignment(r) for r in rows]

    def get_assignment(self, assignment_id: int) -> Optional[DutyAssignment]:
        row = self._fetchone(
            query=f"SELECT {_COLUMNS} FROM duty_assignments WHERE id = %s",
            params=[assignment_id],
            context_msg="Error al obtener asignación",
            extra={"assignment_id": assignment_id},
        )
        return _row_to_assignment(row) if row else None

    def create_assignment(self, assignment: DutyAssignment) -> DutyAssignment:
        try:
            row = self._insert(assignment)
        except pg_errors.ForeignKeyViolation as exc:
            constraint = getattr(exc.diag, "constraint_name", None)
            if constraint == "fk_duty_assignments_duty_id__duties":
                raise MissingReferenceError("Duty", assignment.duty_id) from exc
            raise MissingReferenceError("User", assignment.user_id) from exc
        return _row_to_assignment(row)

    def _insert(self, assignment: DutyAssignment) -> tuple:
        return self._fetchone(
            query=f"""
                INSERT INTO duty_assignments (
                    duty_id, user_id, assigned_date, status, completed_date, notes
                )
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING {_COLUMNS}
            """,
            params=[
                assignment.duty_id,
                assignment.user_id,
                assignment.assigned_date,
                assignment.status.value,
                assignment.completed_date,
                assignment.notes,
            ],
            context_msg="Error al crear asignación",
            extra={"duty_id": assignment.duty_id, "user_id": assignment.user_id},
            passthrough=(pg_errors.ForeignKeyViolation,),
        )

    def transition_assignment(
        self,
        assignment_id: int,
        *,
        to_status: AssignmentStatus,
        allowed_from: frozenset[AssignmentStatus],
        completed_date: date | None,
    ) -> Optional[DutyAssignment]:
        row = self._fetchone(
            query=f"""
                UPDATE duty_assignments
                SET status = %s, completed_date = %s, updated_at = now()
                WHERE id = %s AND status = ANY(%s::text[])
                RETURNING {_COLUMNS}
            """,
            params=[
                to_status.value,
                completed_date,
                assignment_id,
                sorted(s.value for s in allowed_from),
            ],
            context_msg="Error al actualizar estado de asignación",
            extra={"assignment_id": assignment_id, "to_status": to_status.value},
        )
        return _row_to_assignment(row) if row else None

    def list_assignments(self) -> List[DutyAssignment]:
        return self._select("", [], {})

    def list_assignments_by_user(self, user_id: int) -> List[DutyAssignment]:
        return self._select("WHERE user_id = %s", [user_id], {"user_id": user_id})

    def list_assignments_by_status(
        self, status: AssignmentStatus
    ) -> List[DutyAssignment]:
        return self._select(
            "WHERE status = %s", [status.value], {"status": status.value}
        )

    def list_overdue_assignments(
        self, cutoff: date
    ) -> List[Tuple[DutyAssignment, Duty]]:
        rows = self._fetchall(
            query=_OVERDUE_SQL,
            params=[AssignmentStatus.ASSIGNED.value, cutoff],
            context_msg="Error al listar asignaciones vencidas",
            extra={"cutoff": cutoff.isoformat()},
        )
        width = len(_ASSIGNMENT_FIELDS)
        return [
            (_row_to_assignment(row[:width]), row_to_duty(row[width:]))
            for row in rows
        ]
