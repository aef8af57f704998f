"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/assignment.py
============================================================
Class: InMemoryDutyAssignmentRepository

Responsibilities:
  - Asignaciones en memoria; nunca se borran.
  - transition_assignment: compare-and-set de status + completed_date bajo
    el Lock (equivalente al UPDATE ... WHERE status = ANY(...) de Postgres).
  - Listados por assigned_date ASC, id ASC.
  - list_overdue_assignments: lee asignaciones con el lock del catálogo de
    duties tomado (orden fijo: duties -> asignaciones), así una desactivación
    concurrente se ve entera o no se ve.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ....domain.entities import AssignmentStatus, Duty, DutyAssignment
from ....domain.repositories import DutyAssignmentRepository
from ._common import id_sequence, utc_now
from .duty import InMemoryDutyRepository


def _by_assigned_date(items) -> List[DutyAssignment]:
    return sorted(items, key=lambda a: (a.assigned_date, a.id))


class InMemoryDutyAssignmentRepository(DutyAssignmentRepository):
    def __init__(self, duty_repository: InMemoryDutyRepository) -> None:
        self._duties = duty_repository
        self._lock = Lock()
        self._assignments: Dict[int, DutyAssignment] = {}
        self._next_id = id_sequence()

    def _values(self) -> List[DutyAssignment]:
        with self._lock:
            return list(self._assignments.values())

    def get_assignment(self, assignment_id: int) -> Optional[DutyAssignment]:
        with self._lock:
            return self._assignments.get(assignment_id)

    def create_assignment(self, assignment: DutyAssignment) -> DutyAssignment:
        now = utc_now()
        with self._lock:
            stored = replace(
                assignment, id=self._next_id(), created_at=now, updated_at=now
            )
            self._assignments[stored.id] = stored
            return stored

    def transition_assignment(
        self,
        assignment_id: int,
        *,
        to_status: AssignmentStatus,
        allowed_from: frozenset[AssignmentStatus],
        completed_date: date | None,
    ) -> Optional[DutyAssignment]:
        with self._lock:
            current = self._assignments.get(assignment_id)
            if current is None or current.status not in allowed_from:
                return None
            updated = replace(
                current,
                status=to_status,
                completed_date=completed_date,
                updated_at=utc_now(),
            )
            self._assignments[assignment_id] = updated
            return updated

    def list_assignments(self) -> List[DutyAssignment]:
        return _by_assigned_date(self._values())

    def list_assignments_by_user(self, user_id: int) -> List[DutyAssignment]:
        return _by_assigned_date(a for a in self._values() if a.user_id == user_id)

    def list_assignments_by_status(
        self, status: AssignmentStatus
    ) -> List[DutyAssignment]:
        return _by_assigned_date(a for a in self._values() if a.status == status)

    def list_overdue_assignments(
        self, cutoff: date
    ) -> List[Tuple[DutyAssignment, Duty]]:
        with self._duties.locked_catalog() as duties, self._lock:
            rows = [
                (a, duties[a.duty_id])
                for a in self._assignments.values()
                if a.status == AssignmentStatus.ASSIGNED
                and a.assigned_date < cutoff
                and a.duty_id in duties
                and duties[a.duty_id].is_active
            ]
        return sorted(rows, key=lambda row: (row[0].assigned_date, row[0].id))
