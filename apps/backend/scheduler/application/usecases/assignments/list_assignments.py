"""
===============================================================================
USE CASES: Assignment listings (read-only)
===============================================================================

Orden común: assigned_date ASC, id ASC.
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import AssignmentStatus
from ....domain.policy import Actor
from ....domain.repositories import DutyAssignmentRepository
from ..results import AssignmentListResult, unauthorized


def _missing_actor() -> AssignmentListResult:
    return AssignmentListResult(
        assignments=[], error=unauthorized("Actor is required to list assignments.")
    )


class ListAssignmentsUseCase:
    def __init__(self, assignment_repository: DutyAssignmentRepository) -> None:
        self._assignments = assignment_repository

    def execute(self, actor: Actor | None) -> AssignmentListResult:
        if actor is None:
            return _missing_actor()
        return AssignmentListResult(assignments=self._assignments.list_assignments())


class ListMyAssignmentsUseCase:
    def __init__(self, assignment_repository: DutyAssignmentRepository) -> None:
        self._assignments = assignment_repository

    def execute(self, actor: Actor | None) -> AssignmentListResult:
        if actor is None:
            return _missing_actor()
        return AssignmentListResult(
            assignments=self._assignments.list_assignments_by_user(actor.user_id)
        )


class ListAssignmentsByStatusUseCase:
    def __init__(self, assignment_repository: DutyAssignmentRepository) -> None:
        self._assignments = assignment_repository

    def execute(
        self, actor: Actor | None, status: AssignmentStatus
    ) -> AssignmentListResult:
        if actor is None:
            return _missing_actor()
        return AssignmentListResult(
            assignments=self._assignments.list_assignments_by_status(status)
        )
