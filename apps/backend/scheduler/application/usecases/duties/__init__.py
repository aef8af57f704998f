"""Duty catalog use cases (admin writes + read-only queries)."""

from .create_duty import CreateDutyInput, CreateDutyUseCase
from .deactivate_duty import DeactivateDutyUseCase
from .overdue import ListOverdueAssignmentsUseCase, ListOverdueDutiesUseCase
from .query_duties import (
    FilterDutiesUseCase,
    ListActiveDutiesUseCase,
    SearchDutiesUseCase,
)

__all__ = [
    "CreateDutyInput",
    "CreateDutyUseCase",
    "DeactivateDutyUseCase",
    "FilterDutiesUseCase",
    "ListActiveDutiesUseCase",
    "ListOverdueAssignmentsUseCase",
    "ListOverdueDutiesUseCase",
    "SearchDutiesUseCase",
]
