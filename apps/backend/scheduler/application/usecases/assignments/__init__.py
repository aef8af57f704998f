"""Duty assignment lifecycle use cases."""

from .assign_duty import AssignDutyInput, AssignDutyUseCase
from .complete_assignment import CompleteAssignmentUseCase
from .list_assignments import (
    ListAssignmentsByStatusUseCase,
    ListAssignmentsUseCase,
    ListMyAssignmentsUseCase,
)
from .transition_assignment import TransitionAssignmentUseCase

__all__ = [
    "AssignDutyInput",
    "AssignDutyUseCase",
    "CompleteAssignmentUseCase",
    "ListAssignmentsByStatusUseCase",
    "ListAssignmentsUseCase",
    "ListMyAssignmentsUseCase",
    "TransitionAssignmentUseCase",
]
