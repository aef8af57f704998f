"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by feature.

Structure
---------
usecases/
├── reservations/   # Booking of the shared resource (conflict detection)
├── duties/         # Duty catalog (admin writes, queries, overdue view)
├── assignments/    # Assignment lifecycle (assign / complete / transition)
└── users/          # User administration

Usage
-----
Import from subpackages for clarity:

    from scheduler.application.usecases.reservations import CreateReservationUseCase

Or use the barrel exports from this module:

    from scheduler.application.usecases import CompleteAssignmentUseCase
"""

# Assignments
from .assignments import (
    AssignDutyInput,
    AssignDutyUseCase,
    CompleteAssignmentUseCase,
    ListAssignmentsByStatusUseCase,
    ListAssignmentsUseCase,
    ListMyAssignmentsUseCase,
    TransitionAssignmentUseCase,
)

# Duties
from .duties import (
    CreateDutyInput,
    CreateDutyUseCase,
    DeactivateDutyUseCase,
    FilterDutiesUseCase,
    ListActiveDutiesUseCase,
    ListOverdueAssignmentsUseCase,
    ListOverdueDutiesUseCase,
    SearchDutiesUseCase,
)

# Reservations
from .reservations import (
    CreateReservationInput,
    CreateReservationUseCase,
    DeleteReservationUseCase,
    ListMyReservationsUseCase,
    ListReservationsBetweenUseCase,
    ListUpcomingReservationsUseCase,
)

# Results
from .results import (
    AssignmentListResult,
    AssignmentResult,
    DeleteResult,
    DutyListResult,
    DutyResult,
    ReservationListResult,
    ReservationResult,
    SchedulerError,
    SchedulerErrorCode,
    UserListResult,
    UserResult,
)

# Users
from .users import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersByRoleUseCase,
    ListUsersUseCase,
    SearchUsersByNameUseCase,
    UpdateUserInput,
    UpdateUserRoleUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "AssignDutyInput",
    "AssignDutyUseCase",
    "AssignmentListResult",
    "AssignmentResult",
    "CompleteAssignmentUseCase",
    "CreateDutyInput",
    "CreateDutyUseCase",
    "CreateReservationInput",
    "CreateReservationUseCase",
    "CreateUserInput",
    "CreateUserUseCase",
    "DeactivateDutyUseCase",
    "DeleteReservationUseCase",
    "DeleteResult",
    "DeleteUserUseCase",
    "DutyListResult",
    "DutyResult",
    "FilterDutiesUseCase",
    "GetUserUseCase",
    "ListActiveDutiesUseCase",
    "ListAssignmentsByStatusUseCase",
    "ListAssignmentsUseCase",
    "ListMyAssignmentsUseCase",
    "ListMyReservationsUseCase",
    "ListOverdueAssignmentsUseCase",
    "ListOverdueDutiesUseCase",
    "ListReservationsBetweenUseCase",
    "ListUpcomingReservationsUseCase",
    "ListUsersByRoleUseCase",
    "ListUsersUseCase",
    "ReservationListResult",
    "ReservationResult",
    "SchedulerError",
    "SchedulerErrorCode",
    "SearchDutiesUseCase",
    "SearchUsersByNameUseCase",
    "TransitionAssignmentUseCase",
    "UpdateUserInput",
    "UpdateUserRoleUseCase",
    "UpdateUserUseCase",
    "UserListResult",
    "UserResult",
]
