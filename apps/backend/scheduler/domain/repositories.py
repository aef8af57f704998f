"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the scheduling core (ports).
- Keep application/domain independent from infrastructure (PostgreSQL, in-memory).
- Declare which writes must be atomic (booking, assignment transitions,
  user uniqueness).

Collaborators
- domain.entities: Reservation, Duty, DutyAssignment
- domain.scheduling: BookingAttempt
- domain.errors: DuplicateUserError, MissingReferenceError (integrity rejections)
- identity.users: User, UserRole
- infrastructure.repositories: in_memory/*, postgres/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.
- Listing methods document their ordering; implementations must honour it.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Outputs are concrete lists for predictable iteration/serialization.
"""

from datetime import date
from typing import List, Optional, Protocol, Tuple

from ..identity.users import User, UserRole
from .entities import AssignmentStatus, Duty, DutyAssignment, DutyPriority, Reservation
from .scheduling import BookingAttempt


class UserRepository(Protocol):
    """R: Interface for user persistence (hard delete)."""

    def get_user(self, user_id: int) -> Optional[User]:
        """R: Fetch a user by id."""
        ...

    def get_user_by_username(self, username: str) -> Optional[User]:
        """R: Fetch a user by exact username."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch a user by email (case-insensitive)."""
        ...

    def list_users(self) -> List[User]:
        """R: List all users ordered by id."""
        ...

    def list_users_by_role(self, role: UserRole) -> List[User]:
        """R: List users with the given role ordered by id."""
        ...

    def search_users_by_name(self, term: str) -> List[User]:
        """R: Case-insensitive substring match on first or last name."""
        ...

    def create_user(self, user: User) -> User:
        """
        R: Persist a new user and return it with id/timestamps set.

        Raises:
            DuplicateUserError: username or email (case-insensitive) taken.
        """
        ...

    def update_user(
        self,
        user_id: int,
        *,
        username: str | None = None,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        password_hash: str | None = None,
        role: UserRole | None = None,
    ) -> Optional[User]:
        """
        R: Partial update. Returns None if the user does not exist.

        Raises:
            DuplicateUserError: new username or email belongs to another user.
        """
        ...

    def delete_user(self, user_id: int) -> bool:
        """R: Hard delete. Returns False if the user did not exist."""
        ...


class ReservationRepository(Protocol):
    """
    R: Interface for reservations of the single shared resource.

    book_reservation() is the only write path for new reservations and MUST
    be atomic: the overlap check and the insert are serialized against any
    other concurrent booking (first committer wins).
    """

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        """R: Fetch a reservation by id."""
        ...

    def book_reservation(self, reservation: Reservation) -> BookingAttempt:
        """
        R: Insert the reservation unless it overlaps an existing one.

        Returns:
            BookingAttempt(created=...) on success,
            BookingAttempt(conflicts=[...]) when rejected.

        Raises:
            MissingReferenceError: the owning user was deleted concurrently.
        """
        ...

    def delete_reservation(self, reservation_id: int) -> bool:
        """R: Hard delete. Returns False if it did not exist."""
        ...

    def find_overlapping(self, start_date: date, end_date: date) -> List[Reservation]:
        """R: Reservations intersecting [start_date, end_date] (start ASC)."""
        ...

    def list_current_and_future(self, today: date) -> List[Reservation]:
        """R: Reservations with end_date >= today, ordered by start_date ASC."""
        ...

    def list_reservations_by_user(self, user_id: int) -> List[Reservation]:
        """R: Reservations owned by user_id, ordered by start_date ASC."""
        ...

    def list_reservations_between(
        self, start_date: date, end_date: date
    ) -> List[Reservation]:
        """R: Reservations fully inside [start_date, end_date] (start ASC)."""
        ...


class DutyRepository(Protocol):
    """R: Interface for the duty catalog (soft delete via is_active)."""

    def get_duty(self, duty_id: int) -> Optional[Duty]:
        """R: Fetch a duty by id (active or not)."""
        ...

    def create_duty(self, duty: Duty) -> Duty:
        """R: Persist a new duty with id/timestamps set."""
        ...

    def set_duty_active(self, duty_id: int, is_active: bool) -> Optional[Duty]:
        """R: Toggle is_active. Returns None if the duty does not exist."""
        ...

    def list_active_duties(self) -> List[Duty]:
        """R: Active duties ordered by priority DESC, created_at DESC."""
        ...

    def list_duties_by_priority_and_status(
        self, priority: DutyPriority, is_active: bool
    ) -> List[Duty]:
        """R: Duties matching priority AND is_active, created_at DESC."""
        ...

    def search_duties(self, term: str) -> List[Duty]:
        """
        R: Active duties whose name OR description contains term
        (case-insensitive, literal match), ordered by priority DESC, name ASC.
        """
        ...


class DutyAssignmentRepository(Protocol):
    """
    R: Interface for duty assignments (never deleted).

    transition_assignment() MUST write status and completed_date in a single
    atomic step guarded by the current status.
    """

    def get_assignment(self, assignment_id: int) -> Optional[DutyAssignment]:
        """R: Fetch an assignment by id."""
        ...

    def create_assignment(self, assignment: DutyAssignment) -> DutyAssignment:
        """
        R: Persist a new assignment with id/timestamps set.

        Raises:
            MissingReferenceError: duty or user was deleted concurrently.
        """
        ...

    def transition_assignment(
        self,
        assignment_id: int,
        *,
        to_status: AssignmentStatus,
        allowed_from: frozenset[AssignmentStatus],
        completed_date: date | None,
    ) -> Optional[DutyAssignment]:
        """
        R: Set status + completed_date iff the current status is in allowed_from.

        Returns:
            The updated assignment, or None if it does not exist or its
            current status is not in allowed_from.
        """
        ...

    def list_assignments(self) -> List[DutyAssignment]:
        """R: All assignments ordered by assigned_date ASC, id ASC."""
        ...

    def list_assignments_by_user(self, user_id: int) -> List[DutyAssignment]:
        """R: Assignments of user_id ordered by assigned_date ASC, id ASC."""
        ...

    def list_assignments_by_status(
        self, status: AssignmentStatus
    ) -> List[DutyAssignment]:
        """R: Assignments in status ordered by assigned_date ASC, id ASC."""
        ...

    def list_overdue_assignments(
        self, cutoff: date
    ) -> List[Tuple[DutyAssignment, Duty]]:
        """
        R: ASSIGNED assignments with assigned_date < cutoff whose duty is
        active, paired with that duty, read in ONE snapshot (a concurrent
        deactivation is seen entirely or not at all). Ordered by
        assigned_date ASC, id ASC.
        """
        ...
