"""
Name: In-Memory Repository Tests

Responsibilities:
  - Atomic booking under concurrent callers (exactly one winner)
  - Guarded assignment transitions (compare-and-set)
  - Listing orders declared by the repository contracts
  - User uniqueness re-checked under the repository lock

Notes:
  - These repositories back the API in APP_ENV=test
"""

import threading
from datetime import date, timedelta

import pytest

from scheduler.domain.entities import AssignmentStatus, DutyPriority, Reservation
from scheduler.domain.errors import DuplicateUserError
from scheduler.domain.lifecycle import allowed_sources
from scheduler.identity.users import User, UserRole

pytestmark = pytest.mark.unit


def _reservation(start: date, end: date, user_id: int = 1) -> Reservation:
    return Reservation(id=None, start_date=start, end_date=end, user_id=user_id)


class TestInMemoryReservationRepository:
    def test_book_assigns_ids_and_timestamps(self, reservation_repo):
        attempt = reservation_repo.book_reservation(
            _reservation(date(2024, 1, 1), date(2024, 1, 2))
        )

        assert attempt.accepted is True
        assert attempt.created.id == 1
        assert attempt.created.created_at is not None

    def test_book_rejects_overlap_and_reports_conflicts(self, reservation_repo):
        first = reservation_repo.book_reservation(
            _reservation(date(2024, 1, 1), date(2024, 1, 5))
        ).created
        second = reservation_repo.book_reservation(
            _reservation(date(2024, 1, 8), date(2024, 1, 9))
        ).created

        attempt = reservation_repo.book_reservation(
            _reservation(date(2024, 1, 5), date(2024, 1, 8), user_id=2)
        )

        assert attempt.accepted is False
        assert attempt.created is None
        assert [r.id for r in attempt.conflicts] == [first.id, second.id]

    def test_concurrent_bookings_same_range_single_winner(self, reservation_repo):
        workers = 16
        barrier = threading.Barrier(workers)
        accepted = []
        lock = threading.Lock()

        def book(user_id):
            barrier.wait()
            attempt = reservation_repo.book_reservation(
                _reservation(date(2024, 6, 1), date(2024, 6, 7), user_id=user_id)
            )
            if attempt.accepted:
                with lock:
                    accepted.append(attempt.created)

        threads = [threading.Thread(target=book, args=(i,)) for i in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(accepted) == 1
        assert len(reservation_repo.find_overlapping(date(2024, 6, 1), date(2024, 6, 7))) == 1

    def test_delete_returns_false_when_missing(self, reservation_repo):
        assert reservation_repo.delete_reservation(123) is False

    def test_list_current_and_future_boundary(self, reservation_repo, today):
        ends_yesterday = _reservation(today - timedelta(days=3), today - timedelta(days=1))
        ends_today = _reservation(today, today)
        reservation_repo.book_reservation(ends_yesterday)
        kept = reservation_repo.book_reservation(ends_today).created

        assert [r.id for r in reservation_repo.list_current_and_future(today)] == [
            kept.id
        ]


class TestInMemoryDutyRepository:
    def test_list_active_ties_newest_first(self, duty_repo, make_duty):
        older = make_duty("Older", priority=DutyPriority.HIGH)
        newer = make_duty("Newer", priority=DutyPriority.HIGH)

        assert [d.id for d in duty_repo.list_active_duties()] == [newer.id, older.id]

    def test_set_duty_active_missing(self, duty_repo):
        assert duty_repo.set_duty_active(5, False) is None


class TestInMemoryAssignmentRepository:
    def test_transition_is_guarded_by_current_status(
        self, assignment_repo, make_duty, make_assignment, alice, today
    ):
        assignment = make_assignment(
            make_duty(), alice, status=AssignmentStatus.CANCELLED
        )

        updated = assignment_repo.transition_assignment(
            assignment.id,
            to_status=AssignmentStatus.COMPLETED,
            allowed_from=allowed_sources(AssignmentStatus.COMPLETED),
            completed_date=today,
        )

        assert updated is None
        stored = assignment_repo.get_assignment(assignment.id)
        assert stored.status == AssignmentStatus.CANCELLED
        assert stored.completed_date is None

    def test_transition_writes_status_and_date(
        self, assignment_repo, make_duty, make_assignment, alice, today
    ):
        assignment = make_assignment(make_duty(), alice)

        updated = assignment_repo.transition_assignment(
            assignment.id,
            to_status=AssignmentStatus.COMPLETED,
            allowed_from=allowed_sources(AssignmentStatus.COMPLETED),
            completed_date=today,
        )

        assert updated.status == AssignmentStatus.COMPLETED
        assert updated.completed_date == today
        assert updated.updated_at is not None

    def test_transition_missing_assignment(self, assignment_repo, today):
        assert (
            assignment_repo.transition_assignment(
                42,
                to_status=AssignmentStatus.CANCELLED,
                allowed_from=allowed_sources(AssignmentStatus.CANCELLED),
                completed_date=None,
            )
            is None
        )

    def test_concurrent_cancel_and_complete_single_winner(
        self, assignment_repo, make_duty, make_assignment, alice, today
    ):
        assignment = make_assignment(make_duty(), alice)
        barrier = threading.Barrier(2)
        outcomes = {}

        def move(target, completed_date):
            barrier.wait()
            outcomes[target] = assignment_repo.transition_assignment(
                assignment.id,
                to_status=target,
                allowed_from=frozenset({AssignmentStatus.ASSIGNED}),
                completed_date=completed_date,
            )

        threads = [
            threading.Thread(target=move, args=(AssignmentStatus.COMPLETED, today)),
            threading.Thread(target=move, args=(AssignmentStatus.CANCELLED, None)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        winners = [v for v in outcomes.values() if v is not None]
        assert len(winners) == 1
        stored = assignment_repo.get_assignment(assignment.id)
        assert (stored.completed_date is not None) == (
            stored.status == AssignmentStatus.COMPLETED
        )

    def test_overdue_pairs_assignment_with_its_active_duty(
        self, assignment_repo, make_duty, make_assignment, alice, today
    ):
        duty = make_duty()
        retired = make_duty("Retired", is_active=False)
        older = make_assignment(duty, alice, today - timedelta(days=12))
        stale = make_assignment(duty, alice, today - timedelta(days=10))
        make_assignment(duty, alice, today - timedelta(days=7))
        make_assignment(retired, alice, today - timedelta(days=30))
        make_assignment(
            duty, alice, today - timedelta(days=10), AssignmentStatus.IN_PROGRESS
        )

        rows = assignment_repo.list_overdue_assignments(today - timedelta(days=7))

        assert [(a.id, d.id) for a, d in rows] == [
            (older.id, duty.id),
            (stale.id, duty.id),
        ]

    def test_overdue_skips_duty_deactivated_after_assigning(
        self, assignment_repo, duty_repo, make_duty, make_assignment, alice, today
    ):
        duty = make_duty()
        make_assignment(duty, alice, today - timedelta(days=20))
        duty_repo.set_duty_active(duty.id, False)

        assert assignment_repo.list_overdue_assignments(today) == []


class TestInMemoryUserRepository:
    def _user(self, username: str, email: str) -> User:
        return User(
            id=None,
            username=username,
            email=email,
            password_hash="hashed",
            role=UserRole.USER,
        )

    def test_create_rejects_taken_username(self, user_repo, alice):
        with pytest.raises(DuplicateUserError) as exc_info:
            user_repo.create_user(self._user("alice", "other@example.com"))

        assert exc_info.value.field == "username"
        assert len(user_repo.list_users()) == 1

    def test_create_rejects_email_case_insensitively(self, user_repo, alice):
        with pytest.raises(DuplicateUserError) as exc_info:
            user_repo.create_user(self._user("alice2", "ALICE@example.com"))

        assert exc_info.value.field == "email"

    def test_update_rejects_email_of_other_user(self, user_repo, alice, bob):
        with pytest.raises(DuplicateUserError):
            user_repo.update_user(bob.id, email="alice@example.com")

        assert user_repo.get_user(bob.id).email == "bob@example.com"

    def test_update_keeps_own_username(self, user_repo, alice):
        updated = user_repo.update_user(alice.id, username="alice", first_name="Al")
        assert updated.first_name == "Al"

    def test_concurrent_creates_same_username_single_winner(self, user_repo):
        barrier = threading.Barrier(5)
        outcomes: list[str] = []

        def attempt(i: int) -> None:
            barrier.wait()
            try:
                user_repo.create_user(self._user("dup", f"dup{i}@example.com"))
                outcomes.append("created")
            except DuplicateUserError:
                outcomes.append("duplicate")

        threads = [threading.Thread(target=attempt, args=(i,)) for i in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(outcomes) == ["created"] + ["duplicate"] * 4
        assert [u.username for u in user_repo.list_users()] == ["dup"]
