"""
Name: PostgreSQL Repository Tests (offline)

Responsibilities:
  - Verify SQL shape for the atomic writes (booking lock, guarded update)
  - Verify driver failures are wrapped in DatabaseError
  - Verify ExclusionViolation is reported as a booking conflict
  - Verify integrity violations surface as domain errors, never DatabaseError

Notes:
  - Uses a mocked ConnectionPool; the real DB is covered by integration tests
"""

from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from psycopg import errors as pg_errors

from scheduler.crosscutting.exceptions import DatabaseError
from scheduler.domain.entities import AssignmentStatus, DutyAssignment, Reservation
from scheduler.domain.errors import DuplicateUserError, MissingReferenceError
from scheduler.domain.lifecycle import allowed_sources
from scheduler.infrastructure.repositories.postgres import (
    PostgresDutyAssignmentRepository,
    PostgresDutyRepository,
    PostgresReservationRepository,
    PostgresUserRepository,
)
from scheduler.identity.users import User, UserRole
from scheduler.infrastructure.repositories.postgres._base import escape_like
from scheduler.infrastructure.repositories.postgres.user import _duplicate

pytestmark = pytest.mark.unit


def _mock_pool():
    pool = MagicMock()
    conn = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool, conn


def _cursor(*, rows=None, row=None):
    cursor = MagicMock()
    cursor.fetchall.return_value = rows or []
    cursor.fetchone.return_value = row
    return cursor


def _reservation_row(reservation_id, start, end, user_id=1):
    return (reservation_id, start, end, user_id, None, "ACTIVE", None, None)


def _assignment_row(status, completed_date=None):
    return (7, 1, 2, date(2024, 3, 1), status, completed_date, None, None, None)


def _duty_row(duty_id, is_active=True):
    return (duty_id, "Dishes", None, None, "MEDIUM", is_active, None, None)


class _UsernameTaken(pg_errors.UniqueViolation):
    diag = SimpleNamespace(constraint_name="uq_users_username")


class _DutyGone(pg_errors.ForeignKeyViolation):
    diag = SimpleNamespace(constraint_name="fk_duty_assignments_duty_id__duties")


def _new_assignment(duty_id=1, user_id=2):
    return DutyAssignment(
        id=None, duty_id=duty_id, user_id=user_id, assigned_date=date(2024, 3, 1)
    )


class TestEscapeLike:
    def test_wildcards_are_escaped(self):
        assert escape_like("100%_a\\b") == "100\\%\\_a\\\\b"


class TestPostgresReservationRepository:
    def test_book_locks_table_then_inserts(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = [
            _cursor(),  # LOCK TABLE
            _cursor(rows=[]),  # overlap check
            _cursor(row=_reservation_row(10, date(2024, 1, 1), date(2024, 1, 3))),
        ]
        repo = PostgresReservationRepository(pool=pool)

        attempt = repo.book_reservation(
            Reservation(
                id=None, start_date=date(2024, 1, 1), end_date=date(2024, 1, 3), user_id=1
            )
        )

        assert attempt.accepted is True
        assert attempt.created.id == 10
        statements = [c.args[0] for c in conn.execute.call_args_list]
        assert "LOCK TABLE reservations" in statements[0]
        assert "INSERT INTO reservations" in statements[2]
        conn.transaction.assert_called_once()

    def test_book_returns_conflicts_without_insert(self):
        pool, conn = _mock_pool()
        existing = _reservation_row(3, date(2024, 1, 2), date(2024, 1, 4))
        conn.execute.side_effect = [_cursor(), _cursor(rows=[existing])]
        repo = PostgresReservationRepository(pool=pool)

        attempt = repo.book_reservation(
            Reservation(
                id=None, start_date=date(2024, 1, 4), end_date=date(2024, 1, 6), user_id=1
            )
        )

        assert attempt.accepted is False
        assert [r.id for r in attempt.conflicts] == [3]
        assert conn.execute.call_count == 2
        # Closed interval: (new.end, new.start) feed "start <= %s AND end >= %s".
        assert conn.execute.call_args_list[1].args[1] == (
            date(2024, 1, 6),
            date(2024, 1, 4),
        )

    def test_exclusion_violation_maps_to_conflict(self):
        pool, conn = _mock_pool()
        existing = _reservation_row(4, date(2024, 1, 1), date(2024, 1, 9))
        conn.execute.side_effect = [
            _cursor(),
            _cursor(rows=[]),
            pg_errors.ExclusionViolation("reservations_no_overlap"),
            _cursor(rows=[existing]),  # find_overlapping after the rollback
        ]
        repo = PostgresReservationRepository(pool=pool)

        attempt = repo.book_reservation(
            Reservation(
                id=None, start_date=date(2024, 1, 5), end_date=date(2024, 1, 6), user_id=2
            )
        )

        assert attempt.accepted is False
        assert [r.id for r in attempt.conflicts] == [4]

    def test_missing_owner_maps_to_missing_reference(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = [
            _cursor(),
            _cursor(rows=[]),
            pg_errors.ForeignKeyViolation("fk_reservations_user_id__users"),
        ]
        repo = PostgresReservationRepository(pool=pool)

        with pytest.raises(MissingReferenceError) as exc_info:
            repo.book_reservation(
                Reservation(
                    id=None,
                    start_date=date(2024, 1, 5),
                    end_date=date(2024, 1, 6),
                    user_id=42,
                )
            )

        assert (exc_info.value.entity, exc_info.value.entity_id) == ("User", 42)

    def test_driver_failure_raises_database_error(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = RuntimeError("connection reset")
        repo = PostgresReservationRepository(pool=pool)

        with pytest.raises(DatabaseError, match="connection reset"):
            repo.get_reservation(1)

    def test_delete_reports_missing(self):
        pool, conn = _mock_pool()
        conn.execute.return_value = _cursor(row=None)
        repo = PostgresReservationRepository(pool=pool)

        assert repo.delete_reservation(99) is False


class TestPostgresDutyAssignmentRepository:
    def test_transition_is_single_guarded_update(self):
        pool, conn = _mock_pool()
        conn.execute.return_value = _cursor(
            row=_assignment_row("COMPLETED", date(2024, 3, 15))
        )
        repo = PostgresDutyAssignmentRepository(pool=pool)

        updated = repo.transition_assignment(
            7,
            to_status=AssignmentStatus.COMPLETED,
            allowed_from=allowed_sources(AssignmentStatus.COMPLETED),
            completed_date=date(2024, 3, 15),
        )

        assert updated.status == AssignmentStatus.COMPLETED
        assert updated.completed_date == date(2024, 3, 15)
        conn.execute.assert_called_once()
        sql, params = conn.execute.call_args.args
        assert "UPDATE duty_assignments" in sql
        assert "status = ANY(%s::text[])" in sql
        assert params == (
            "COMPLETED",
            date(2024, 3, 15),
            7,
            ["ASSIGNED", "COMPLETED", "IN_PROGRESS"],
        )

    def test_transition_guard_miss_returns_none(self):
        pool, conn = _mock_pool()
        conn.execute.return_value = _cursor(row=None)
        repo = PostgresDutyAssignmentRepository(pool=pool)

        assert (
            repo.transition_assignment(
                7,
                to_status=AssignmentStatus.CANCELLED,
                allowed_from=allowed_sources(AssignmentStatus.CANCELLED),
                completed_date=None,
            )
            is None
        )


    def test_missing_user_on_insert_names_user(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = pg_errors.ForeignKeyViolation("fk violation")
        repo = PostgresDutyAssignmentRepository(pool=pool)

        with pytest.raises(MissingReferenceError) as exc_info:
            repo.create_assignment(_new_assignment(duty_id=1, user_id=2))

        assert (exc_info.value.entity, exc_info.value.entity_id) == ("User", 2)

    def test_missing_duty_on_insert_names_duty(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = _DutyGone("fk violation")
        repo = PostgresDutyAssignmentRepository(pool=pool)

        with pytest.raises(MissingReferenceError) as exc_info:
            repo.create_assignment(_new_assignment(duty_id=1, user_id=2))

        assert (exc_info.value.entity, exc_info.value.entity_id) == ("Duty", 1)

    def test_overdue_is_one_joined_statement(self):
        pool, conn = _mock_pool()
        conn.execute.return_value = _cursor(
            rows=[_assignment_row("ASSIGNED") + _duty_row(1)]
        )
        repo = PostgresDutyAssignmentRepository(pool=pool)

        rows = repo.list_overdue_assignments(date(2024, 3, 8))

        conn.execute.assert_called_once()
        sql, params = conn.execute.call_args.args
        assert "JOIN duties d ON d.id = a.duty_id" in sql
        assert "d.is_active" in sql
        assert "ORDER BY a.assigned_date ASC, a.id ASC" in sql
        assert params == ("ASSIGNED", date(2024, 3, 8))
        [(assignment, duty)] = rows
        assert (assignment.id, assignment.duty_id) == (7, 1)
        assert (duty.id, duty.is_active) == (1, True)


class TestPostgresDutyRepository:
    def test_search_uses_escaped_pattern_and_rank_order(self):
        pool, conn = _mock_pool()
        conn.execute.return_value = _cursor(rows=[])
        repo = PostgresDutyRepository(pool=pool)

        repo.search_duties("50%")

        sql, params = conn.execute.call_args.args
        assert params == ("%50\\%%", "%50\\%%")
        assert "WHEN 'URGENT' THEN 4" in sql
        assert "lower(name) ASC" in sql

    def test_list_failure_raises_database_error(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = RuntimeError("boom")
        repo = PostgresDutyRepository(pool=pool)

        with pytest.raises(DatabaseError):
            repo.list_active_duties()


class TestPostgresUserRepository:
    def _user(self):
        return User(
            id=None,
            username="carol",
            email="carol@example.com",
            password_hash="hashed",
            role=UserRole.USER,
        )

    def test_unique_violation_on_create_is_duplicate_email(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = pg_errors.UniqueViolation("uq_users_lower_email")
        repo = PostgresUserRepository(pool=pool)

        with pytest.raises(DuplicateUserError) as exc_info:
            repo.create_user(self._user())

        assert (exc_info.value.field, exc_info.value.value) == (
            "email",
            "carol@example.com",
        )

    def test_unique_violation_on_create_is_duplicate_username(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = _UsernameTaken("uq_users_username")
        repo = PostgresUserRepository(pool=pool)

        with pytest.raises(DuplicateUserError) as exc_info:
            repo.create_user(self._user())

        assert (exc_info.value.field, exc_info.value.value) == ("username", "carol")

    def test_unique_violation_on_update_is_duplicate(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = _UsernameTaken("uq_users_username")
        repo = PostgresUserRepository(pool=pool)

        with pytest.raises(DuplicateUserError) as exc_info:
            repo.update_user(3, username="taken")

        assert exc_info.value.field == "username"

    def test_constraint_name_picks_field(self):
        by_name = SimpleNamespace(
            diag=SimpleNamespace(constraint_name="uq_users_username")
        )
        by_email = SimpleNamespace(diag=SimpleNamespace(constraint_name=None))

        assert _duplicate(by_name, "u", "e").field == "username"
        assert _duplicate(by_email, "u", "e").field == "email"

    def test_other_driver_failure_is_still_database_error(self):
        pool, conn = _mock_pool()
        conn.execute.side_effect = RuntimeError("connection reset")
        repo = PostgresUserRepository(pool=pool)

        with pytest.raises(DatabaseError):
            repo.create_user(self._user())
