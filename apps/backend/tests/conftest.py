"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (APP_ENV=test, no .env file)
  - Provide in-memory repositories, actors and a fixed clock
  - Provide small factories to seed users / duties / assignments

Collaborators:
  - pytest: Test framework
  - scheduler.infrastructure.repositories.in_memory: repositories under test
  - scheduler.domain: entities and policy

Notes:
  - Fixtures are function-scoped: every test gets empty repositories.
  - TODAY is fixed so overdue math is deterministic.
"""

import os
import sys
from datetime import date
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")

from scheduler.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from scheduler.domain.entities import (  # noqa: E402
    AssignmentStatus,
    Duty,
    DutyAssignment,
    DutyPriority,
)
from scheduler.domain.policy import Actor  # noqa: E402
from scheduler.identity.users import User, UserRole  # noqa: E402
from scheduler.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemoryDutyAssignmentRepository,
    InMemoryDutyRepository,
    InMemoryReservationRepository,
    InMemoryUserRepository,
)

TODAY = date(2024, 3, 15)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that need a real PostgreSQL"
    )


# ============================================================================
# Clock
# ============================================================================


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock():
    """R: Callable clock for use cases (always TODAY)."""
    return lambda: TODAY


# ============================================================================
# Repositories
# ============================================================================


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def reservation_repo() -> InMemoryReservationRepository:
    return InMemoryReservationRepository()


@pytest.fixture
def duty_repo() -> InMemoryDutyRepository:
    return InMemoryDutyRepository()


@pytest.fixture
def assignment_repo(duty_repo) -> InMemoryDutyAssignmentRepository:
    return InMemoryDutyAssignmentRepository(duty_repo)


# ============================================================================
# Users / actors
# ============================================================================


def _seed_user(repo, username: str, role: UserRole, **kwargs) -> User:
    return repo.create_user(
        User(
            id=None,
            username=username,
            email=f"{username}@example.com",
            password_hash="hashed",
            role=role,
            **kwargs,
        )
    )


@pytest.fixture
def alice(user_repo) -> User:
    return _seed_user(
        user_repo, "alice", UserRole.USER, first_name="Alice", last_name="Smith"
    )


@pytest.fixture
def bob(user_repo) -> User:
    return _seed_user(
        user_repo, "bob", UserRole.USER, first_name="Bob", last_name="Jones"
    )


@pytest.fixture
def admin(user_repo) -> User:
    return _seed_user(user_repo, "admin", UserRole.ADMIN, first_name="Ada")


@pytest.fixture
def alice_actor(alice) -> Actor:
    return Actor(user_id=alice.id, role=alice.role)


@pytest.fixture
def bob_actor(bob) -> Actor:
    return Actor(user_id=bob.id, role=bob.role)


@pytest.fixture
def admin_actor(admin) -> Actor:
    return Actor(user_id=admin.id, role=admin.role)


# ============================================================================
# Duties / assignments factories
# ============================================================================


@pytest.fixture
def make_duty(duty_repo):
    def _make(
        name: str = "Dishes",
        *,
        description: str | None = None,
        priority: DutyPriority = DutyPriority.MEDIUM,
        is_active: bool = True,
    ) -> Duty:
        return duty_repo.create_duty(
            Duty(
                id=None,
                name=name,
                description=description,
                priority=priority,
                is_active=is_active,
            )
        )

    return _make


@pytest.fixture
def make_assignment(assignment_repo):
    def _make(
        duty: Duty,
        user: User,
        assigned_date: date = TODAY,
        status: AssignmentStatus = AssignmentStatus.ASSIGNED,
    ) -> DutyAssignment:
        return assignment_repo.create_assignment(
            DutyAssignment(
                id=None,
                duty_id=duty.id,
                user_id=user.id,
                assigned_date=assigned_date,
                status=status,
                completed_date=assigned_date
                if status == AssignmentStatus.COMPLETED
                else None,
            )
        )

    return _make
