"""
Name: User Administration Use Case Tests

Responsibilities:
  - Admin-only writes (create / update / role / delete)
  - Password rules (min length, confirmation) and hashing delegation
  - Uniqueness of username / email (case-insensitive email), including
    concurrent creates and rejections raised by the store
  - Queries (list, by role, search by name, get)
"""

import threading
from unittest.mock import MagicMock

import pytest

from scheduler.application.usecases import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersByRoleUseCase,
    ListUsersUseCase,
    SchedulerErrorCode,
    SearchUsersByNameUseCase,
    UpdateUserInput,
    UpdateUserRoleUseCase,
    UpdateUserUseCase,
)
from scheduler.domain.errors import DuplicateUserError
from scheduler.identity.users import UserRole

pytestmark = pytest.mark.unit


def fake_hash(password: str) -> str:
    return f"hashed::{password}"


def _create_input(actor, **overrides):
    data = {
        "actor": actor,
        "username": "carol",
        "email": "Carol@Example.com ",
        "password": "secret1",
        "confirm_password": "secret1",
        "first_name": " Carol ",
    }
    data.update(overrides)
    return CreateUserInput(**data)


# =============================================================================
# Create
# =============================================================================


def test_admin_creates_user(user_repo, admin_actor):
    result = CreateUserUseCase(user_repo, fake_hash).execute(_create_input(admin_actor))

    assert result.error is None
    assert result.user.email == "carol@example.com"
    assert result.user.first_name == "Carol"
    assert result.user.role == UserRole.USER
    assert result.user.password_hash == "hashed::secret1"


def test_non_admin_cannot_create_user(user_repo, alice_actor):
    result = CreateUserUseCase(user_repo, fake_hash).execute(_create_input(alice_actor))
    assert result.error.code == SchedulerErrorCode.UNAUTHORIZED


@pytest.mark.parametrize(
    "overrides",
    [
        {"username": " "},
        {"email": ""},
        {"password": "abc", "confirm_password": "abc"},
        {"confirm_password": "different"},
    ],
)
def test_create_user_validation(user_repo, admin_actor, overrides):
    result = CreateUserUseCase(user_repo, fake_hash).execute(
        _create_input(admin_actor, **overrides)
    )
    assert result.error.code == SchedulerErrorCode.VALIDATION_ERROR


def test_min_password_length_is_configurable(user_repo, admin_actor):
    result = CreateUserUseCase(user_repo, fake_hash, min_password_chars=10).execute(
        _create_input(admin_actor)
    )
    assert result.error.code == SchedulerErrorCode.VALIDATION_ERROR


def test_duplicate_username_is_conflict(user_repo, admin_actor, alice):
    result = CreateUserUseCase(user_repo, fake_hash).execute(
        _create_input(admin_actor, username="alice")
    )
    assert result.error.code == SchedulerErrorCode.CONFLICT


def test_duplicate_email_is_case_insensitive(user_repo, admin_actor, alice):
    result = CreateUserUseCase(user_repo, fake_hash).execute(
        _create_input(admin_actor, email="ALICE@example.com")
    )
    assert result.error.code == SchedulerErrorCode.CONFLICT


class _RacingUsers:
    """R: Holds every caller after the username lookup so all of them pass it."""

    def __init__(self, inner, parties: int) -> None:
        self._inner = inner
        self._barrier = threading.Barrier(parties)

    def get_user_by_username(self, username):
        found = self._inner.get_user_by_username(username)
        self._barrier.wait(timeout=5)
        return found

    def __getattr__(self, name):
        return getattr(self._inner, name)


def test_concurrent_create_same_username_single_winner(user_repo, admin_actor):
    use_case = CreateUserUseCase(_RacingUsers(user_repo, 2), fake_hash)
    results = []

    def create(i: int) -> None:
        results.append(
            use_case.execute(
                _create_input(admin_actor, username="dup", email=f"dup{i}@example.com")
            )
        )

    threads = [threading.Thread(target=create, args=(i,)) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    errors = [r.error for r in results if r.error is not None]
    assert len(errors) == 1
    assert errors[0].code == SchedulerErrorCode.CONFLICT
    assert errors[0].message == "Username 'dup' is already taken."
    assert sorted(u.username for u in user_repo.list_users()) == ["admin", "dup"]


def test_store_rejection_on_create_is_conflict(admin_actor):
    users = MagicMock()
    users.get_user_by_username.return_value = None
    users.get_user_by_email.return_value = None
    users.create_user.side_effect = DuplicateUserError("email", "carol@example.com")

    result = CreateUserUseCase(users, fake_hash).execute(_create_input(admin_actor))

    assert result.error.code == SchedulerErrorCode.CONFLICT
    assert result.error.message == "Email 'carol@example.com' is already registered."


# =============================================================================
# Update
# =============================================================================


def test_partial_update_keeps_untouched_fields(user_repo, admin_actor, alice):
    result = UpdateUserUseCase(user_repo, fake_hash).execute(
        UpdateUserInput(actor=admin_actor, user_id=alice.id, last_name="Walker")
    )

    assert result.error is None
    assert result.user.last_name == "Walker"
    assert result.user.first_name == "Alice"
    assert result.user.password_hash == alice.password_hash


def test_update_password_requires_confirmation(user_repo, admin_actor, alice):
    result = UpdateUserUseCase(user_repo, fake_hash).execute(
        UpdateUserInput(
            actor=admin_actor,
            user_id=alice.id,
            password="newsecret",
            confirm_password="nope",
        )
    )
    assert result.error.code == SchedulerErrorCode.VALIDATION_ERROR


def test_update_password_is_hashed(user_repo, admin_actor, alice):
    result = UpdateUserUseCase(user_repo, fake_hash).execute(
        UpdateUserInput(
            actor=admin_actor,
            user_id=alice.id,
            password="newsecret",
            confirm_password="newsecret",
        )
    )
    assert result.user.password_hash == "hashed::newsecret"


def test_update_to_taken_email_is_conflict(user_repo, admin_actor, alice, bob):
    result = UpdateUserUseCase(user_repo, fake_hash).execute(
        UpdateUserInput(actor=admin_actor, user_id=alice.id, email=bob.email)
    )
    assert result.error.code == SchedulerErrorCode.CONFLICT


def test_store_rejection_on_update_is_conflict(admin_actor, alice):
    users = MagicMock()
    users.get_user.return_value = alice
    users.get_user_by_username.return_value = None
    users.update_user.side_effect = DuplicateUserError("username", "taken")

    result = UpdateUserUseCase(users, fake_hash).execute(
        UpdateUserInput(actor=admin_actor, user_id=alice.id, username="taken")
    )

    assert result.error.code == SchedulerErrorCode.CONFLICT
    assert result.error.message == "Username 'taken' is already taken."


def test_update_keeping_own_email_is_allowed(user_repo, admin_actor, alice):
    result = UpdateUserUseCase(user_repo, fake_hash).execute(
        UpdateUserInput(actor=admin_actor, user_id=alice.id, email=alice.email)
    )
    assert result.error is None


def test_update_missing_user(user_repo, admin_actor):
    result = UpdateUserUseCase(user_repo, fake_hash).execute(
        UpdateUserInput(actor=admin_actor, user_id=555, first_name="X")
    )
    assert result.error.code == SchedulerErrorCode.NOT_FOUND


def test_update_requires_admin(user_repo, alice_actor, alice):
    result = UpdateUserUseCase(user_repo, fake_hash).execute(
        UpdateUserInput(actor=alice_actor, user_id=alice.id, first_name="Al")
    )
    assert result.error.code == SchedulerErrorCode.UNAUTHORIZED


def test_promote_user_to_admin(user_repo, admin_actor, alice):
    result = UpdateUserRoleUseCase(user_repo).execute(
        alice.id, UserRole.ADMIN, admin_actor
    )
    assert result.user.role == UserRole.ADMIN


def test_role_change_requires_admin(user_repo, alice_actor, bob):
    result = UpdateUserRoleUseCase(user_repo).execute(
        bob.id, UserRole.ADMIN, alice_actor
    )
    assert result.error.code == SchedulerErrorCode.UNAUTHORIZED
    assert user_repo.get_user(bob.id).role == UserRole.USER


# =============================================================================
# Delete
# =============================================================================


def test_admin_deletes_user(user_repo, admin_actor, bob):
    result = DeleteUserUseCase(user_repo).execute(bob.id, admin_actor)
    assert result.deleted is True
    assert user_repo.get_user(bob.id) is None


def test_delete_missing_user(user_repo, admin_actor):
    result = DeleteUserUseCase(user_repo).execute(321, admin_actor)
    assert result.error.code == SchedulerErrorCode.NOT_FOUND


def test_delete_requires_admin(user_repo, alice_actor, bob):
    result = DeleteUserUseCase(user_repo).execute(bob.id, alice_actor)
    assert result.error.code == SchedulerErrorCode.UNAUTHORIZED


# =============================================================================
# Queries
# =============================================================================


def test_list_users_admin_only(user_repo, admin_actor, alice_actor, alice, bob):
    listed = ListUsersUseCase(user_repo).execute(admin_actor).users
    assert {u.username for u in listed} == {"alice", "bob", "admin"}
    assert [u.id for u in listed] == sorted(u.id for u in listed)
    denied = ListUsersUseCase(user_repo).execute(alice_actor)
    assert denied.error.code == SchedulerErrorCode.UNAUTHORIZED


def test_list_users_by_role(user_repo, admin_actor, alice, bob):
    result = ListUsersByRoleUseCase(user_repo).execute(admin_actor, UserRole.ADMIN)
    assert [u.username for u in result.users] == ["admin"]


def test_search_users_by_first_or_last_name(user_repo, admin_actor, alice, bob):
    use_case = SearchUsersByNameUseCase(user_repo)
    assert [u.username for u in use_case.execute(admin_actor, "ali").users] == ["alice"]
    assert [u.username for u in use_case.execute(admin_actor, "JONES").users] == ["bob"]


def test_search_users_blank_term(user_repo, admin_actor):
    result = SearchUsersByNameUseCase(user_repo).execute(admin_actor, "")
    assert result.error.code == SchedulerErrorCode.VALIDATION_ERROR


def test_any_actor_can_get_user(user_repo, bob_actor, alice):
    result = GetUserUseCase(user_repo).execute(alice.id, bob_actor)
    assert result.user.username == "alice"


def test_get_missing_user(user_repo, bob_actor):
    assert (
        GetUserUseCase(user_repo).execute(999, bob_actor).error.code
        == SchedulerErrorCode.NOT_FOUND
    )
