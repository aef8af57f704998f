"""
Name: Authorization Policy Tests

Responsibilities:
  - Owner or ADMIN may mutate; anyone else may not
  - Missing actor is never permitted
"""

import pytest

from scheduler.domain.policy import Actor, can_mutate, is_admin
from scheduler.identity.users import UserRole

pytestmark = pytest.mark.unit


def test_owner_can_mutate_own_record():
    assert can_mutate(Actor(user_id=1, role=UserRole.USER), 1) is True


def test_other_user_cannot_mutate():
    assert can_mutate(Actor(user_id=2, role=UserRole.USER), 1) is False


def test_admin_can_mutate_any_record():
    assert can_mutate(Actor(user_id=99, role=UserRole.ADMIN), 1) is True


def test_missing_actor_is_denied():
    assert can_mutate(None, 1) is False


def test_unknown_owner_only_admin():
    assert can_mutate(Actor(user_id=1, role=UserRole.USER), None) is False
    assert can_mutate(Actor(user_id=1, role=UserRole.ADMIN), None) is True


def test_is_admin():
    assert is_admin(Actor(user_id=1, role=UserRole.ADMIN)) is True
    assert is_admin(Actor(user_id=1, role=UserRole.USER)) is False
    assert is_admin(None) is False
