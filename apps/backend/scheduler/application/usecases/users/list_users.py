"""
===============================================================================
USE CASES: User queries
===============================================================================

    - ListUsers / ListUsersByRole / SearchUsersByName: solo ADMIN.
    - GetUser: cualquier actor autenticado.
===============================================================================
"""

from __future__ import annotations

from ....domain.policy import Actor, is_admin
from ....domain.repositories import UserRepository
from ....identity.users import UserRole
from ..results import (
    UserListResult,
    UserResult,
    not_found,
    unauthorized,
    validation_error,
)


def _admin_only() -> UserListResult:
    return UserListResult(users=[], error=unauthorized("Only admins can list users."))


class ListUsersUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, actor: Actor | None) -> UserListResult:
        if not is_admin(actor):
            return _admin_only()
        return UserListResult(users=self._users.list_users())


class ListUsersByRoleUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, actor: Actor | None, role: UserRole) -> UserListResult:
        if not is_admin(actor):
            return _admin_only()
        return UserListResult(users=self._users.list_users_by_role(role))


class SearchUsersByNameUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, actor: Actor | None, term: str) -> UserListResult:
        if not is_admin(actor):
            return _admin_only()
        cleaned = (term or "").strip()
        if not cleaned:
            return UserListResult(
                users=[], error=validation_error("Search term is required.")
            )
        return UserListResult(users=self._users.search_users_by_name(cleaned))


class GetUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user_id: int, actor: Actor | None) -> UserResult:
        if actor is None:
            return UserResult(error=unauthorized("Actor is required."))
        user = self._users.get_user(user_id)
        if user is None:
            return UserResult(error=not_found("User", user_id))
        return UserResult(user=user)
