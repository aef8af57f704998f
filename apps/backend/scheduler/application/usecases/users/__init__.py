"""User administration use cases."""

from .create_user import CreateUserInput, CreateUserUseCase
from .delete_user import DeleteUserUseCase
from .list_users import (
    GetUserUseCase,
    ListUsersByRoleUseCase,
    ListUsersUseCase,
    SearchUsersByNameUseCase,
)
from .update_user import UpdateUserInput, UpdateUserRoleUseCase, UpdateUserUseCase

__all__ = [
    "CreateUserInput",
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersByRoleUseCase",
    "ListUsersUseCase",
    "SearchUsersByNameUseCase",
    "UpdateUserInput",
    "UpdateUserRoleUseCase",
    "UpdateUserUseCase",
]
