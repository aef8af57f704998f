"""
===============================================================================
USE CASES: Update User / Update User Role (admin)
===============================================================================

Business Rules:
    R1) Solo ADMIN.
    R2) Update parcial: los campos None no se tocan.
    R3) username/email nuevos deben seguir siendo únicos (CONFLICT), también
        cuando el chequeo previo pasa y el store rechaza el update.
    R4) Si viene password, aplica la misma regla que en alta.
    R5) Cambio de rol (promoción / democión) es un caso de uso aparte.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.errors import DuplicateUserError
from ....domain.policy import Actor, is_admin
from ....domain.repositories import UserRepository
from ....identity.users import UserRole
from ..results import UserResult, not_found, unauthorized, validation_error
from ._rules import (
    DEFAULT_MIN_PASSWORD_CHARS,
    check_password,
    check_unique,
    duplicate_conflict,
    normalize_email,
    normalize_name,
)


@dataclass(frozen=True)
class UpdateUserInput:
    actor: Actor | None
    user_id: int
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    password: str | None = None
    confirm_password: str | None = None


class UpdateUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: Callable[[str], str],
        *,
        min_password_chars: int = DEFAULT_MIN_PASSWORD_CHARS,
    ) -> None:
        self._users = user_repository
        self._hash = password_hasher
        self._min_password_chars = min_password_chars

    def execute(self, input_data: UpdateUserInput) -> UserResult:
        if not is_admin(input_data.actor):
            return UserResult(error=unauthorized("Only admins can update users."))

        if self._users.get_user(input_data.user_id) is None:
            return UserResult(error=not_found("User", input_data.user_id))

        username = None
        if input_data.username is not None:
            username = input_data.username.strip()
            if not username:
                return UserResult(error=validation_error("Username cannot be blank."))

        email = None
        if input_data.email is not None:
            email = normalize_email(input_data.email)
            if not email:
                return UserResult(error=validation_error("Email cannot be blank."))

        password_hash = None
        if input_data.password:
            password_error = check_password(
                input_data.password,
                input_data.confirm_password,
                min_chars=self._min_password_chars,
            )
            if password_error is not None:
                return UserResult(error=password_error)
            password_hash = self._hash(input_data.password)

        duplicate = check_unique(
            self._users,
            username=username,
            email=email,
            exclude_user_id=input_data.user_id,
        )
        if duplicate is not None:
            return UserResult(error=duplicate)

        try:
            updated = self._users.update_user(
                input_data.user_id,
                username=username,
                email=email,
                first_name=normalize_name(input_data.first_name),
                last_name=normalize_name(input_data.last_name),
                password_hash=password_hash,
            )
        except DuplicateUserError as exc:
            return UserResult(error=duplicate_conflict(exc))
        if updated is None:
            return UserResult(error=not_found("User", input_data.user_id))
        return UserResult(user=updated)


class UpdateUserRoleUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(
        self, user_id: int, role: UserRole, actor: Actor | None
    ) -> UserResult:
        if not is_admin(actor):
            return UserResult(error=unauthorized("Only admins can change roles."))

        updated = self._users.update_user(user_id, role=role)
        if updated is None:
            return UserResult(error=not_found("User", user_id))

        logger.info(
            "User role changed",
            extra={"user_id": user_id, "role": role.value, "actor_id": actor.user_id},
        )
        return UserResult(user=updated)
