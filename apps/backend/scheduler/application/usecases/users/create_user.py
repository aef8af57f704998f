"""
===============================================================================
USE CASE: Create User (admin)
===============================================================================

Business Rules:
    R1) Solo ADMIN.
    R2) username y email requeridos y únicos (case-insensitive para email).
    R3) password requerido, largo mínimo, y confirmación idéntica.
    R4) El password se hashea con el hasher inyectado (Argon2 en runtime);
        el core nunca ve ni loguea el texto plano más allá de este punto.
    R5) role default USER.

Error Mapping:
    - UNAUTHORIZED: R1
    - VALIDATION_ERROR: R2 (faltantes) / R3
    - CONFLICT: R2 (duplicados)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.errors import DuplicateUserError
from ....domain.policy import Actor, is_admin
from ....domain.repositories import UserRepository
from ....identity.users import User, UserRole
from ..results import UserResult, unauthorized, validation_error
from ._rules import (
    DEFAULT_MIN_PASSWORD_CHARS,
    check_password,
    check_unique,
    duplicate_conflict,
    normalize_email,
    normalize_name,
)


@dataclass(frozen=True)
class CreateUserInput:
    actor: Actor | None
    username: str
    email: str
    password: str
    confirm_password: str
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole = UserRole.USER


class CreateUserUseCase:
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

    def execute(self, input_data: CreateUserInput) -> UserResult:
        if not is_admin(input_data.actor):
            return UserResult(error=unauthorized("Only admins can create users."))

        username = (input_data.username or "").strip()
        email = normalize_email(input_data.email)
        if not username:
            return UserResult(error=validation_error("Username is required."))
        if not email:
            return UserResult(error=validation_error("Email is required."))

        password_error = check_password(
            input_data.password,
            input_data.confirm_password,
            min_chars=self._min_password_chars,
        )
        if password_error is not None:
            return UserResult(error=password_error)

        duplicate = check_unique(self._users, username=username, email=email)
        if duplicate is not None:
            return UserResult(error=duplicate)

        try:
            created = self._users.create_user(
                User(
                    id=None,
                    username=username,
                    email=email,
                    password_hash=self._hash(input_data.password),
                    role=input_data.role or UserRole.USER,
                    first_name=normalize_name(input_data.first_name),
                    last_name=normalize_name(input_data.last_name),
                )
            )
        except DuplicateUserError as exc:
            return UserResult(error=duplicate_conflict(exc))

        logger.info(
            "User created",
            extra={"user_id": created.id, "role": created.role.value},
        )
        return UserResult(user=created)
