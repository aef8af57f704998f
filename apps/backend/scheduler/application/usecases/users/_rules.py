"""
Reglas compartidas de administración de usuarios (normalización + password).
"""

from __future__ import annotations

from ....domain.errors import DuplicateUserError
from ....domain.repositories import UserRepository
from ..results import SchedulerError, conflict, validation_error

DEFAULT_MIN_PASSWORD_CHARS = 6


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def normalize_name(value: str | None) -> str | None:
    return (value or "").strip() or None


def check_password(
    password: str | None,
    confirm_password: str | None,
    *,
    min_chars: int,
) -> SchedulerError | None:
    """Valida password + confirmación. None si es válido."""
    if not password:
        return validation_error("Password is required.")
    if len(password) < min_chars:
        return validation_error(
            f"Password must be at least {min_chars} characters."
        )
    if password != confirm_password:
        return validation_error("Password confirmation does not match.")
    return None


def check_unique(
    users: UserRepository,
    *,
    username: str | None,
    email: str | None,
    exclude_user_id: int | None = None,
) -> SchedulerError | None:
    """Conflict si username/email ya pertenecen a otro usuario."""
    if username:
        existing = users.get_user_by_username(username)
        if existing is not None and existing.id != exclude_user_id:
            return _taken("username", username)
    if email:
        existing = users.get_user_by_email(email)
        if existing is not None and existing.id != exclude_user_id:
            return _taken("email", email)
    return None


def duplicate_conflict(exc: DuplicateUserError) -> SchedulerError:
    """El store ganó la carrera: mismo mensaje que check_unique."""
    return _taken(exc.field, exc.value)


def _taken(field: str, value: str) -> SchedulerError:
    if field == "username":
        return conflict(f"Username '{value}' is already taken.")
    return conflict(f"Email '{value}' is already registered.")
