"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / dev local).
  - Lookups por id, username y email (email case-insensitive).
  - Listados ordenados por id ASC (alineado con Postgres).

Constraints:
  - Thread-safe: acceso protegido por Lock.
  - Unicidad de username / email (case-insensitive) re-chequeada bajo el
    mismo Lock que el insert: dos altas concurrentes no pueden pasar ambas.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional

from ....domain.errors import DuplicateUserError
from ....domain.repositories import UserRepository
from ....identity.users import User, UserRole
from ._common import id_sequence, utc_now


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._next_id = id_sequence()

    def _assert_unique(
        self, username: str | None, email: str | None, exclude_id: int | None
    ) -> None:
        # Llamar con el lock tomado.
        for other in self._users.values():
            if other.id == exclude_id:
                continue
            if username and other.username == username:
                raise DuplicateUserError("username", username)
            if email and other.email.lower() == email.strip().lower():
                raise DuplicateUserError("email", email)

    def _snapshot(self) -> List[User]:
        with self._lock:
            return sorted(self._users.values(), key=lambda u: u.id)

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user
        return None

    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = (email or "").strip().lower()
        with self._lock:
            for user in self._users.values():
                if user.email.lower() == wanted:
                    return user
        return None

    def list_users(self) -> List[User]:
        return self._snapshot()

    def list_users_by_role(self, role: UserRole) -> List[User]:
        return [u for u in self._snapshot() if u.role == role]

    def search_users_by_name(self, term: str) -> List[User]:
        needle = term.lower()
        return [
            u
            for u in self._snapshot()
            if needle in (u.first_name or "").lower()
            or needle in (u.last_name or "").lower()
        ]

    def create_user(self, user: User) -> User:
        now = utc_now()
        with self._lock:
            self._assert_unique(user.username, user.email, exclude_id=None)
            stored = replace(
                user, id=self._next_id(), created_at=now, updated_at=now
            )
            self._users[stored.id] = stored
            return stored

    def update_user(
        self,
        user_id: int,
        *,
        username: str | None = None,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        password_hash: str | None = None,
        role: UserRole | None = None,
    ) -> Optional[User]:
        changes = {
            "username": username,
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "password_hash": password_hash,
            "role": role,
        }
        changes = {k: v for k, v in changes.items() if v is not None}

        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            self._assert_unique(username, email, exclude_id=user_id)
            updated = replace(current, updated_at=utc_now(), **changes)
            self._users[user_id] = updated
            return updated

    def delete_user(self, user_id: int) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None
