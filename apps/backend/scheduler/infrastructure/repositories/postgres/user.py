"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - CRUD de usuarios sobre la tabla users (SQL crudo).
  - Email case-insensitive (lower(email)).
  - Update parcial: solo columnas explícitas (whitelist).
  - Unicidad atómica: uq_users_username / uq_users_lower_email deciden;
    UniqueViolation -> DuplicateUserError (CONFLICT en el caso de uso).

Collaborators:
  - identity.users.User / UserRole
  - PostgresRepositoryBase (pool + manejo de errores)
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from psycopg import errors as pg_errors

from ....domain.errors import DuplicateUserError
from ....identity.users import User, UserRole
from ._base import PostgresRepositoryBase, escape_like

_COLUMNS = """
    id, username, email, password_hash, role,
    first_name, last_name, created_at, updated_at
"""


def _duplicate(
    exc: pg_errors.UniqueViolation, username: str | None, email: str | None
) -> DuplicateUserError:
    constraint = getattr(exc.diag, "constraint_name", None)
    if constraint == "uq_users_username":
        return DuplicateUserError("username", username or "")
    return DuplicateUserError("email", email or "")


def _row_to_user(row: tuple) -> User:
    (
        user_id,
        username,
        email,
        password_hash,
        role,
        first_name,
        last_name,
        created_at,
        updated_at,
    ) = row
    return User(
        id=user_id,
        username=username,
        email=email,
        password_hash=password_hash,
        role=UserRole(role),
        first_name=first_name,
        last_name=last_name,
        created_at=created_at,
        updated_at=updated_at,
    )


class PostgresUserRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    def _one(self, where_sql: str, params: list, extra: dict) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_COLUMNS} FROM users WHERE {where_sql}",
            params=params,
            context_msg="Error al obtener usuario",
            extra=extra,
        )
        return _row_to_user(row) if row else None

    def _many(self, where_sql: str, params: list, extra: dict) -> List[User]:
        rows = self._fetchall(
            query=f"SELECT {_COLUMNS} FROM users {where_sql} ORDER BY id ASC",
            params=params,
            context_msg="Error al listar usuarios",
            extra=extra,
        )
        return [_row_to_user(r) for r in rows]

    def get_user(self, user_id: int) -> Optional[User]:
        return self._one("id = %s", [user_id], {"user_id": user_id})

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._one("username = %s", [username], {"username": username})

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._one("lower(email) = lower(%s)", [email.strip()], {})

    def list_users(self) -> List[User]:
        return self._many("", [], {})

    def list_users_by_role(self, role: UserRole) -> List[User]:
        return self._many("WHERE role = %s", [role.value], {"role": role.value})

    def search_users_by_name(self, term: str) -> List[User]:
        pattern = f"%{escape_like(term)}%"
        return self._many(
            "WHERE first_name ILIKE %s ESCAPE '\\' OR last_name ILIKE %s ESCAPE '\\'",
            [pattern, pattern],
            {},
        )

    def create_user(self, user: User) -> User:
        try:
            row = self._insert(user)
        except pg_errors.UniqueViolation as exc:
            raise _duplicate(exc, user.username, user.email) from exc
        return _row_to_user(row)

    def _insert(self, user: User) -> tuple:
        return self._fetchone(
            query=f"""
                INSERT INTO users (
                    username, email, password_hash, role, first_name, last_name
                )
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING {_COLUMNS}
            """,
            params=[
                user.username,
                user.email,
                user.password_hash,
                user.role.value,
                user.first_name,
                user.last_name,
            ],
            context_msg="Error al crear usuario",
            extra={"username": user.username},
            passthrough=(pg_errors.UniqueViolation,),
        )

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
        changes: dict[str, object] = {
            "username": username,
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "password_hash": password_hash,
            "role": role.value if role is not None else None,
        }
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            return self.get_user(user_id)

        set_sql = ", ".join(f"{column} = %s" for column in changes)
        try:
            row = self._fetchone(
                query=f"""
                    UPDATE users
                    SET {set_sql}, updated_at = now()
                    WHERE id = %s
                    RETURNING {_COLUMNS}
                """,
                params=[*changes.values(), user_id],
                context_msg="Error al actualizar usuario",
                extra={"user_id": user_id, "fields": sorted(changes)},
                passthrough=(pg_errors.UniqueViolation,),
            )
        except pg_errors.UniqueViolation as exc:
            raise _duplicate(exc, username, email) from exc
        return _row_to_user(row) if row else None

    def delete_user(self, user_id: int) -> bool:
        row = self._fetchone(
            query="DELETE FROM users WHERE id = %s RETURNING id",
            params=[user_id],
            context_msg="Error al borrar usuario",
            extra={"user_id": user_id},
        )
        return row is not None
