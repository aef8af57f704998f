"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario

Responsabilidades:
    - Definir el enum de roles (USER / ADMIN).
    - Definir el dataclass User que consumen los casos de uso de administración
      y las reservas/asignaciones (como owner).

Colaboradores:
    - domain.policy: Actor usa UserRole para decidir permisos.
    - infrastructure/repositories/*/user.py: mapean filas -> User.
    - identity/auth_users.py: hashing de passwords y lectura del token.

Notas:
    - password_hash es opaco para el core: nunca se compara ni se loguea acá.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Roles soportados."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (identidad + rol)."""

    id: int | None
    username: str
    email: str
    password_hash: str
    role: UserRole = UserRole.USER
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        parts = [self.first_name or "", self.last_name or ""]
        full = " ".join(p for p in parts if p).strip()
        return full or self.username
