"""
===============================================================================
TARJETA CRC — domain/policy.py
===============================================================================

Módulo:
    Política de Autorización (ownership vs administrador)

Responsabilidades:
    - Definir el Actor (identidad + rol) que recibe cada caso de uso.
    - Decidir si un actor puede mutar un registro con owner dado.
    - Decidir si un actor es administrador (catálogo de duties / usuarios).

Colaboradores:
    - identity.users.UserRole (catálogo de roles)
    - application: reservas (delete), asignaciones (complete/transition),
      duties y usuarios (admin-only).

Reglas:
    - Admin puede todo.
    - Owner puede mutar lo propio.
    - Sin actor => nunca permitido.
    - Funciones puras: sin DB, sin FastAPI, sin estado global.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ..identity.users import UserRole


@dataclass(frozen=True, slots=True)
class Actor:
    """Identidad autenticada que ejecuta la operación."""

    user_id: int
    role: UserRole


def is_admin(actor: Actor | None) -> bool:
    """True si el actor tiene rol ADMIN."""
    return actor is not None and actor.role == UserRole.ADMIN


def can_mutate(actor: Actor | None, target_owner_id: int | None) -> bool:
    """Evalúa permiso de mutación sobre un registro con owner."""
    if actor is None:
        return False

    if is_admin(actor):
        return True

    return target_owner_id is not None and actor.user_id == target_owner_id
