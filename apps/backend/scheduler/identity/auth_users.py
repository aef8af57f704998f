"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Responsabilidades:
    - Argon2 para los passwords que administra CreateUser / UpdateUser.
    - Leer el access token (HS256) que emite el servicio de identidad y
      convertirlo en Actor(user_id, role).
    - Exponer require_actor() como dependencia FastAPI; cada router recibe el
      Actor explícito y lo pasa al caso de uso.

Colaboradores:
    - crosscutting.config.get_settings (jwt_secret)
    - crosscutting.error_responses.unauthorized (401)
    - domain.policy.Actor

Notas:
    - Este servicio no emite tokens ni tiene login.
    - El token nunca se loguea.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError
from fastapi import Header, Request

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger
from ..domain.policy import Actor
from .users import UserRole

JWT_ALGORITHM: str = "HS256"
REQUIRED_CLAIMS: tuple[str, ...] = ("sub", "role", "exp")

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    # VerifyMismatchError hereda de VerificationError.
    try:
        return _hasher.verify(password_hash, password)
    except VerificationError:
        return False


def decode_access_token(token: str, secret: str | None = None) -> Actor:
    """Valida firma, expiración y claims; cualquier falla es 401."""
    try:
        claims = jwt.decode(
            token,
            secret or get_settings().jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Token inválido.") from exc

    try:
        return Actor(user_id=int(claims["sub"]), role=UserRole(str(claims["role"])))
    except (TypeError, ValueError) as exc:
        raise unauthorized("Token inválido.") from exc


def _extract_bearer_token(authorization: str | None) -> str | None:
    scheme, _, token = (authorization or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def require_actor() -> Callable:
    """Dependency: Authorization: Bearer <jwt> -> Actor (o 401)."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Actor:
        token = _extract_bearer_token(authorization)
        if token is None:
            raise unauthorized("Falta token Bearer.")

        actor = decode_access_token(token)
        request.state.actor = actor
        logger.debug(
            "Actor resuelto",
            extra={"actor_id": actor.user_id, "role": actor.role.value},
        )
        return actor

    return dependency
