"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/_base.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
  - Resolver el pool (inyectable en tests, global en runtime).
  - Helpers de ejecución con manejo de errores consistente:
    cualquier falla de driver -> logger.exception + DatabaseError, salvo
    las excepciones listadas en `passthrough` (violaciones de integridad que
    el repositorio traduce a errores de dominio).

Constraints:
  - Queries siempre parametrizadas.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger


class PostgresRepositoryBase:
    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        # R: Lazy-load para no acoplarse al pool en import-time.
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fail(self, context_msg: str, extra: dict, exc: Exception) -> DatabaseError:
        logger.exception(context_msg, extra={**extra, "error": str(exc)})
        return DatabaseError(f"{context_msg}: {exc}", original_error=exc)

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict,
        passthrough: tuple[type[Exception], ...] = (),
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except passthrough:
            raise
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc


def escape_like(term: str) -> str:
    """R: Escapa comodines de LIKE para que el término matchee literal."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
