"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (singleton por proceso)

Responsabilidades:
  - Inicializar, exponer y cerrar el pool.
  - Configurar cada conexión con statement_timeout: ninguna operación del
    scheduler puede quedar bloqueada indefinidamente (p.ej. esperando el
    LOCK TABLE de reservas).

Colaboradores:
  - psycopg_pool.ConnectionPool
  - crosscutting.config.get_settings
===============================================================================
"""

from __future__ import annotations

import threading

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

_pool = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    from ...crosscutting.config import get_settings

    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {timeout_ms}")
        conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int):
    """Inicializa el pool (una vez por proceso)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")

        # Lazy import: los tests in-memory no necesitan psycopg_pool cargado.
        from psycopg_pool import ConnectionPool

        logger.info(
            "Inicializando pool DB",
            extra={"min_size": min_size, "max_size": max_size},
        )
        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            open=True,
        )
        return _pool


def get_pool():
    """Retorna el pool singleton."""
    if _pool is None:
        raise PoolNotInitializedError(
            "Pool no inicializado. Llamar init_pool() primero."
        )
    return _pool


def close_pool() -> None:
    """Cierra el pool (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Cerrando pool DB")
            try:
                _pool.close()
            finally:
                _pool = None


def is_pool_initialized() -> bool:
    return _pool is not None


def ping() -> bool:
    """SELECT 1 contra el pool (healthcheck)."""
    with get_pool().connection() as conn:
        conn.execute("SELECT 1")
    return True
