"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del pool de conexiones

Responsabilidades:
  - Distinguir "pool no inicializado" de "pool ya inicializado" y de fallas
    al adquirir conexión, en vez de RuntimeError genéricos.
===============================================================================
"""


class DatabasePoolError(Exception):
    """Base de errores de pool de base de datos."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabasePoolError):
    """get_pool() llamado antes de init_pool()."""
