"""Infra DB: pool + errores tipados."""

from .errors import (
    DatabasePoolError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from .pool import close_pool, get_pool, init_pool, is_pool_initialized, ping

__all__ = [
    "init_pool",
    "get_pool",
    "close_pool",
    "is_pool_initialized",
    "ping",
    "DatabasePoolError",
    "PoolAlreadyInitializedError",
    "PoolNotInitializedError",
]
