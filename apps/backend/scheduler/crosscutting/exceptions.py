# apps/backend/scheduler/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones de infraestructura
===============================================================================

Los rechazos de negocio (NOT_FOUND / UNAUTHORIZED / CONFLICT / VALIDATION) no
son excepciones: viajan como SchedulerError dentro de los resultados. Lo que
queda acá es lo que el caso de uso no puede decidir (storage caído, SQL roto).

Cada instancia lleva un error_id que aparece en el log y en la respuesta HTTP.

Colaboradores:
  - api/exception_handlers.py (status + problem+json)
  - infrastructure/repositories/postgres/_base.py (envuelve psycopg.Error)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class SchedulerBaseError(Exception):
    """Falla interna con id de correlación."""

    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_id = error_id or uuid4().hex
        self.original_error = original_error


class DatabaseError(SchedulerBaseError):
    """Conexión, pool, timeout o constraint rota en PostgreSQL."""

    error_code: str = "DATABASE_ERROR"
