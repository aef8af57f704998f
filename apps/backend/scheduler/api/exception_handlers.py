"""
===============================================================================
TARJETA CRC — scheduler/api/exception_handlers.py
===============================================================================

Responsabilidades:
  - Mapear excepciones de infraestructura a problem+json (503 / 500).
  - Dejar en el log el mismo error_id que recibe el cliente.
  - Ocultar mensajes internos cuando APP_ENV=production.

Colaboradores:
  - crosscutting.error_responses
  - crosscutting.exceptions
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    app_exception_handler,
    database_error,
    internal_error,
)
from ..crosscutting.exceptions import DatabaseError, SchedulerBaseError
from ..crosscutting.logger import logger


def _public_message(message: str, fallback: str) -> str:
    return fallback if get_settings().is_production() else message


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error("Storage no disponible", extra={"error_id": exc.error_id})
    problem = database_error(_public_message(exc.message, "Storage is unavailable"))
    problem.errors = [{"error_id": exc.error_id}]
    return await app_exception_handler(request, problem)


async def scheduler_error_handler(
    request: Request, exc: SchedulerBaseError
) -> JSONResponse:
    logger.error("Falla interna", extra={"error_id": exc.error_id})
    problem = internal_error(_public_message(exc.message, "Unexpected error"))
    problem.errors = [{"error_id": exc.error_id}]
    return await app_exception_handler(request, problem)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Excepción no controlada")
    problem = internal_error(_public_message(str(exc), "Unexpected error"))
    return await app_exception_handler(request, problem)


def register_exception_handlers(app: FastAPI) -> None:
    # DatabaseError antes que su base; Exception queda como fallback.
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(SchedulerBaseError, scheduler_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
