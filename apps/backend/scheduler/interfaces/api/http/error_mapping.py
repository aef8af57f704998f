"""
===============================================================================
TARJETA CRC — error_mapping.py (SchedulerError -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir SchedulerErrorCode a AppHTTPException (problem+json).
  - Centralizar el mapeo para que los routers no lo dupliquen.

Mapeo:
  - VALIDATION_ERROR -> 422
  - UNAUTHORIZED     -> 403 (el actor está autenticado pero la policy lo niega;
                         401 queda reservado para token ausente/inválido)
  - NOT_FOUND        -> 404
  - CONFLICT         -> 409 (los ids en conflicto viajan en `errors`)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn, Sequence

from scheduler.application.usecases import SchedulerError, SchedulerErrorCode
from scheduler.crosscutting.error_responses import (
    conflict,
    forbidden,
    internal_error,
    not_found,
    validation_error,
)
from scheduler.domain.entities import Reservation


def raise_scheduler_error(
    error: SchedulerError,
    *,
    conflicts: Sequence[Reservation] = (),
) -> NoReturn:
    if error.code == SchedulerErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == SchedulerErrorCode.UNAUTHORIZED:
        raise forbidden(error.message)
    if error.code == SchedulerErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if error.code == SchedulerErrorCode.CONFLICT:
        raise conflict(
            error.message,
            errors=[
                {
                    "reservation_id": r.id,
                    "start_date": r.start_date.isoformat(),
                    "end_date": r.end_date.isoformat(),
                }
                for r in conflicts
            ]
            or None,
        )
    raise internal_error(error.message)
