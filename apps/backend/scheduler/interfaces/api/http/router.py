"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que main.py incluye con prefix="/v1".
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por contexto (reservations / duties+assignments / users).
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from scheduler.crosscutting.error_responses import OPENAPI_ERROR_RESPONSES

from .routers.duties import router as duties_router
from .routers.reservations import router as reservations_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Construye el router raíz v1 (factory: sin side-effects al importar)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(reservations_router)
    api_router.include_router(duties_router)
    api_router.include_router(users_router)

    return api_router


__all__ = ["build_router"]
