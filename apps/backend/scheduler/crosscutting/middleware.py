# apps/backend/scheduler/crosscutting/middleware.py
"""
===============================================================================
MÓDULO: Middleware HTTP de contexto de request
===============================================================================

RequestContextMiddleware:
   - Generar/propagar X-Request-Id
   - Setear contextvars (method/path) para correlación de logs
   - Log de finalización con status y latencia
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Asigna request_id, loguea fin del request y limpia el contexto."""

    _QUIET_PATHS = {"/healthz"}
    _MAX_REQUEST_ID_LEN = 128

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
        request_id = (
            incoming
            if incoming and len(incoming) <= self._MAX_REQUEST_ID_LEN
            else str(uuid.uuid4())
        )

        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception:
            logger.exception("request falló")
            raise
        finally:
            latency = time.perf_counter() - start
            if request.url.path not in self._QUIET_PATHS:
                logger.info(
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                    },
                )
            clear_context()
