# apps/backend/scheduler/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Problem Details del scheduler (application/problem+json)
===============================================================================

Cada falla que cruza el borde HTTP sale con el mismo sobre:
  - code estable (ErrorCode) para que el cliente ramifique sin parsear texto
  - errors[] con el detalle útil (reservas en conflicto, request_id, error_id)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + factories + app_exception_handler

Responsabilidades:
  - Asociar cada ErrorCode con su status HTTP (_STATUS_BY_CODE)
  - Serializar el sobre problem+json

Colaboradores:
  - interfaces/api/http/error_mapping.py (SchedulerError -> AppHTTPException)
  - api/exception_handlers.py (registro en FastAPI)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.DATABASE_ERROR: 503,
}


class ErrorDetail(BaseModel):
    """Cuerpo problem+json; `errors` lleva las filas de contexto."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


# Documentación OpenAPI compartida por todos los routers /v1.
OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    str(status): {
        "description": f"{code.label} (problem+json)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }
    for code, status in _STATUS_BY_CODE.items()
    if 400 <= status < 500
}


class AppHTTPException(HTTPException):
    """HTTPException que además conoce su ErrorCode y filas de detalle."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


def _problem(
    code: ErrorCode, detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(_STATUS_BY_CODE[code], code, detail, errors)


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return _problem(ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(detail: str) -> AppHTTPException:
    return _problem(ErrorCode.NOT_FOUND, detail)


def conflict(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return _problem(ErrorCode.CONFLICT, detail, errors)


def unauthorized(detail: str = "Missing or invalid credentials") -> AppHTTPException:
    return _problem(ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Not allowed for this user") -> AppHTTPException:
    return _problem(ErrorCode.FORBIDDEN, detail)


def internal_error(detail: str = "Unexpected error") -> AppHTTPException:
    return _problem(ErrorCode.INTERNAL_ERROR, detail)


def database_error(detail: str = "Storage is unavailable") -> AppHTTPException:
    return _problem(ErrorCode.DATABASE_ERROR, detail)


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Convierte AppHTTPException en problem+json; agrega request_id al final."""
    rows = list(exc.errors or [])
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        rows.append({"request_id": request_id})

    body = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.label,
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=request.url.path,
        errors=rows or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
