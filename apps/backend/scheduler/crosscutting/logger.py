# apps/backend/scheduler/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Loguear rechazos de reservas, transiciones de asignaciones y fallas de DB de
forma parseable (JSON), correlacionable (request_id) y sin filtrar secretos
(passwords / hashes / tokens).

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Formatear LogRecord como JSON
  - Enriquecer con contexto (request_id, method, path)
  - Redactar claves sensibles del "extra"

Colaboradores:
  - scheduler/context.py (ContextVars)
  - crosscutting/config.py (nivel y formato)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Atributos estándar del LogRecord: no se copian como "extra".
_RESERVED_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "confirm_password",
        "password_hash",
        "token",
        "access_token",
        "authorization",
        "jwt_secret",
    }
)

_REDACTED = "***REDACTADO***"


def _sanitize(key: str, value: Any) -> Any:
    if key.lower() in _SENSITIVE_KEYS:
        return _REDACTED
    if isinstance(value, dict):
        return {str(k): _sanitize(str(k), v) for k, v in value.items()}
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


class JSONFormatter(logging.Formatter):
    """Convierte LogRecord -> JSON de una línea."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        from ..context import get_context_dict

        payload.update(get_context_dict())

        for key, value in record.__dict__.items():
            if key in _RESERVED_KEYS:
                continue
            payload[key] = _sanitize(key, value)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )


def setup_logger(name: str = "scheduler-api") -> logging.Logger:
    """
    Crea y configura el logger de la aplicación.

    - Evita duplicación de handlers en reimport
    - Respeta log_level / log_json desde Settings
    """
    from .config import get_settings

    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if settings.log_json
            else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


# Instancia global (import-friendly)
logger = setup_logger()
