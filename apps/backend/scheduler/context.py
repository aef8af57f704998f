"""
===============================================================================
TARJETA CRC — scheduler/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Mantener datos de correlación del request usando ContextVars (async-safe).
  - Exponer helpers mínimos: set_request_context(), get_context_dict(),
    clear_context().

Colaboradores:
  - crosscutting.middleware: setea request_id/method/path al inicio del request.
  - crosscutting.logger: enriquece cada log con get_context_dict().

Restricciones:
  - Solo correlación (request_id/method/path). El actor NUNCA viaja por acá:
    se pasa explícito a cada caso de uso.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")


def set_request_context(*, request_id: str, method: str = "", path: str = "") -> None:
    """Setea el contexto del request actual."""
    request_id_var.set(request_id)
    http_method_var.set(method)
    http_path_var.set(path)


def get_context_dict() -> dict[str, str]:
    """Devuelve solo las claves con valor (evita ruido en los logs)."""
    values = {
        "request_id": request_id_var.get(),
        "method": http_method_var.get(),
        "path": http_path_var.get(),
    }
    return {key: value for key, value in values.items() if value}


def clear_context() -> None:
    """Limpia el contexto (fin del request)."""
    request_id_var.set("")
    http_method_var.set("")
    http_path_var.set("")
