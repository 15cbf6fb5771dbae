"""
===============================================================================
TARJETA CRC — portal/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar un `RequestContext` inmutable por request en un único ContextVar.
  - Exponer los campos de correlación listos para el logger.

Colaboradores:
  - portal.crosscutting.middleware: bind_request() / release() por request.
  - portal.crosscutting.logger: log_fields().

Restricciones:
  - Solo datos de observabilidad. La identidad del usuario (Claims) NUNCA vive
    acá: se pasa explícitamente a cada caso de uso.
===============================================================================
"""

from __future__ import annotations

import time
from contextvars import ContextVar, Token
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    method: str = ""
    path: str = ""
    client: str = ""
    started: float = field(default_factory=time.perf_counter)

    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 2)


_current: ContextVar[RequestContext | None] = ContextVar(
    "portal_request_context", default=None
)


def bind_request(
    request_id: str, *, method: str = "", path: str = "", client: str = ""
) -> Token:
    """Asocia el contexto al request en curso; devolver el token a release()."""
    return _current.set(
        RequestContext(request_id=request_id, method=method, path=path, client=client)
    )


def release(token: Token) -> None:
    _current.reset(token)


def current_request() -> RequestContext | None:
    return _current.get()


def log_fields() -> dict[str, str]:
    """Campos de correlación para cada línea de log (vacío fuera de un request)."""
    ctx = _current.get()
    if ctx is None:
        return {}
    fields = {"request_id": ctx.request_id, "method": ctx.method, "path": ctx.path}
    if ctx.client:
        fields["client"] = ctx.client
    return {k: v for k, v in fields.items() if v}
