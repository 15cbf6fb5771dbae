"""
===============================================================================
TARJETA CRC — portal/crosscutting/middleware.py
===============================================================================

Class:
    RequestContextMiddleware

Responsabilidades:
    - Aceptar el X-Request-Id del cliente (si es razonable) o generar uno.
    - Publicarlo en request.state (envelopes de error) y en el contexto de logs.
    - Una línea de log por request con status y latencia.

Colaboradores:
    - portal/context.py (bind_request / release)
    - crosscutting/logger.py

Notas:
    - /healthz no genera línea de log.
===============================================================================
"""

from __future__ import annotations

import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import bind_request, current_request, release
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"
_MAX_REQUEST_ID = 128


def resolve_request_id(raw: str | None) -> str:
    candidate = (raw or "").strip()
    if candidate and len(candidate) <= _MAX_REQUEST_ID:
        return candidate
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    quiet_paths = frozenset({"/healthz"})

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = bind_request(
            request_id,
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else "",
        )
        request.state.request_id = request_id

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception:
            logger.exception("Request abortado por excepción")
            raise
        finally:
            self._log_done(request, status_code)
            release(token)

    def _log_done(self, request: Request, status_code: int) -> None:
        if request.url.path in self.quiet_paths:
            return
        ctx = current_request()
        logger.info(
            "Request completado",
            extra={
                "status_code": status_code,
                "latency_ms": ctx.elapsed_ms() if ctx else None,
            },
        )
