"""
===============================================================================
TARJETA CRC — portal/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Convertir toda excepción que llega a la capa HTTP en el envelope de error.
  - Loguear los 500 con request_id y error_id; en producción el mensaje al
    cliente es genérico.
  - Validación de FastAPI -> 400 VALIDATION_ERROR (no 422).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, render_error
  - crosscutting.exceptions: PortalError y derivadas (Database/Storage)
  - infrastructure.storage.errors: rechazos de upload (400 / 413)
  - crosscutting.config (is_production)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    render_error,
    request_id_from,
)
from ..crosscutting.exceptions import DatabaseError, PortalError
from ..crosscutting.logger import logger
from ..infrastructure.storage.errors import UnsupportedMediaError, UploadTooLargeError

# Status de Starlette sin código propio -> ErrorCode del envelope
_STATUS_CODES: dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    413: ErrorCode.PAYLOAD_TOO_LARGE,
}


def _validation_details(exc: RequestValidationError) -> list[dict[str, object]]:
    details: list[dict[str, object]] = []
    for err in exc.errors():
        details.append(
            {
                "loc": [str(part) for part in err.get("loc", ())],
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
        )
    return details


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Input mal formado -> 400 (no 422)."""
    return render_error(
        request,
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        message="Datos de entrada inválidos.",
        errors=_validation_details(exc),
    )


async def starlette_http_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # R: AppHTTPException es subclase; respeta su código.
    if isinstance(exc, AppHTTPException):
        return await app_exception_handler(request, exc)

    code = _STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    return render_error(
        request,
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unsupported_media_handler(
    request: Request, exc: UnsupportedMediaError
) -> JSONResponse:
    return render_error(
        request,
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        message=exc.message,
    )


async def upload_too_large_handler(
    request: Request, exc: UploadTooLargeError
) -> JSONResponse:
    return render_error(
        request,
        status_code=413,
        code=ErrorCode.PAYLOAD_TOO_LARGE,
        message=exc.message,
    )


async def _handle_service_error(
    request: Request,
    *,
    exc: PortalError,
    code: ErrorCode,
    status_code: int,
) -> JSONResponse:
    """Helper común para errores tipados de infraestructura."""
    request_id = request_id_from(request)

    logger.error(
        "Error de servicio",
        extra={"code": code.value, "request_id": request_id, **exc.log_fields()},
    )

    settings = get_settings()
    message = "Error interno." if settings.is_production() else exc.message
    return render_error(
        request,
        status_code=status_code,
        code=code,
        message=message,
        error_id=exc.error_id,
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.DATABASE_ERROR, status_code=500
    )


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    # R: Errores base (incluye StorageError): INTERNAL_ERROR.
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.INTERNAL_ERROR, status_code=500
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica en producción.
    """
    request_id = request_id_from(request)
    settings = get_settings()

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if not settings.is_production() else "Error interno."
    return render_error(
        request,
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        message=detail,
    )


def register_exception_handlers(app) -> None:
    """
    Starlette elige el handler por MRO de la excepción: UploadTooLargeError
    antes que PortalError, y `Exception` solo si nada más matchea.
    """
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_handler)
    app.add_exception_handler(UnsupportedMediaError, unsupported_media_handler)
    app.add_exception_handler(UploadTooLargeError, upload_too_large_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
