"""
===============================================================================
TARJETA CRC — portal/crosscutting/error_responses.py
===============================================================================

Componente:
  Envelope de error del portal + AppHTTPException + factories

Responsabilidades:
  - Catálogo estable de códigos (ErrorCode) que el frontend usa para decidir.
  - Render del sobre {success: false, message, error: {code, request_id?,
    error_id?, errors?}}, con la misma forma que las respuestas exitosas.
  - Factories por status (400/401/403/404/409/413/500).

Colaboradores:
  - crosscutting/middleware.py (request.state.request_id)
  - api/exception_handlers.py
  - interfaces/api/http/error_mapping.py (ServiceError -> AppHTTPException)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # 401
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    # 403 / 404
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"

    # 409
    CONFLICT = "CONFLICT"
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    NO_ACTIVE_SESSION = "NO_ACTIVE_SESSION"

    # 413
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorBody(BaseModel):
    """Detalle machine-readable del error."""

    code: ErrorCode
    request_id: str | None = None
    error_id: str | None = None
    errors: list[dict[str, Any]] | None = None


class ErrorEnvelope(BaseModel):
    """Envelope de error (mismo shape que el de éxito, con success=False)."""

    success: bool = False
    message: str
    error: ErrorBody


_OPENAPI_ERROR = {"model": ErrorEnvelope}

OPENAPI_ERROR_RESPONSES = {
    400: {"description": "Validation error", **_OPENAPI_ERROR},
    401: {"description": "Authentication error", **_OPENAPI_ERROR},
    403: {"description": "Permission denied", **_OPENAPI_ERROR},
    404: {"description": "Not found", **_OPENAPI_ERROR},
    409: {"description": "Conflict", **_OPENAPI_ERROR},
    500: {"description": "Store / internal error", **_OPENAPI_ERROR},
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode estable y, opcionalmente, errors[] de validación."""

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


# --- factories ---
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def unauthorized(detail: str = "Autenticación requerida.") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def invalid_credentials(
    detail: str = "Email o contraseña inválidos.",
) -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.INVALID_CREDENTIALS, detail)


def account_inactive(
    detail: str = "La cuenta no está activa. Contactá a un administrador.",
) -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.ACCOUNT_INACTIVE, detail)


def token_expired(detail: str = "Token expirado.") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.TOKEN_EXPIRED, detail)


def token_invalid(detail: str = "Token inválido.") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.TOKEN_INVALID, detail)


def forbidden(detail: str = "Acceso denegado.") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def not_found(resource: str, identifier: object) -> AppHTTPException:
    return AppHTTPException(
        404, ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado."
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def already_active(
    detail: str = "Ya tenés una sesión activa. Hacé check-out primero.",
) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.ALREADY_ACTIVE, detail)


def no_active_session(
    detail: str = "No hay sesión activa. Hacé check-in primero.",
) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.NO_ACTIVE_SESSION, detail)


def payload_too_large(max_size: str) -> AppHTTPException:
    return AppHTTPException(
        413,
        ErrorCode.PAYLOAD_TOO_LARGE,
        f"El archivo excede el máximo permitido ({max_size}).",
    )


def internal_error(detail: str = "Ocurrió un error inesperado.") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# --- render ---
def request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def render_error(
    request: Request,
    *,
    status_code: int,
    code: ErrorCode,
    message: str,
    errors: list[dict[str, Any]] | None = None,
    error_id: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Construye la JSONResponse con el envelope de error."""
    envelope = ErrorEnvelope(
        message=message,
        error=ErrorBody(
            code=code,
            request_id=request_id_from(request),
            error_id=error_id,
            errors=errors or None,
        ),
    )
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler para AppHTTPException."""
    return render_error(
        request,
        status_code=exc.status_code,
        code=exc.code,
        message=str(exc.detail),
        errors=exc.errors,
        headers=getattr(exc, "headers", None),
    )
