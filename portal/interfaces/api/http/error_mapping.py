"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP envelope)
===============================================================================

Responsabilidades:
  - Traducir ServiceErrorCode a AppHTTPException (envelope JSON).
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener la capa application libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message [+ resource]).
  - La API traduce usando las factories de crosscutting.error_responses.

Colaboradores:
  - application.usecases.results (ServiceResult / ServiceErrorCode)
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import TypeVar

from portal.application.usecases import ServiceError, ServiceErrorCode, ServiceResult
from portal.crosscutting.error_responses import (
    already_active,
    conflict,
    forbidden,
    internal_error,
    invalid_credentials,
    no_active_session,
    not_found,
    validation_error,
)

T = TypeVar("T")


def raise_service_error(error: ServiceError) -> None:
    """Traduce ServiceError -> AppHTTPException (siempre lanza)."""
    code = error.code
    if code == ServiceErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if code == ServiceErrorCode.INVALID_CREDENTIALS:
        raise invalid_credentials(error.message)
    if code == ServiceErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if code == ServiceErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Recurso", error.resource_id or "-")
    if code == ServiceErrorCode.CONFLICT:
        raise conflict(error.message)
    if code == ServiceErrorCode.ALREADY_ACTIVE:
        raise already_active(error.message)
    if code == ServiceErrorCode.NO_ACTIVE_SESSION:
        raise no_active_session(error.message)

    # Fallback: un código nuevo sin mapeo es un bug del servidor.
    raise internal_error(error.message)


def unwrap(result: ServiceResult[T]) -> T:
    """Devuelve el value o lanza el error HTTP correspondiente."""
    if result.error is not None:
        raise_service_error(result.error)
    return result.value  # type: ignore[return-value]
