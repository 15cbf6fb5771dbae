"""
===============================================================================
USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Portal Use Case Results

Business Goal:
    Proveer un contrato único de resultado/error para todos los casos de uso
    del portal (auth, asistencia, contenido por sucursal, ideas, eventos).

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar
      excepciones HTTP: la capa application no conoce FastAPI.
    - La API traduce ServiceErrorCode -> status HTTP en un solo lugar
      (interfaces/api/http/error_mapping.py).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    results models (module)

Responsibilities:
    - ServiceErrorCode: categorías estables de falla.
    - ServiceError: code + message (+ recurso para NOT_FOUND).
    - ServiceResult[T]: value en éxito, error en falla.

Collaborators:
    - application.usecases.* (productores)
    - interfaces.api.http.error_mapping (consumidor)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ServiceErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: input faltante o mal formado (400).
      - INVALID_CREDENTIALS: password actual incorrecto (401).
      - FORBIDDEN: rol o sucursal fuera de alcance (403).
      - NOT_FOUND: recurso inexistente (404).
      - CONFLICT: unicidad (email / employee_id) (409).
      - ALREADY_ACTIVE / NO_ACTIVE_SESSION: transiciones de asistencia (409).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    NO_ACTIVE_SESSION = "NO_ACTIVE_SESSION"


@dataclass(frozen=True)
class ServiceError:
    code: ServiceErrorCode
    message: str
    resource: str | None = None
    resource_id: object | None = None


@dataclass
class ServiceResult(Generic[T]):
    """
    Contrato:
      - error is None => value presente (éxito)
      - error != None => value es None (fallo)
    """

    value: T | None = None
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def fail(
        cls,
        code: ServiceErrorCode,
        message: str,
        *,
        resource: str | None = None,
        resource_id: object | None = None,
    ) -> "ServiceResult[T]":
        return cls(
            error=ServiceError(
                code=code, message=message, resource=resource, resource_id=resource_id
            )
        )


def validation_failed(message: str) -> ServiceResult:
    return ServiceResult.fail(ServiceErrorCode.VALIDATION_ERROR, message)


def forbidden_result(message: str = "Acceso denegado.") -> ServiceResult:
    return ServiceResult.fail(ServiceErrorCode.FORBIDDEN, message)


def not_found_result(resource: str, resource_id: object) -> ServiceResult:
    return ServiceResult.fail(
        ServiceErrorCode.NOT_FOUND,
        f"{resource} no encontrado.",
        resource=resource,
        resource_id=resource_id,
    )
