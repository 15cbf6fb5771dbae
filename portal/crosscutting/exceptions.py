"""
===============================================================================
TARJETA CRC — portal/crosscutting/exceptions.py
===============================================================================

Componentes:
    PortalError, DatabaseError, StorageError

Responsabilidades:
    - Errores de infraestructura que cruzan capas hasta los exception handlers.
    - Cada instancia lleva un error_id (uuid4) que viaja en el log y en el
      envelope de la respuesta 500.

Colaboradores:
    - api/exception_handlers.py (envelope + log)
    - infrastructure/repositories/postgres/* (DatabaseError)
    - infrastructure/storage/* (StorageError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class PortalError(Exception):
    error_code: str = "PORTAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_id = error_id or uuid4().hex
        self.original_error = original_error

    def log_fields(self) -> dict[str, str]:
        fields = {
            "error_code": self.error_code,
            "error_id": self.error_id,
            "error_message": self.message,
        }
        if self.original_error is not None:
            fields["cause"] = type(self.original_error).__name__
        return fields


class DatabaseError(PortalError):
    """Conexión, query, timeout o pool."""

    error_code = "DATABASE_ERROR"


class StorageError(PortalError):
    """Escritura de archivos subidos."""

    error_code = "STORAGE_ERROR"
