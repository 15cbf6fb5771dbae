"""
===============================================================================
TARJETA CRC — schemas/common.py
===============================================================================

Módulo:
    Envelope de respuesta exitosa

Responsabilidades:
    - Definir `Envelope[T]`: {success, message?, data?}, el mismo sobre que
      usan los errores (success=false) en crosscutting.error_responses.
    - Helper `ok()` para construirlo desde los routers.
===============================================================================
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: str | None = None
    data: T | None = None


class MessageRes(BaseModel):
    """Respuesta sin payload (delete / logout)."""

    success: bool = True
    message: str


def ok(data: T | None = None, message: str | None = None) -> Envelope[T]:
    return Envelope(success=True, message=message, data=data)
