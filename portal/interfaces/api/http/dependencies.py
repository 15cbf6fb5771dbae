"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar helpers que se repiten en routers:
      * dependencias de auth ya instanciadas (claims / admin-tier / opcional)
      * fecha local del servidor para endpoints "del día"
      * lectura de UploadFile con límite (anti OOM) -> MediaUpload
      * sanitización de filename

Colaboradores:
  - crosscutting.config.get_settings
  - crosscutting.error_responses (payload_too_large / validation_error)
  - identity.auth_users (require_claims / require_admin_tier / optional_claims)
  - domain.services.MediaUpload
===============================================================================
"""

from __future__ import annotations

import os
from datetime import date, datetime

from fastapi import UploadFile

from portal.crosscutting.config import get_settings
from portal.crosscutting.error_responses import payload_too_large, validation_error
from portal.domain.services import MediaUpload
from portal.identity.auth_users import (
    optional_claims,
    require_admin_tier,
    require_claims,
)

# Dependencias de auth reutilizadas por todos los routers
current_claims = require_claims()
admin_claims = require_admin_tier()
maybe_claims = optional_claims()

_CHUNK_SIZE = 1024 * 1024  # 1MB


def local_today() -> date:
    """Fecha calendario local del servidor."""
    return datetime.now().astimezone().date()


def sanitize_filename(filename: str | None) -> str:
    """Nos quedamos con basename; vacío => 'upload'."""
    if not filename:
        return "upload"
    return os.path.basename(filename) or "upload"


async def read_upload_bytes(file: UploadFile, *, max_bytes: int | None = None) -> bytes:
    """
    Lee un UploadFile en memoria respetando un límite duro.

    Nota:
      - Lectura por chunks para cortar antes de cargar archivos gigantes.
    """
    limit = max_bytes if max_bytes is not None else get_settings().max_upload_bytes
    if limit <= 0:
        return await file.read()

    data = bytearray()
    while True:
        piece = await file.read(_CHUNK_SIZE)
        if not piece:
            break
        data.extend(piece)
        if len(data) > limit:
            raise payload_too_large(f"{limit} bytes")

    return bytes(data)


async def to_media_uploads(
    files: list[UploadFile] | None, *, max_files: int | None = None
) -> list[MediaUpload]:
    """Convierte los archivos multipart en MediaUpload (ignora partes vacías)."""
    present = [f for f in (files or []) if f is not None and f.filename]
    limit = max_files if max_files is not None else get_settings().max_event_images
    if len(present) > limit:
        raise validation_error(f"Máximo {limit} archivos por evento.")

    uploads: list[MediaUpload] = []
    for file in present:
        content = await read_upload_bytes(file)
        uploads.append(
            MediaUpload(
                filename=sanitize_filename(file.filename),
                content=content,
                content_type=file.content_type,
            )
        )
    return uploads
