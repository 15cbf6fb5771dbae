"""
===============================================================================
CRC CARD — infrastructure/storage/local_file_storage.py
===============================================================================

Clase:
  LocalFileStorage (Adapter)

Responsabilidades:
  - Implementar MediaStoragePort sobre el filesystem local.
  - Generar nombres únicos (timestamp + random) conservando la extensión.
  - Validar extensión y tamaño antes de escribir.
  - Devolver la URL pública `{url_prefix}/{nombre}` (servida como estático).

Colaboradores:
  - domain.services.MediaStoragePort / MediaUpload
  - infrastructure.storage.errors

Decisiones de diseño:
  - El nombre original del cliente nunca se usa como path (evita traversal).
  - delete() es idempotente: borrar algo inexistente no falla.
===============================================================================
"""

from __future__ import annotations

import secrets
import time
from pathlib import Path, PurePosixPath

from ...crosscutting.exceptions import StorageError
from ...crosscutting.logger import logger
from ...domain.services import MediaUpload
from .errors import UnsupportedMediaError, UploadTooLargeError

ALLOWED_EXTENSIONS = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".webp", ".mp4", ".webm", ".mov"}
)


class LocalFileStorage:
    def __init__(self, root: str | Path, *, url_prefix: str, max_bytes: int) -> None:
        self._root = Path(root)
        self._url_prefix = "/" + url_prefix.strip("/")
        self._max_bytes = max_bytes

    @property
    def root(self) -> Path:
        return self._root

    @staticmethod
    def _extension(filename: str) -> str:
        return PurePosixPath(filename or "").suffix.lower()

    def _generate_name(self, extension: str) -> str:
        return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{extension}"

    def save(self, upload: MediaUpload) -> str:
        extension = self._extension(upload.filename)
        if extension not in ALLOWED_EXTENSIONS:
            raise UnsupportedMediaError(upload.filename)
        if len(upload.content) > self._max_bytes:
            raise UploadTooLargeError(upload.filename, self._max_bytes)

        name = self._generate_name(extension)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            (self._root / name).write_bytes(upload.content)
        except OSError as exc:
            logger.exception(
                "LocalFileStorage: write failed",
                extra={"file_name": name, "error": str(exc)},
            )
            raise StorageError("No se pudo guardar el archivo.", original_error=exc) from exc

        logger.info(
            "Archivo guardado",
            extra={"file_name": name, "size_bytes": len(upload.content)},
        )
        return f"{self._url_prefix}/{name}"

    def delete(self, url: str) -> None:
        prefix = f"{self._url_prefix}/"
        if not url or not url.startswith(prefix):
            return
        name = PurePosixPath(url[len(prefix):]).name
        try:
            (self._root / name).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(
                "LocalFileStorage: delete failed",
                extra={"file_name": name, "error": str(exc)},
            )
