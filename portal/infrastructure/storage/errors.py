"""
===============================================================================
CRC CARD — infrastructure/storage/errors.py
===============================================================================

Componente:
  Errores tipados del storage de archivos subidos

Responsabilidades:
  - Distinguir rechazos del cliente (tipo/tamaño) de fallas de filesystem.
  - Evitar que OSError se filtre a capas superiores.

Colaboradores:
  - infrastructure/storage/local_file_storage.py
  - interfaces/api/http/routers/events.py (rechazos -> 400 / 413)
===============================================================================
"""

from ...crosscutting.exceptions import StorageError


class UnsupportedMediaError(StorageError):
    """Extensión no permitida para la galería."""

    def __init__(self, filename: str):
        super().__init__(f"Tipo de archivo no soportado: {filename}")
        self.filename = filename


class UploadTooLargeError(StorageError):
    """Archivo por encima de max_upload_bytes."""

    def __init__(self, filename: str, max_bytes: int):
        super().__init__(f"Archivo demasiado grande: {filename}")
        self.filename = filename
        self.max_bytes = max_bytes
