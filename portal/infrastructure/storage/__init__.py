"""Adapters de infraestructura: Storage."""

from .errors import UnsupportedMediaError, UploadTooLargeError
from .local_file_storage import ALLOWED_EXTENSIONS, LocalFileStorage

__all__ = [
    "ALLOWED_EXTENSIONS",
    "LocalFileStorage",
    "UnsupportedMediaError",
    "UploadTooLargeError",
]
