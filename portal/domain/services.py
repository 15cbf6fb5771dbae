"""
Name: Domain Service Interfaces

Responsibilities:
  - Define the contract for persisting uploaded media (event galleries)
  - Keep use cases independent from where bytes end up (disk, bucket...)

Collaborators:
  - infrastructure.storage.LocalFileStorage: filesystem implementation
  - application.usecases.events: stores uploads before touching the DB
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class MediaUpload:
    """An uploaded file already read into memory."""

    filename: str
    content: bytes
    content_type: str | None = None


class MediaStoragePort(Protocol):
    def save(self, upload: MediaUpload) -> str:
        """R: Persists the bytes and returns the public URL (relative)."""
        ...

    def delete(self, url: str) -> None: ...
