"""
===============================================================================
USE CASES: Events (eventos con galería de imágenes / videos)
===============================================================================

Business Goal:
    Publicar eventos con una galería; la portada (image_url) se elige entre
    los archivos subidos.

Reglas:
    - Alta: title, description y event_date requeridos.
    - Hasta `max_images` archivos por request.
    - cover_index elige la portada entre los archivos nuevos; fuera de
      rango -> el primero. Sin archivos se acepta `image_url` (legacy).
    - Update: campos parciales; los archivos nuevos se ANEXAN a la galería.
    - Si un archivo falla al guardarse, o falla la escritura en el repositorio,
      se borran los archivos ya guardados en ese request y el error se propaga.

Collaborators:
    - domain.repositories.EventRepository
    - domain.services.MediaStoragePort / MediaUpload
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time

from ...crosscutting.exceptions import StorageError
from ...crosscutting.logger import logger
from ...domain.entities import Event
from ...domain.repositories import EventRepository
from ...domain.services import MediaStoragePort, MediaUpload
from ...identity.users import Claims
from .results import ServiceResult, not_found_result, validation_failed


@dataclass(frozen=True)
class EventInput:
    title: str | None = None
    description: str | None = None
    event_date: date | None = None
    event_time: time | None = None
    location: str | None = None
    image_url: str | None = None
    cover_index: int | None = None
    uploads: list[MediaUpload] = field(default_factory=list)


def pick_cover(urls: list[str], cover_index: int | None) -> str | None:
    if not urls:
        return None
    if cover_index is None or not 0 <= cover_index < len(urls):
        return urls[0]
    return urls[cover_index]


class _EventMediaMixin:
    _storage: MediaStoragePort
    _max_images: int

    def _too_many(self, data: EventInput) -> ServiceResult | None:
        if len(data.uploads) > self._max_images:
            return validation_failed(
                f"Máximo {self._max_images} archivos por evento."
            )
        return None

    def _store_all(self, uploads: list[MediaUpload]) -> list[str]:
        saved: list[str] = []
        try:
            for upload in uploads:
                saved.append(self._storage.save(upload))
        except StorageError:
            self._discard(saved)
            raise
        return saved

    def _discard(self, urls: list[str]) -> None:
        for url in urls:
            self._storage.delete(url)
        if urls:
            logger.warning("Archivos descartados", extra={"files": len(urls)})


class ListEventsUseCase:
    def __init__(self, events: EventRepository) -> None:
        self._events = events

    def execute(self) -> ServiceResult[list[Event]]:
        return ServiceResult.success(self._events.list_events())


class GetEventUseCase:
    def __init__(self, events: EventRepository) -> None:
        self._events = events

    def execute(self, event_id: int) -> ServiceResult[Event]:
        event = self._events.get_event(event_id)
        if event is None:
            return not_found_result("Evento", event_id)
        return ServiceResult.success(event)


class CreateEventUseCase(_EventMediaMixin):
    def __init__(
        self, events: EventRepository, storage: MediaStoragePort, *, max_images: int
    ) -> None:
        self._events = events
        self._storage = storage
        self._max_images = max_images

    def execute(self, claims: Claims, data: EventInput) -> ServiceResult[Event]:
        title = (data.title or "").strip()
        description = (data.description or "").strip()
        if not title or not description or data.event_date is None:
            return validation_failed("title, description y event_date son requeridos.")
        too_many = self._too_many(data)
        if too_many:
            return too_many

        urls = self._store_all(data.uploads)
        legacy = (data.image_url or "").strip() or None
        cover = pick_cover(urls, data.cover_index) or legacy
        gallery = urls or ([legacy] if legacy else [])

        draft = Event(
            id=0,
            title=title,
            description=description,
            event_date=data.event_date,
            event_time=data.event_time,
            location=(data.location or "").strip() or None,
            image_url=cover,
            created_by=claims.user_id,
        )
        try:
            event = self._events.create_event(draft, gallery)
        except Exception:
            self._discard(urls)
            raise
        logger.info(
            "Evento creado", extra={"event_id": event.id, "images": len(gallery)}
        )
        return ServiceResult.success(event)


class UpdateEventUseCase(_EventMediaMixin):
    def __init__(
        self, events: EventRepository, storage: MediaStoragePort, *, max_images: int
    ) -> None:
        self._events = events
        self._storage = storage
        self._max_images = max_images

    def execute(self, event_id: int, data: EventInput) -> ServiceResult[Event]:
        if self._events.get_event(event_id) is None:
            return not_found_result("Evento", event_id)
        too_many = self._too_many(data)
        if too_many:
            return too_many

        changes: dict[str, object] = {}
        for name in ("title", "description"):
            value = getattr(data, name)
            if value is not None:
                if not value.strip():
                    return validation_failed(f"{name} no puede quedar vacío.")
                changes[name] = value.strip()
        if data.event_date is not None:
            changes["event_date"] = data.event_date
        if data.event_time is not None:
            changes["event_time"] = data.event_time
        if data.location is not None:
            changes["location"] = data.location.strip() or None

        urls = self._store_all(data.uploads)
        if urls:
            changes["image_url"] = pick_cover(urls, data.cover_index)
        elif (data.image_url or "").strip():
            changes["image_url"] = data.image_url.strip()

        try:
            updated = self._events.update_event(event_id, changes, urls)
        except Exception:
            self._discard(urls)
            raise
        if updated is None:
            self._discard(urls)
            return not_found_result("Evento", event_id)
        return ServiceResult.success(updated)


class DeleteEventUseCase:
    def __init__(self, events: EventRepository, storage: MediaStoragePort) -> None:
        self._events = events
        self._storage = storage

    def execute(self, event_id: int) -> ServiceResult[bool]:
        event = self._events.get_event(event_id)
        if event is None:
            return not_found_result("Evento", event_id)
        if not self._events.delete_event(event_id):
            return not_found_result("Evento", event_id)

        for url in event.images:
            self._storage.delete(url)
        logger.info("Evento eliminado", extra={"event_id": event_id})
        return ServiceResult.success(True)
