"""Use cases: Announcements (listado general, alta y baja administrativas)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ...crosscutting.logger import logger
from ...domain.entities import Announcement
from ...domain.repositories import AnnouncementRepository
from ...identity.users import Claims
from .results import ServiceResult, not_found_result, validation_failed

DEFAULT_PRIORITY = "Normal"


@dataclass(frozen=True)
class AnnouncementInput:
    title: str | None = None
    content: str | None = None
    priority: str | None = None
    publish_at: datetime | None = None
    expiry_at: datetime | None = None


class ListAnnouncementsUseCase:
    def __init__(self, announcements: AnnouncementRepository) -> None:
        self._announcements = announcements

    def execute(self) -> ServiceResult[list[Announcement]]:
        return ServiceResult.success(self._announcements.list_announcements())


class CreateAnnouncementUseCase:
    def __init__(self, announcements: AnnouncementRepository) -> None:
        self._announcements = announcements

    def execute(
        self, claims: Claims, data: AnnouncementInput
    ) -> ServiceResult[Announcement]:
        title = (data.title or "").strip()
        content = (data.content or "").strip()
        if not title or not content:
            return validation_failed("title y content son requeridos.")
        if data.publish_at and data.expiry_at and data.expiry_at < data.publish_at:
            return validation_failed("expiry_at no puede ser anterior a publish_at.")

        item = self._announcements.create_announcement(
            title=title,
            content=content,
            priority=(data.priority or "").strip() or DEFAULT_PRIORITY,
            publish_at=data.publish_at,
            expiry_at=data.expiry_at,
            created_by=claims.user_id,
        )
        logger.info("Anuncio creado", extra={"announcement_id": item.id})
        return ServiceResult.success(item)


class DeleteAnnouncementUseCase:
    def __init__(self, announcements: AnnouncementRepository) -> None:
        self._announcements = announcements

    def execute(self, announcement_id: int) -> ServiceResult[bool]:
        if not self._announcements.delete_announcement(announcement_id):
            return not_found_result("Anuncio", announcement_id)
        return ServiceResult.success(True)
