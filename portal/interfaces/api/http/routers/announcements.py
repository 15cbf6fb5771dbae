"""Announcement Router: anuncios de la empresa (lectura libre, ABM admin-tier)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from portal.application.usecases import (
    AnnouncementInput,
    CreateAnnouncementUseCase,
    DeleteAnnouncementUseCase,
    ListAnnouncementsUseCase,
)
from portal.container import (
    get_create_announcement_use_case,
    get_delete_announcement_use_case,
    get_list_announcements_use_case,
)
from portal.identity.users import Claims

from ..dependencies import admin_claims, current_claims
from ..error_mapping import unwrap
from ..schemas.common import Envelope, MessageRes, ok
from ..schemas.content import AnnouncementReq, AnnouncementRes

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("", response_model=Envelope[list[AnnouncementRes]])
def list_announcements(
    claims: Claims = Depends(current_claims),
    use_case: ListAnnouncementsUseCase = Depends(get_list_announcements_use_case),
):
    items = unwrap(use_case.execute())
    return ok([AnnouncementRes.from_announcement(a) for a in items])


@router.post("", response_model=Envelope[AnnouncementRes], status_code=201)
def create_announcement(
    req: AnnouncementReq,
    claims: Claims = Depends(admin_claims),
    use_case: CreateAnnouncementUseCase = Depends(get_create_announcement_use_case),
):
    item = unwrap(
        use_case.execute(
            claims,
            AnnouncementInput(
                title=req.title,
                content=req.content,
                priority=req.priority,
                publish_at=req.publish_at,
                expiry_at=req.expiry_at,
            ),
        )
    )
    return ok(AnnouncementRes.from_announcement(item), message="Anuncio creado.")


@router.delete("/{announcement_id}", response_model=MessageRes)
def delete_announcement(
    announcement_id: int,
    claims: Claims = Depends(admin_claims),
    use_case: DeleteAnnouncementUseCase = Depends(get_delete_announcement_use_case),
):
    unwrap(use_case.execute(announcement_id))
    return MessageRes(message="Anuncio eliminado.")
