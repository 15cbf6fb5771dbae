"""
===============================================================================
TARJETA CRC — portal/interfaces/api/http/routers/events.py
===============================================================================

Class/Module:
    Event Router

Responsibilities:
    - Listado / detalle de eventos con galería deduplicada.
    - Alta / edición multipart (admin-tier): campos de form + archivos `images`.
    - Baja (borra también los archivos subidos).

Collaborators:
    - portal.application.usecases (events)
    - dependencies.to_media_uploads (lectura con límite)
    - portal.container

Notas:
    - El campo legacy `image_url` se acepta cuando no vienen archivos.
===============================================================================
"""

from __future__ import annotations

from datetime import date, time

from fastapi import APIRouter, Depends, File, Form, UploadFile

from portal.application.usecases import (
    CreateEventUseCase,
    DeleteEventUseCase,
    EventInput,
    GetEventUseCase,
    ListEventsUseCase,
    UpdateEventUseCase,
)
from portal.container import (
    get_create_event_use_case,
    get_delete_event_use_case,
    get_event_use_case,
    get_list_events_use_case,
    get_update_event_use_case,
)
from portal.identity.users import Claims

from ..dependencies import admin_claims, current_claims, to_media_uploads
from ..error_mapping import unwrap
from ..schemas.common import Envelope, MessageRes, ok
from ..schemas.community import EventRes

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=Envelope[list[EventRes]])
def list_events(
    claims: Claims = Depends(current_claims),
    use_case: ListEventsUseCase = Depends(get_list_events_use_case),
):
    return ok([EventRes.from_event(e) for e in unwrap(use_case.execute())])


@router.get("/{event_id}", response_model=Envelope[EventRes])
def get_event(
    event_id: int,
    claims: Claims = Depends(current_claims),
    use_case: GetEventUseCase = Depends(get_event_use_case),
):
    return ok(EventRes.from_event(unwrap(use_case.execute(event_id))))


@router.post("", response_model=Envelope[EventRes], status_code=201)
async def create_event(
    title: str | None = Form(None),
    description: str | None = Form(None),
    event_date: date | None = Form(None),
    event_time: time | None = Form(None),
    location: str | None = Form(None),
    image_url: str | None = Form(None),
    cover_index: int | None = Form(None),
    images: list[UploadFile] | None = File(None),
    claims: Claims = Depends(admin_claims),
    use_case: CreateEventUseCase = Depends(get_create_event_use_case),
):
    uploads = await to_media_uploads(images)
    event = unwrap(
        use_case.execute(
            claims,
            EventInput(
                title=title,
                description=description,
                event_date=event_date,
                event_time=event_time,
                location=location,
                image_url=image_url,
                cover_index=cover_index,
                uploads=uploads,
            ),
        )
    )
    return ok(EventRes.from_event(event), message="Evento creado.")


@router.put("/{event_id}", response_model=Envelope[EventRes])
async def update_event(
    event_id: int,
    title: str | None = Form(None),
    description: str | None = Form(None),
    event_date: date | None = Form(None),
    event_time: time | None = Form(None),
    location: str | None = Form(None),
    image_url: str | None = Form(None),
    cover_index: int | None = Form(None),
    images: list[UploadFile] | None = File(None),
    claims: Claims = Depends(admin_claims),
    use_case: UpdateEventUseCase = Depends(get_update_event_use_case),
):
    """Edición parcial; los archivos nuevos se agregan a la galería existente."""
    uploads = await to_media_uploads(images)
    event = unwrap(
        use_case.execute(
            event_id,
            EventInput(
                title=title,
                description=description,
                event_date=event_date,
                event_time=event_time,
                location=location,
                image_url=image_url,
                cover_index=cover_index,
                uploads=uploads,
            ),
        )
    )
    return ok(EventRes.from_event(event), message="Evento actualizado.")


@router.delete("/{event_id}", response_model=MessageRes)
def delete_event(
    event_id: int,
    claims: Claims = Depends(admin_claims),
    use_case: DeleteEventUseCase = Depends(get_delete_event_use_case),
):
    unwrap(use_case.execute(event_id))
    return MessageRes(message="Evento eliminado.")
