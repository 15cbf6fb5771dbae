"""
===============================================================================
TARJETA CRC — schemas/content.py
===============================================================================

Módulo:
    Schemas HTTP para contenido editorial (feriados, pensamientos, anuncios,
    políticas de RRHH)

Responsabilidades:
    - DTOs de request (create/update) con límites de longitud.
    - DTOs de response + mappers desde entidades de dominio.
    - Ocultar datos del creador a quien no es admin-tier (feriados).
===============================================================================
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from portal.domain.entities import Announcement, Holiday, HrPolicy, Thought


# -----------------------------------------------------------------------------
# Holidays
# -----------------------------------------------------------------------------
class HolidayReq(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    date: dt.date | None = None
    description: str | None = Field(default=None, max_length=2000)
    branch: str | None = Field(default=None, max_length=100)


class HolidayRes(BaseModel):
    id: int
    name: str
    date: dt.date
    description: str | None = None
    branch: str
    created_at: dt.datetime | None = None
    created_by: int | None = None
    creator_first_name: str | None = None
    creator_last_name: str | None = None
    creator_email: str | None = None

    @classmethod
    def from_holiday(cls, h: Holiday, *, include_creator: bool = True) -> "HolidayRes":
        res = cls(
            id=h.id,
            name=h.name,
            date=h.date,
            description=h.description,
            branch=h.branch,
            created_at=h.created_at,
        )
        if include_creator:
            res.created_by = h.created_by
            res.creator_first_name = h.creator_first_name
            res.creator_last_name = h.creator_last_name
            res.creator_email = h.creator_email
        return res


class HolidaysListRes(BaseModel):
    holidays: list[HolidayRes]
    is_admin: bool


# -----------------------------------------------------------------------------
# Thoughts
# -----------------------------------------------------------------------------
class ThoughtReq(BaseModel):
    content: str | None = Field(default=None, max_length=2000)
    author: str | None = Field(default=None, max_length=200)
    branch: str | None = Field(default=None, max_length=100)


class ThoughtRes(BaseModel):
    id: int
    content: str
    author: str
    branch: str
    is_active: bool
    created_by: int | None = None
    created_at: dt.datetime | None = None
    creator_first_name: str | None = None
    creator_last_name: str | None = None

    @classmethod
    def from_thought(cls, t: Thought) -> "ThoughtRes":
        return cls(
            id=t.id,
            content=t.content,
            author=t.author,
            branch=t.branch,
            is_active=t.is_active,
            created_by=t.created_by,
            created_at=t.created_at,
            creator_first_name=t.creator_first_name,
            creator_last_name=t.creator_last_name,
        )


class ThoughtsListRes(BaseModel):
    thoughts: list[ThoughtRes]
    count: int


# -----------------------------------------------------------------------------
# Announcements
# -----------------------------------------------------------------------------
class AnnouncementReq(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = Field(default=None, max_length=10000)
    priority: str | None = Field(default=None, max_length=20)
    publish_at: dt.datetime | None = None
    expiry_at: dt.datetime | None = None


class AnnouncementRes(BaseModel):
    id: int
    title: str
    content: str
    priority: str
    publish_at: dt.datetime | None = None
    expiry_at: dt.datetime | None = None
    created_by: int | None = None
    created_at: dt.datetime | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_announcement(cls, a: Announcement) -> "AnnouncementRes":
        return cls(
            id=a.id,
            title=a.title,
            content=a.content,
            priority=a.priority,
            publish_at=a.publish_at,
            expiry_at=a.expiry_at,
            created_by=a.created_by,
            created_at=a.created_at,
            first_name=a.creator_first_name,
            last_name=a.creator_last_name,
        )


# -----------------------------------------------------------------------------
# HR policies
# -----------------------------------------------------------------------------
class HrPolicyReq(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    content: str | None = None
    version: str | None = Field(default=None, max_length=20)
    effective_date: dt.date | None = None
    prepared_by: str | None = Field(default=None, max_length=200)
    approved_by: str | None = Field(default=None, max_length=200)
    status: str | None = Field(default=None, max_length=20)


class HrPolicyRes(BaseModel):
    id: int
    title: str
    category: str
    description: str | None = None
    content: str
    version: str | None = None
    effective_date: dt.date | None = None
    prepared_by: str | None = None
    approved_by: str | None = None
    status: str
    created_by: int | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    creator_first_name: str | None = None
    creator_last_name: str | None = None

    @classmethod
    def from_policy(cls, p: HrPolicy) -> "HrPolicyRes":
        return cls(
            id=p.id,
            title=p.title,
            category=p.category,
            description=p.description,
            content=p.content,
            version=p.version,
            effective_date=p.effective_date,
            prepared_by=p.prepared_by,
            approved_by=p.approved_by,
            status=p.status,
            created_by=p.created_by,
            created_at=p.created_at,
            updated_at=p.updated_at,
            creator_first_name=p.creator_first_name,
            creator_last_name=p.creator_last_name,
        )
