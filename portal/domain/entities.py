"""
Name: Domain Entities

Responsibilities:
  - Define the portal's persisted records as plain dataclasses
  - Carry joined display fields (creator / author names) as optional attributes
  - Expose small derived properties (image_type, is_active...) with no IO

Collaborators:
  - domain.repositories: ports returning these entities
  - infrastructure.repositories.*: map rows -> entities
  - interfaces.api.http.schemas: map entities -> response DTOs

Notes:
  - Ids are database identities (int); created_at is assigned by the store.
  - Principals (User) live in identity.users.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum

_VIDEO_EXTENSIONS = re.compile(r"\.(mp4|webm|mov)$", re.IGNORECASE)


class AttendanceStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass
class AttendanceSession:
    """One continuous presence interval of a principal on a calendar date."""

    id: int
    user_id: int
    date: date
    check_in: datetime
    status: AttendanceStatus
    check_out: datetime | None = None
    check_in_remarks: str | None = None
    check_out_remarks: str | None = None
    duration_minutes: int | None = None
    created_at: datetime | None = None
    # Joined from users (admin listing only)
    first_name: str | None = None
    last_name: str | None = None
    employee_id: str | None = None
    branch: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == AttendanceStatus.ACTIVE


@dataclass
class Holiday:
    id: int
    name: str
    date: date
    branch: str
    description: str | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    creator_first_name: str | None = None
    creator_last_name: str | None = None
    creator_email: str | None = None


@dataclass
class Thought:
    id: int
    content: str
    author: str
    branch: str
    is_active: bool = True
    created_by: int | None = None
    created_at: datetime | None = None
    creator_first_name: str | None = None
    creator_last_name: str | None = None


@dataclass
class Announcement:
    id: int
    title: str
    content: str
    priority: str = "Normal"
    publish_at: datetime | None = None
    expiry_at: datetime | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    creator_first_name: str | None = None
    creator_last_name: str | None = None


@dataclass
class HrPolicy:
    id: int
    title: str
    category: str
    content: str
    description: str | None = None
    version: str | None = None
    effective_date: date | None = None
    prepared_by: str | None = None
    approved_by: str | None = None
    status: str = "Active"
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    creator_first_name: str | None = None
    creator_last_name: str | None = None


@dataclass
class IdeaComment:
    id: int
    idea_id: int
    user_id: int
    comment: str
    created_at: datetime | None = None
    first_name: str | None = None
    last_name: str | None = None


@dataclass
class Idea:
    id: int
    user_id: int
    title: str
    content: str
    created_at: datetime | None = None
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    likes_count: int = 0
    comments_count: int = 0
    is_liked: bool = False
    comments: list[IdeaComment] = field(default_factory=list)


@dataclass
class Event:
    id: int
    title: str
    description: str
    event_date: date
    event_time: time | None = None
    location: str | None = None
    image_url: str | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    creator_first_name: str | None = None
    creator_last_name: str | None = None
    images: list[str] = field(default_factory=list)

    @property
    def image_type(self) -> str:
        return media_type_for(self.image_url)


def media_type_for(url: str | None) -> str:
    """'video' for .mp4/.webm/.mov urls, 'image' otherwise."""
    if url and _VIDEO_EXTENSIONS.search(url):
        return "video"
    return "image"


def unique_in_order(values: list[str]) -> list[str]:
    """Dedupe preserving first occurrence (gallery urls)."""
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out
