"""Schemas HTTP de ideas (likes / comentarios) y eventos (galería)."""

from __future__ import annotations

from datetime import date, datetime, time

from pydantic import BaseModel, Field

from portal.domain.entities import Event, Idea, IdeaComment


class IdeaReq(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = Field(default=None, max_length=10000)


class CommentReq(BaseModel):
    comment: str | None = Field(default=None, max_length=2000)


class CommentRes(BaseModel):
    id: int
    idea_id: int
    user_id: int
    comment: str
    created_at: datetime | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_comment(cls, c: IdeaComment) -> "CommentRes":
        return cls(
            id=c.id,
            idea_id=c.idea_id,
            user_id=c.user_id,
            comment=c.comment,
            created_at=c.created_at,
            first_name=c.first_name,
            last_name=c.last_name,
        )


class IdeaRes(BaseModel):
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
    comments: list[CommentRes] | None = None

    @classmethod
    def from_idea(cls, i: Idea, *, with_comments: bool = False) -> "IdeaRes":
        return cls(
            id=i.id,
            user_id=i.user_id,
            title=i.title,
            content=i.content,
            created_at=i.created_at,
            first_name=i.first_name,
            last_name=i.last_name,
            position=i.position,
            likes_count=i.likes_count,
            comments_count=i.comments_count,
            is_liked=i.is_liked,
            comments=(
                [CommentRes.from_comment(c) for c in i.comments]
                if with_comments
                else None
            ),
        )


class LikeRes(BaseModel):
    liked: bool


class EventRes(BaseModel):
    id: int
    title: str
    description: str
    event_date: date
    event_time: time | None = None
    location: str | None = None
    image_url: str | None = None
    image_type: str
    images: list[str]
    created_by: int | None = None
    created_at: datetime | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_event(cls, e: Event) -> "EventRes":
        return cls(
            id=e.id,
            title=e.title,
            description=e.description,
            event_date=e.event_date,
            event_time=e.event_time,
            location=e.location,
            image_url=e.image_url,
            image_type=e.image_type,
            images=list(e.images),
            created_by=e.created_by,
            created_at=e.created_at,
            first_name=e.creator_first_name,
            last_name=e.creator_last_name,
        )
