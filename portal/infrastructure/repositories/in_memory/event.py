"""In-memory events repository (event + ordered gallery, deduped on read)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import Event, unique_in_order
from .user import InMemoryUserRepository

_UPDATABLE = frozenset(
    {"title", "description", "event_date", "event_time", "location", "image_url"}
)


class InMemoryEventRepository:
    def __init__(self, users: InMemoryUserRepository | None = None) -> None:
        self._lock = Lock()
        self._events: Dict[int, Event] = {}
        self._images: Dict[int, List[str]] = {}
        self._ids = count(1)
        self._users = users

    def _view(self, event: Event) -> Event:
        user = (
            self._users.get_user_by_id(event.created_by)
            if self._users and event.created_by is not None
            else None
        )
        return replace(
            event,
            images=unique_in_order(list(self._images.get(event.id, []))),
            creator_first_name=user.first_name if user else None,
            creator_last_name=user.last_name if user else None,
        )

    def list_events(self) -> List[Event]:
        with self._lock:
            views = [self._view(e) for e in self._events.values()]
        return sorted(views, key=lambda e: (e.event_date, e.id), reverse=True)

    def get_event(self, event_id: int) -> Optional[Event]:
        with self._lock:
            event = self._events.get(event_id)
            return self._view(event) if event else None

    def create_event(self, event: Event, images: list[str]) -> Event:
        with self._lock:
            stored = replace(
                event, id=next(self._ids), created_at=datetime.now(timezone.utc), images=[]
            )
            self._events[stored.id] = stored
            self._images[stored.id] = list(images)
            return self._view(stored)

    def update_event(
        self, event_id: int, changes: dict[str, object], new_images: list[str]
    ) -> Optional[Event]:
        allowed = {k: v for k, v in changes.items() if k in _UPDATABLE}
        with self._lock:
            current = self._events.get(event_id)
            if current is None:
                return None
            updated = replace(current, **allowed)
            self._events[event_id] = updated
            self._images.setdefault(event_id, []).extend(new_images)
            return self._view(updated)

    def delete_event(self, event_id: int) -> bool:
        with self._lock:
            self._images.pop(event_id, None)
            return self._events.pop(event_id, None) is not None
