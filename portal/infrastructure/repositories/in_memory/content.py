"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/content.py
============================================================
Classes:
  - InMemoryHolidayRepository
  - InMemoryThoughtRepository
  - InMemoryAnnouncementRepository
  - InMemoryHrPolicyRepository

Responsibilities:
  - Contenido editorial en memoria (tests / dev local).
  - Replicar filtros y ordering de los repos Postgres equivalentes.
  - Completar datos del creador desde InMemoryUserRepository (emula JOIN).

Constraints / Notes:
  - Thread-safe: cada repo protege su "tabla" con un Lock.
  - Copias (dataclasses.replace) para no compartir instancias mutables.
============================================================
"""

from __future__ import annotations

import random
from dataclasses import replace
from datetime import date, datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import Announcement, Holiday, HrPolicy, Thought
from .user import InMemoryUserRepository


def _now() -> datetime:
    return datetime.now(timezone.utc)


class _CreatorLookup:
    def __init__(self, users: InMemoryUserRepository | None) -> None:
        self._users = users

    def names(self, user_id: int | None) -> tuple[str | None, str | None, str | None]:
        if self._users is None or user_id is None:
            return None, None, None
        user = self._users.get_user_by_id(user_id)
        if user is None:
            return None, None, None
        return user.first_name, user.last_name, user.email


class InMemoryHolidayRepository:
    def __init__(self, users: InMemoryUserRepository | None = None) -> None:
        self._lock = Lock()
        self._rows: Dict[int, Holiday] = {}
        self._ids = count(1)
        self._creators = _CreatorLookup(users)

    def _view(self, holiday: Holiday) -> Holiday:
        first, last, email = self._creators.names(holiday.created_by)
        return replace(
            holiday,
            creator_first_name=first,
            creator_last_name=last,
            creator_email=email,
        )

    def list_holidays(
        self, *, year: int | None, branches: list[str] | None
    ) -> List[Holiday]:
        with self._lock:
            values = list(self._rows.values())
        selected = [
            h
            for h in values
            if (year is None or h.date.year == year)
            and (branches is None or h.branch in branches)
        ]
        return [self._view(h) for h in sorted(selected, key=lambda h: (h.date, h.id))]

    def get_holiday(self, holiday_id: int) -> Optional[Holiday]:
        with self._lock:
            holiday = self._rows.get(holiday_id)
        return self._view(holiday) if holiday else None

    def create_holiday(
        self,
        *,
        name: str,
        day: date,
        description: str | None,
        branch: str,
        created_by: int,
    ) -> Holiday:
        with self._lock:
            holiday = Holiday(
                id=next(self._ids),
                name=name,
                date=day,
                description=description,
                branch=branch,
                created_by=created_by,
                created_at=_now(),
            )
            self._rows[holiday.id] = holiday
        return self._view(holiday)

    def update_holiday(
        self,
        holiday_id: int,
        *,
        name: str,
        day: date,
        description: str | None,
        branch: str,
    ) -> Optional[Holiday]:
        with self._lock:
            current = self._rows.get(holiday_id)
            if current is None:
                return None
            updated = replace(
                current, name=name, date=day, description=description, branch=branch
            )
            self._rows[holiday_id] = updated
        return self._view(updated)

    def delete_holiday(self, holiday_id: int) -> bool:
        with self._lock:
            return self._rows.pop(holiday_id, None) is not None


class InMemoryThoughtRepository:
    def __init__(
        self,
        users: InMemoryUserRepository | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._lock = Lock()
        self._rows: Dict[int, Thought] = {}
        self._ids = count(1)
        self._creators = _CreatorLookup(users)
        self._rng = rng or random.Random()

    def _view(self, thought: Thought) -> Thought:
        first, last, _ = self._creators.names(thought.created_by)
        return replace(thought, creator_first_name=first, creator_last_name=last)

    def _active(self, branches: list[str] | None) -> List[Thought]:
        with self._lock:
            values = list(self._rows.values())
        return [
            t
            for t in values
            if t.is_active and (branches is None or t.branch in branches)
        ]

    def list_active(self, *, branches: list[str] | None) -> List[Thought]:
        ordered = sorted(
            self._active(branches),
            key=lambda t: (t.created_at or _now(), t.id),
            reverse=True,
        )
        return [self._view(t) for t in ordered]

    def random_active(self, *, branches: list[str]) -> Optional[Thought]:
        candidates = self._active(branches)
        if not candidates:
            return None
        return self._view(self._rng.choice(candidates))

    def get_thought(self, thought_id: int) -> Optional[Thought]:
        with self._lock:
            thought = self._rows.get(thought_id)
        return self._view(thought) if thought else None

    def create_thought(
        self, *, content: str, author: str, branch: str, created_by: int
    ) -> Thought:
        with self._lock:
            thought = Thought(
                id=next(self._ids),
                content=content,
                author=author,
                branch=branch,
                created_by=created_by,
                created_at=_now(),
            )
            self._rows[thought.id] = thought
        return self._view(thought)

    def update_thought(
        self, thought_id: int, *, content: str, author: str
    ) -> Optional[Thought]:
        with self._lock:
            current = self._rows.get(thought_id)
            if current is None:
                return None
            updated = replace(current, content=content, author=author)
            self._rows[thought_id] = updated
        return self._view(updated)

    def deactivate_thought(self, thought_id: int) -> bool:
        with self._lock:
            current = self._rows.get(thought_id)
            if current is None:
                return False
            self._rows[thought_id] = replace(current, is_active=False)
            return True


class InMemoryAnnouncementRepository:
    def __init__(self, users: InMemoryUserRepository | None = None) -> None:
        self._lock = Lock()
        self._rows: Dict[int, Announcement] = {}
        self._ids = count(1)
        self._creators = _CreatorLookup(users)

    def _view(self, item: Announcement) -> Announcement:
        first, last, _ = self._creators.names(item.created_by)
        return replace(item, creator_first_name=first, creator_last_name=last)

    def list_announcements(self) -> List[Announcement]:
        with self._lock:
            values = list(self._rows.values())
        ordered = sorted(values, key=lambda a: (a.created_at or _now(), a.id), reverse=True)
        return [self._view(a) for a in ordered]

    def create_announcement(
        self,
        *,
        title: str,
        content: str,
        priority: str,
        publish_at: datetime | None,
        expiry_at: datetime | None,
        created_by: int,
    ) -> Announcement:
        with self._lock:
            item = Announcement(
                id=next(self._ids),
                title=title,
                content=content,
                priority=priority,
                publish_at=publish_at,
                expiry_at=expiry_at,
                created_by=created_by,
                created_at=_now(),
            )
            self._rows[item.id] = item
        return self._view(item)

    def delete_announcement(self, announcement_id: int) -> bool:
        with self._lock:
            return self._rows.pop(announcement_id, None) is not None


class InMemoryHrPolicyRepository:
    _UPDATABLE = frozenset(
        {
            "title",
            "category",
            "description",
            "content",
            "version",
            "effective_date",
            "prepared_by",
            "approved_by",
            "status",
        }
    )

    def __init__(self, users: InMemoryUserRepository | None = None) -> None:
        self._lock = Lock()
        self._rows: Dict[int, HrPolicy] = {}
        self._ids = count(1)
        self._creators = _CreatorLookup(users)

    def _view(self, policy: HrPolicy) -> HrPolicy:
        first, last, _ = self._creators.names(policy.created_by)
        return replace(policy, creator_first_name=first, creator_last_name=last)

    def list_policies(self) -> List[HrPolicy]:
        with self._lock:
            values = list(self._rows.values())
        # R: emula "effective_date DESC NULLS LAST, created_at DESC".
        by_created = sorted(values, key=lambda p: (p.created_at or _now(), p.id), reverse=True)
        dated = sorted(
            (p for p in by_created if p.effective_date is not None),
            key=lambda p: p.effective_date,
            reverse=True,
        )
        undated = [p for p in by_created if p.effective_date is None]
        return [self._view(p) for p in dated + undated]

    def get_policy(self, policy_id: int) -> Optional[HrPolicy]:
        with self._lock:
            policy = self._rows.get(policy_id)
        return self._view(policy) if policy else None

    def create_policy(self, policy: HrPolicy) -> HrPolicy:
        with self._lock:
            now = _now()
            stored = replace(policy, id=next(self._ids), created_at=now, updated_at=now)
            self._rows[stored.id] = stored
        return self._view(stored)

    def update_policy(
        self, policy_id: int, changes: dict[str, object]
    ) -> Optional[HrPolicy]:
        allowed = {k: v for k, v in changes.items() if k in self._UPDATABLE}
        with self._lock:
            current = self._rows.get(policy_id)
            if current is None:
                return None
            updated = replace(current, **allowed, updated_at=_now())
            self._rows[policy_id] = updated
        return self._view(updated)

    def delete_policy(self, policy_id: int) -> bool:
        with self._lock:
            return self._rows.pop(policy_id, None) is not None
