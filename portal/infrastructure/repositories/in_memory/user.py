"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar principals en memoria (tests / dev local sin Postgres).
  - Replicar unicidad de email y employee_id (DuplicateKeyError).
  - Replicar el ordering de Postgres: created_at DESC, id DESC.

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Entidades inmutables (frozen): los updates reemplazan con dataclasses.replace.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, Iterable, List, Optional

from ....domain.repositories import DuplicateKeyError
from ....identity.users import User, UserRole, UserStatus


class InMemoryUserRepository:
    """Repositorio in-memory, thread-safe, para principals."""

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._ids = count(1)
        for user in users:
            self._users[user.id] = user
        if self._users:
            self._ids = count(max(self._users) + 1)

    @staticmethod
    def _sorted(items: Iterable[User]) -> List[User]:
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(
            items,
            key=lambda u: ((u.created_at or epoch), u.id),
            reverse=True,
        )

    @staticmethod
    def _in(branches: list[str] | None, user: User) -> bool:
        return branches is None or user.branch in branches

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_employee_id(self, employee_id: str) -> Optional[User]:
        with self._lock:
            return next(
                (u for u in self._users.values() if u.employee_id == employee_id), None
            )

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: UserRole,
        branch: str | None,
        employee_id: str | None = None,
        department: str | None = None,
        position: str | None = None,
        birth_date: date | None = None,
        phone: str | None = None,
    ) -> User:
        with self._lock:
            for existing in self._users.values():
                if existing.email == email:
                    raise DuplicateKeyError("email")
                if employee_id and existing.employee_id == employee_id:
                    raise DuplicateKeyError("employee_id")

            user = User(
                id=next(self._ids),
                email=email,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
                role=role,
                status=UserStatus.ACTIVE,
                employee_id=employee_id,
                branch=branch,
                department=department,
                position=position,
                birth_date=birth_date,
                phone=phone,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            return user

    def touch_last_login(self, user_id: int, at: datetime) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                self._users[user_id] = replace(user, last_login=at)

    def update_password(self, user_id: int, password_hash: str) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            self._users[user_id] = replace(user, password_hash=password_hash)
            return True

    def set_status(self, user_id: int, status: UserStatus) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, status=status)
            self._users[user_id] = updated
            return updated

    def list_users(
        self,
        *,
        role: UserRole | None = None,
        branch: str | None = None,
        status: UserStatus | None = None,
        department: str | None = None,
    ) -> List[User]:
        with self._lock:
            values = list(self._users.values())

        def predicate(u: User) -> bool:
            if role is not None and u.role != role:
                return False
            if branch and u.branch != branch:
                return False
            if status is not None and u.status != status:
                return False
            if department and u.department != department:
                return False
            return True

        return self._sorted(u for u in values if predicate(u))

    def list_birthdays(self, *, month: int, branches: list[str] | None) -> List[User]:
        with self._lock:
            values = [
                u
                for u in self._users.values()
                if u.is_active
                and u.birth_date is not None
                and u.birth_date.month == month
                and self._in(branches, u)
            ]
        return sorted(values, key=lambda u: (u.birth_date.day, u.first_name))

    def list_recent(self, *, limit: int, branches: list[str] | None) -> List[User]:
        if limit <= 0:
            return []
        with self._lock:
            values = [u for u in self._users.values() if u.is_active and self._in(branches, u)]
        return self._sorted(values)[:limit]

    def ping(self) -> bool:
        return True
