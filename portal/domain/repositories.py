"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep the application layer independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- domain.entities / domain.attendance / identity.users
- infrastructure.repositories: postgres.* and in_memory.* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- "Not found" is None / False, never an exception.
- Store-level uniqueness violations surface as DuplicateKeyError or
  AlreadyActiveError (attendance), never as raw driver errors.

Notes
- `branches` parameters: None means "no branch filter"; a list means
  "row.branch IN branches" (already resolved by identity.access_policy).
"""

from datetime import date, datetime
from typing import Protocol

from ..identity.users import User, UserRole, UserStatus
from .attendance import AttendanceFilters
from .entities import (
    Announcement,
    AttendanceSession,
    Event,
    HrPolicy,
    Holiday,
    Idea,
    IdeaComment,
    Thought,
)


class DuplicateKeyError(Exception):
    """A unique key (email, employee_id...) is already taken."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Duplicate value for {field}")


class UserRepository(Protocol):
    def get_user_by_email(self, email: str) -> User | None: ...

    def get_user_by_id(self, user_id: int) -> User | None: ...

    def get_user_by_employee_id(self, employee_id: str) -> User | None: ...

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
        """R: Raises DuplicateKeyError on email/employee_id collisions."""
        ...

    def touch_last_login(self, user_id: int, at: datetime) -> None: ...

    def update_password(self, user_id: int, password_hash: str) -> bool: ...

    def set_status(self, user_id: int, status: UserStatus) -> User | None: ...

    def list_users(
        self,
        *,
        role: UserRole | None = None,
        branch: str | None = None,
        status: UserStatus | None = None,
        department: str | None = None,
    ) -> list[User]: ...

    def list_birthdays(
        self, *, month: int, branches: list[str] | None
    ) -> list[User]: ...

    def list_recent(self, *, limit: int, branches: list[str] | None) -> list[User]: ...

    def ping(self) -> bool: ...


class AttendanceRepository(Protocol):
    """
    R: Persistence for attendance sessions.

    Invariant enforced by the store: at most one ACTIVE session per
    (user_id, date). create_session raises AlreadyActiveError when violated.
    """

    def create_session(
        self, *, user_id: int, day: date, check_in: datetime, remarks: str | None
    ) -> AttendanceSession: ...

    def get_active_session(self, user_id: int, day: date) -> AttendanceSession | None: ...

    def close_session(
        self,
        session_id: int,
        *,
        check_out: datetime,
        remarks: str | None,
        duration_minutes: int,
    ) -> AttendanceSession | None:
        """R: Only closes ACTIVE rows; None if it was already closed/missing."""
        ...

    def list_sessions_for_day(self, user_id: int, day: date) -> list[AttendanceSession]: ...

    def list_sessions(self, filters: AttendanceFilters) -> list[AttendanceSession]: ...


class HolidayRepository(Protocol):
    def list_holidays(
        self, *, year: int | None, branches: list[str] | None
    ) -> list[Holiday]: ...

    def get_holiday(self, holiday_id: int) -> Holiday | None: ...

    def create_holiday(
        self,
        *,
        name: str,
        day: date,
        description: str | None,
        branch: str,
        created_by: int,
    ) -> Holiday: ...

    def update_holiday(
        self,
        holiday_id: int,
        *,
        name: str,
        day: date,
        description: str | None,
        branch: str,
    ) -> Holiday | None: ...

    def delete_holiday(self, holiday_id: int) -> bool: ...


class ThoughtRepository(Protocol):
    def list_active(self, *, branches: list[str] | None) -> list[Thought]: ...

    def random_active(self, *, branches: list[str]) -> Thought | None: ...

    def get_thought(self, thought_id: int) -> Thought | None: ...

    def create_thought(
        self, *, content: str, author: str, branch: str, created_by: int
    ) -> Thought: ...

    def update_thought(
        self, thought_id: int, *, content: str, author: str
    ) -> Thought | None: ...

    def deactivate_thought(self, thought_id: int) -> bool: ...


class AnnouncementRepository(Protocol):
    def list_announcements(self) -> list[Announcement]: ...

    def create_announcement(
        self,
        *,
        title: str,
        content: str,
        priority: str,
        publish_at: datetime | None,
        expiry_at: datetime | None,
        created_by: int,
    ) -> Announcement: ...

    def delete_announcement(self, announcement_id: int) -> bool: ...


class HrPolicyRepository(Protocol):
    def list_policies(self) -> list[HrPolicy]: ...

    def get_policy(self, policy_id: int) -> HrPolicy | None: ...

    def create_policy(self, policy: HrPolicy) -> HrPolicy:
        """R: policy.id is ignored; the store assigns it."""
        ...

    def update_policy(self, policy_id: int, changes: dict[str, object]) -> HrPolicy | None: ...

    def delete_policy(self, policy_id: int) -> bool: ...


class IdeaRepository(Protocol):
    def list_ideas(self, *, viewer_id: int) -> list[Idea]: ...

    def get_idea(self, idea_id: int, *, viewer_id: int) -> Idea | None:
        """R: Includes comments ordered oldest first."""
        ...

    def create_idea(self, *, user_id: int, title: str, content: str) -> Idea: ...

    def update_idea(self, idea_id: int, *, title: str, content: str) -> bool: ...

    def delete_idea(self, idea_id: int) -> bool: ...

    def toggle_like(self, idea_id: int, *, user_id: int) -> bool:
        """R: Returns True when the idea is liked after the call."""
        ...

    def add_comment(self, idea_id: int, *, user_id: int, comment: str) -> IdeaComment: ...

    def get_comment(self, comment_id: int) -> IdeaComment | None: ...

    def delete_comment(self, comment_id: int) -> bool: ...


class EventRepository(Protocol):
    def list_events(self) -> list[Event]: ...

    def get_event(self, event_id: int) -> Event | None: ...

    def create_event(self, event: Event, images: list[str]) -> Event: ...

    def update_event(
        self, event_id: int, changes: dict[str, object], new_images: list[str]
    ) -> Event | None: ...

    def delete_event(self, event_id: int) -> bool: ...
