"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/attendance.py
============================================================
Class: InMemoryAttendanceRepository

Responsibilities:
  - Sesiones de asistencia en memoria (tests / dev local).
  - Replicar el índice único parcial de Postgres: a lo sumo una sesión
    ACTIVE por (user_id, date); el chequeo y el insert ocurren bajo el
    mismo lock, así que dos check-in concurrentes no pueden ganar ambos.
  - Cierre atómico (solo sesiones ACTIVE).
  - Listado administrativo con "join" contra el repositorio de usuarios.

Collaborators:
  - domain.entities.AttendanceSession / AttendanceStatus
  - domain.attendance.AttendanceFilters / AlreadyActiveError
  - InMemoryUserRepository (opcional, para datos del empleado)
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from itertools import count
from threading import Lock
from typing import Dict, List, Optional

from ....domain.attendance import AlreadyActiveError, AttendanceFilters
from ....domain.entities import AttendanceSession, AttendanceStatus
from .user import InMemoryUserRepository


class InMemoryAttendanceRepository:
    def __init__(self, users: InMemoryUserRepository | None = None) -> None:
        self._lock = Lock()
        self._sessions: Dict[int, AttendanceSession] = {}
        self._ids = count(1)
        self._users = users

    def _with_user(self, session: AttendanceSession) -> AttendanceSession:
        """R: Emula el JOIN users del listado administrativo."""
        user = self._users.get_user_by_id(session.user_id) if self._users else None
        if user is None:
            return replace(session)
        return replace(
            session,
            first_name=user.first_name,
            last_name=user.last_name,
            employee_id=user.employee_id,
            branch=user.branch,
        )

    def create_session(
        self, *, user_id: int, day: date, check_in: datetime, remarks: str | None
    ) -> AttendanceSession:
        with self._lock:
            for s in self._sessions.values():
                if s.user_id == user_id and s.date == day and s.is_active:
                    raise AlreadyActiveError("Ya existe una sesión activa.")
            session = AttendanceSession(
                id=next(self._ids),
                user_id=user_id,
                date=day,
                check_in=check_in,
                status=AttendanceStatus.ACTIVE,
                check_in_remarks=remarks,
                created_at=check_in,
            )
            self._sessions[session.id] = session
            return replace(session)

    def get_active_session(self, user_id: int, day: date) -> Optional[AttendanceSession]:
        with self._lock:
            for s in self._sessions.values():
                if s.user_id == user_id and s.date == day and s.is_active:
                    return replace(s)
        return None

    def close_session(
        self,
        session_id: int,
        *,
        check_out: datetime,
        remarks: str | None,
        duration_minutes: int,
    ) -> Optional[AttendanceSession]:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or not session.is_active:
                return None
            closed = replace(
                session,
                check_out=check_out,
                check_out_remarks=remarks,
                duration_minutes=duration_minutes,
                status=AttendanceStatus.COMPLETED,
            )
            self._sessions[session_id] = closed
            return replace(closed)

    def list_sessions_for_day(self, user_id: int, day: date) -> List[AttendanceSession]:
        with self._lock:
            values = [
                replace(s)
                for s in self._sessions.values()
                if s.user_id == user_id and s.date == day
            ]
        return sorted(values, key=lambda s: s.check_in)

    def list_sessions(self, filters: AttendanceFilters) -> List[AttendanceSession]:
        with self._lock:
            values = list(self._sessions.values())

        joined = [self._with_user(s) for s in values]
        needle = (filters.name_search or "").lower()

        def predicate(s: AttendanceSession) -> bool:
            if filters.branch and s.branch != filters.branch:
                return False
            if filters.date and s.date != filters.date:
                return False
            if filters.employee_id and s.employee_id != filters.employee_id:
                return False
            if needle and not (
                needle in (s.first_name or "").lower()
                or needle in (s.last_name or "").lower()
            ):
                return False
            return True

        return sorted(
            (s for s in joined if predicate(s)),
            key=lambda s: (s.date, s.check_in),
            reverse=True,
        )
