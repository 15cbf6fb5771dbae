"""
===============================================================================
USE CASES: Attendance (check-in / check-out / estado diario / listado)
===============================================================================

Business Goal:
    Registrar intervalos de presencia de cada principal por día calendario
    (hora local del servidor), con a lo sumo UNA sesión activa por
    (principal, fecha).

Why (Context / Intención):
    - Timestamps siempre asignados por el servidor (nunca por el cliente).
    - El pre-chequeo de sesión activa da un error rápido y claro; la
      garantía real frente a carreras la da el store (constraint único),
      que el repositorio traduce a AlreadyActiveError.
    - Un check-out con duración negativa (anomalía de reloj) se loguea como
      WARNING y se persiste con signo, sin clamp.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    CheckInUseCase, CheckOutUseCase, GetDailyStatusUseCase, ListAttendanceUseCase

Collaborators:
    - domain.attendance (máquina de estados, duraciones, resumen diario)
    - domain.repositories.AttendanceRepository
    - identity.access_policy.resolve_branch_filter (listado administrativo)
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

from ...crosscutting.logger import logger
from ...domain.attendance import (
    AlreadyActiveError,
    AttendanceAction,
    AttendanceFilters,
    DailyStatus,
    NoActiveSessionError,
    duration_minutes,
    next_state,
    state_of,
    summarize_day,
)
from ...domain.entities import AttendanceSession
from ...domain.repositories import AttendanceRepository
from ...identity.access_policy import is_superadmin, resolve_branch_filter
from ...identity.users import Claims
from .results import ServiceErrorCode, ServiceResult, forbidden_result

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Hora local del servidor (aware)."""
    return datetime.now().astimezone()


def _already_active(message: str) -> ServiceResult:
    return ServiceResult.fail(ServiceErrorCode.ALREADY_ACTIVE, message)


def _no_active_session(message: str) -> ServiceResult:
    return ServiceResult.fail(ServiceErrorCode.NO_ACTIVE_SESSION, message)


class CheckInUseCase:
    def __init__(self, attendance: AttendanceRepository, clock: Clock = local_now) -> None:
        self._attendance = attendance
        self._clock = clock

    def execute(
        self, claims: Claims, *, remarks: str | None = None
    ) -> ServiceResult[AttendanceSession]:
        now = self._clock()
        day = now.date()

        active = self._attendance.get_active_session(claims.user_id, day)
        try:
            next_state(state_of(active), AttendanceAction.CHECK_IN)
            session = self._attendance.create_session(
                user_id=claims.user_id,
                day=day,
                check_in=now,
                remarks=(remarks or "").strip() or None,
            )
        except AlreadyActiveError:
            logger.info(
                "Check-in rechazado: sesión activa",
                extra={"user_id": claims.user_id, "date": day.isoformat()},
            )
            return _already_active(
                "Ya tenés una sesión activa. Hacé check-out primero."
            )

        logger.info(
            "Check-in",
            extra={"user_id": claims.user_id, "session_id": session.id},
        )
        return ServiceResult.success(session)


class CheckOutUseCase:
    def __init__(self, attendance: AttendanceRepository, clock: Clock = local_now) -> None:
        self._attendance = attendance
        self._clock = clock

    def execute(
        self, claims: Claims, *, remarks: str | None = None
    ) -> ServiceResult[AttendanceSession]:
        now = self._clock()
        day = now.date()

        active = self._attendance.get_active_session(claims.user_id, day)
        try:
            next_state(state_of(active), AttendanceAction.CHECK_OUT)
        except NoActiveSessionError:
            return _no_active_session("No hay sesión activa. Hacé check-in primero.")

        minutes = duration_minutes(active.check_in, now)
        if minutes < 0:
            logger.warning(
                "Duración negativa en check-out (anomalía de reloj)",
                extra={
                    "user_id": claims.user_id,
                    "session_id": active.id,
                    "duration_minutes": minutes,
                },
            )

        closed = self._attendance.close_session(
            active.id,
            check_out=now,
            remarks=(remarks or "").strip() or None,
            duration_minutes=minutes,
        )
        if closed is None:
            # Otro check-out concurrente la cerró primero.
            return _no_active_session("La sesión ya fue cerrada.")

        logger.info(
            "Check-out",
            extra={
                "user_id": claims.user_id,
                "session_id": closed.id,
                "duration_minutes": minutes,
            },
        )
        return ServiceResult.success(closed)


class GetDailyStatusUseCase:
    def __init__(self, attendance: AttendanceRepository, clock: Clock = local_now) -> None:
        self._attendance = attendance
        self._clock = clock

    def execute(self, claims: Claims) -> ServiceResult[DailyStatus]:
        now = self._clock()
        sessions = self._attendance.list_sessions_for_day(claims.user_id, now.date())
        return ServiceResult.success(summarize_day(sessions, now=now))


class ListAttendanceUseCase:
    """Listado administrativo; la sucursal del admin siempre se fuerza."""

    def __init__(self, attendance: AttendanceRepository) -> None:
        self._attendance = attendance

    def execute(
        self,
        claims: Claims,
        *,
        branch: str | None = None,
        day: date | None = None,
        employee_id: str | None = None,
        search: str | None = None,
    ) -> ServiceResult[list[AttendanceSession]]:
        effective_branch = resolve_branch_filter(claims, branch)
        if effective_branch is None and not is_superadmin(claims):
            return forbidden_result("No tenés sucursal asignada.")

        filters = AttendanceFilters(
            branch=effective_branch,
            date=day,
            employee_id=(employee_id or "").strip() or None,
            name_search=(search or "").strip() or None,
        )
        return ServiceResult.success(self._attendance.list_sessions(filters))
