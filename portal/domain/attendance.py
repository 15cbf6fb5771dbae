"""
===============================================================================
TARJETA CRC — domain/attendance.py
===============================================================================

Módulo:
    Máquina de estados de asistencia (sesiones de check-in / check-out)

Responsabilidades:
    - Definir los estados del ciclo: NO_SESSION -> ACTIVE -> COMPLETED.
    - Validar transiciones (check-in solo sin sesión activa; check-out solo
      con sesión activa).
    - Calcular duraciones en minutos enteros (floor), sin clamping.
    - Resumir el día: estado, sesiones y total (completadas + transcurrido
      de la activa, calculado en lectura).

Colaboradores:
    - domain.entities.AttendanceSession
    - application.usecases.attendance: orquesta repositorio + reloj.

Reglas:
    - Funciones puras: el "ahora" siempre llega como argumento.
    - Una duración negativa (anomalía de reloj) se devuelve tal cual; el
      caso de uso la loguea y la persiste.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable

from .entities import AttendanceSession, AttendanceStatus

_ONE_MINUTE = timedelta(minutes=1)


class SessionState(str, Enum):
    NO_SESSION = "no-session"
    ACTIVE = "active"
    COMPLETED = "completed"


class AttendanceAction(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class DayStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceError(Exception):
    """Base de errores de transición de asistencia."""


class AlreadyActiveError(AttendanceError):
    """Check-in con una sesión activa abierta para (usuario, fecha)."""


class NoActiveSessionError(AttendanceError):
    """Check-out sin sesión activa para (usuario, fecha)."""


def next_state(current: SessionState, action: AttendanceAction) -> SessionState:
    """
    Transición de la máquina de estados.

    COMPLETED es terminal para ese intervalo; un nuevo check-in abre un ciclo
    nuevo, por eso se trata igual que NO_SESSION.
    """
    if action == AttendanceAction.CHECK_IN:
        if current == SessionState.ACTIVE:
            raise AlreadyActiveError("Ya existe una sesión activa.")
        return SessionState.ACTIVE

    if current != SessionState.ACTIVE:
        raise NoActiveSessionError("No hay sesión activa.")
    return SessionState.COMPLETED


def state_of(active_session: AttendanceSession | None) -> SessionState:
    return SessionState.ACTIVE if active_session is not None else SessionState.NO_SESSION


def duration_minutes(check_in: datetime, check_out: datetime) -> int:
    """floor((check_out - check_in) / 1 min). Puede ser negativo."""
    return (check_out - check_in) // _ONE_MINUTE


def format_minutes(total_minutes: int) -> str:
    """90 -> '1h 30m'."""
    sign = "-" if total_minutes < 0 else ""
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours}h {minutes}m"


@dataclass(frozen=True)
class AttendanceFilters:
    """Filtros del listado administrativo (branch ya resuelto por la policy)."""

    branch: str | None = None
    date: date | None = None
    employee_id: str | None = None
    name_search: str | None = None


@dataclass(frozen=True)
class DailyStatus:
    status: DayStatus
    sessions: list[AttendanceSession]
    active_session: AttendanceSession | None
    total_minutes: int

    @property
    def formatted_total(self) -> str:
        return format_minutes(self.total_minutes)


def summarize_day(
    sessions: Iterable[AttendanceSession], *, now: datetime
) -> DailyStatus:
    """
    Resume las sesiones de un día.

    - completadas: suman su duración persistida
    - activa: suma floor((now - check_in) / 1 min), calculado en cada lectura
    """
    ordered = sorted(sessions, key=lambda s: s.check_in)
    active = next((s for s in ordered if s.status == AttendanceStatus.ACTIVE), None)

    total = 0
    for session in ordered:
        if session.status == AttendanceStatus.COMPLETED:
            total += session.duration_minutes or 0
        else:
            total += duration_minutes(session.check_in, now)

    return DailyStatus(
        status=DayStatus.ACTIVE if active else DayStatus.INACTIVE,
        sessions=ordered,
        active_session=active,
        total_minutes=total,
    )
