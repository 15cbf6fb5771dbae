"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/attendance.py
============================================================
Class: PostgresAttendanceRepository

Responsibilities:
  - Persistir sesiones de asistencia (attendance_logs).
  - Garantizar "una sola sesión activa por (user_id, date)" con el índice
    único parcial `uq_attendance_active_session` (no con chequeos en memoria).
  - Cerrar sesiones de forma atómica: solo filas con status='active'.
  - Listado administrativo con join a users y filtros combinables.

Collaborators:
  - PostgresRepository
  - domain.entities.AttendanceSession / AttendanceStatus
  - domain.attendance.AttendanceFilters / AlreadyActiveError

Constraints / Notes:
  - Dos check-in concurrentes: uno inserta, el otro recibe UniqueViolation
    -> AlreadyActiveError. Dos check-out concurrentes: uno actualiza, el
    otro obtiene 0 filas -> None (NoActiveSession en el caso de uso).
  - Orden del listado: date DESC, check_in DESC.
============================================================
"""

from __future__ import annotations

from datetime import date, datetime

from psycopg.errors import UniqueViolation

from ....crosscutting.exceptions import DatabaseError
from ....domain.attendance import AlreadyActiveError, AttendanceFilters
from ....domain.entities import AttendanceSession, AttendanceStatus
from .base import PostgresRepository, Row

ACTIVE_SESSION_CONSTRAINT = "uq_attendance_active_session"

_SESSION_COLUMNS = """
    a.id, a.user_id, a.date, a.check_in, a.check_out, a.check_in_remarks,
    a.check_out_remarks, a.duration_minutes, a.status, a.created_at
"""

_JOINED_COLUMNS = """
    u.first_name, u.last_name, u.employee_id, u.branch
"""


def _row_to_session(row: Row) -> AttendanceSession:
    try:
        status = AttendanceStatus(row["status"])
    except ValueError as exc:
        raise DatabaseError(f"Invalid attendance status: {row['status']}") from exc

    return AttendanceSession(
        id=row["id"],
        user_id=row["user_id"],
        date=row["date"],
        check_in=row["check_in"],
        check_out=row["check_out"],
        check_in_remarks=row["check_in_remarks"],
        check_out_remarks=row["check_out_remarks"],
        duration_minutes=row["duration_minutes"],
        status=status,
        created_at=row["created_at"],
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        employee_id=row.get("employee_id"),
        branch=row.get("branch"),
    )


class PostgresAttendanceRepository(PostgresRepository):
    """R: Sesiones de asistencia sobre PostgreSQL."""

    def create_session(
        self, *, user_id: int, day: date, check_in: datetime, remarks: str | None
    ) -> AttendanceSession:
        try:
            row = self._fetchone(
                query=f"""
                    INSERT INTO attendance_logs AS a (user_id, date, check_in, check_in_remarks, status)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING {_SESSION_COLUMNS}
                """,
                params=(user_id, day, check_in, remarks, AttendanceStatus.ACTIVE.value),
                log_msg="PostgresAttendanceRepository: create_session failed",
                log_extra={"user_id": user_id, "date": day.isoformat()},
            )
        except UniqueViolation as exc:
            # R: el índice parcial es el único árbitro de la carrera de check-in.
            raise AlreadyActiveError("Ya existe una sesión activa.") from exc

        if not row:
            raise DatabaseError("PostgresAttendanceRepository: insert returned no row")
        return _row_to_session(row)

    def get_active_session(self, user_id: int, day: date) -> AttendanceSession | None:
        row = self._fetchone(
            query=f"""
                SELECT {_SESSION_COLUMNS}
                FROM attendance_logs a
                WHERE a.user_id = %s AND a.date = %s AND a.status = %s
                ORDER BY a.check_in DESC
                LIMIT 1
            """,
            params=(user_id, day, AttendanceStatus.ACTIVE.value),
            log_msg="PostgresAttendanceRepository: get_active_session failed",
            log_extra={"user_id": user_id, "date": day.isoformat()},
        )
        return _row_to_session(row) if row else None

    def close_session(
        self,
        session_id: int,
        *,
        check_out: datetime,
        remarks: str | None,
        duration_minutes: int,
    ) -> AttendanceSession | None:
        # R: `AND status = 'active'` hace que el segundo check-out concurrente no matchee.
        row = self._fetchone(
            query=f"""
                UPDATE attendance_logs AS a
                SET check_out = %s,
                    check_out_remarks = %s,
                    duration_minutes = %s,
                    status = %s
                WHERE a.id = %s AND a.status = %s
                RETURNING {_SESSION_COLUMNS}
            """,
            params=(
                check_out,
                remarks,
                duration_minutes,
                AttendanceStatus.COMPLETED.value,
                session_id,
                AttendanceStatus.ACTIVE.value,
            ),
            log_msg="PostgresAttendanceRepository: close_session failed",
            log_extra={"session_id": session_id},
        )
        return _row_to_session(row) if row else None

    def list_sessions_for_day(self, user_id: int, day: date) -> list[AttendanceSession]:
        rows = self._fetchall(
            query=f"""
                SELECT {_SESSION_COLUMNS}
                FROM attendance_logs a
                WHERE a.user_id = %s AND a.date = %s
                ORDER BY a.check_in ASC
            """,
            params=(user_id, day),
            log_msg="PostgresAttendanceRepository: list_sessions_for_day failed",
            log_extra={"user_id": user_id, "date": day.isoformat()},
        )
        return [_row_to_session(r) for r in rows]

    def list_sessions(self, filters: AttendanceFilters) -> list[AttendanceSession]:
        clauses: list[str] = []
        params: list[object] = []

        if filters.branch:
            clauses.append("u.branch = %s")
            params.append(filters.branch)
        if filters.date:
            clauses.append("a.date = %s")
            params.append(filters.date)
        if filters.employee_id:
            clauses.append("u.employee_id = %s")
            params.append(filters.employee_id)
        if filters.name_search:
            pattern = f"%{filters.name_search}%"
            clauses.append("(u.first_name ILIKE %s OR u.last_name ILIKE %s)")
            params.extend([pattern, pattern])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._fetchall(
            query=f"""
                SELECT {_SESSION_COLUMNS}, {_JOINED_COLUMNS}
                FROM attendance_logs a
                JOIN users u ON u.id = a.user_id
                {where}
                ORDER BY a.date DESC, a.check_in DESC
            """,
            params=params,
            log_msg="PostgresAttendanceRepository: list_sessions failed",
            log_extra={"filters": len(clauses)},
        )
        return [_row_to_session(r) for r in rows]
