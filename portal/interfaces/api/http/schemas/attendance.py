"""Schemas HTTP de asistencia (check-in / check-out / estado diario / listado)."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from portal.domain.attendance import DailyStatus, DayStatus
from portal.domain.entities import AttendanceSession, AttendanceStatus


class RemarksReq(BaseModel):
    remarks: str | None = Field(default=None, max_length=500)


class CheckInRes(BaseModel):
    id: int
    check_in: dt.datetime
    status: AttendanceStatus


class CheckOutRes(BaseModel):
    id: int
    check_out: dt.datetime
    duration_minutes: int
    status: AttendanceStatus


class SessionRes(BaseModel):
    id: int
    user_id: int
    date: dt.date
    check_in: dt.datetime
    check_out: dt.datetime | None = None
    check_in_remarks: str | None = None
    check_out_remarks: str | None = None
    duration_minutes: int | None = None
    status: AttendanceStatus
    first_name: str | None = None
    last_name: str | None = None
    employee_id: str | None = None
    branch: str | None = None

    @classmethod
    def from_session(cls, s: AttendanceSession) -> "SessionRes":
        return cls(
            id=s.id,
            user_id=s.user_id,
            date=s.date,
            check_in=s.check_in,
            check_out=s.check_out,
            check_in_remarks=s.check_in_remarks,
            check_out_remarks=s.check_out_remarks,
            duration_minutes=s.duration_minutes,
            status=s.status,
            first_name=s.first_name,
            last_name=s.last_name,
            employee_id=s.employee_id,
            branch=s.branch,
        )


class TodayRes(BaseModel):
    status: DayStatus
    active_session: SessionRes | None = None
    logs: list[SessionRes]
    total_minutes: int
    formatted_total: str

    @classmethod
    def from_status(cls, day: DailyStatus) -> "TodayRes":
        return cls(
            status=day.status,
            active_session=(
                SessionRes.from_session(day.active_session)
                if day.active_session
                else None
            ),
            logs=[SessionRes.from_session(s) for s in day.sessions],
            total_minutes=day.total_minutes,
            formatted_total=day.formatted_total,
        )


class AttendanceListRes(BaseModel):
    logs: list[SessionRes]
    count: int
