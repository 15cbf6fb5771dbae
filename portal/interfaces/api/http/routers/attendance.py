"""
===============================================================================
TARJETA CRC — portal/interfaces/api/http/routers/attendance.py
===============================================================================

Class/Module:
    Attendance Router

Responsibilities:
    - Exponer check-in / check-out del principal autenticado.
    - Resumen del día (estado, sesiones, total).
    - Listado administrativo con branch forcing (lo resuelve el caso de uso).

Collaborators:
    - portal.application.usecases (attendance)
    - portal.container (factories DI)
    - schemas.attendance
===============================================================================
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Body, Depends, Query

from portal.application.usecases import (
    CheckInUseCase,
    CheckOutUseCase,
    GetDailyStatusUseCase,
    ListAttendanceUseCase,
)
from portal.container import (
    get_check_in_use_case,
    get_check_out_use_case,
    get_daily_status_use_case,
    get_list_attendance_use_case,
)
from portal.identity.users import Claims

from ..dependencies import admin_claims, current_claims
from ..error_mapping import unwrap
from ..schemas.attendance import (
    AttendanceListRes,
    CheckInRes,
    CheckOutRes,
    RemarksReq,
    SessionRes,
    TodayRes,
)
from ..schemas.common import Envelope, ok

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/check-in", response_model=Envelope[CheckInRes], status_code=201)
def check_in(
    req: RemarksReq | None = Body(None),
    claims: Claims = Depends(current_claims),
    use_case: CheckInUseCase = Depends(get_check_in_use_case),
):
    session = unwrap(use_case.execute(claims, remarks=req.remarks if req else None))
    return ok(
        CheckInRes(id=session.id, check_in=session.check_in, status=session.status),
        message="Check-in registrado.",
    )


@router.post("/check-out", response_model=Envelope[CheckOutRes])
def check_out(
    req: RemarksReq | None = Body(None),
    claims: Claims = Depends(current_claims),
    use_case: CheckOutUseCase = Depends(get_check_out_use_case),
):
    session = unwrap(use_case.execute(claims, remarks=req.remarks if req else None))
    return ok(
        CheckOutRes(
            id=session.id,
            check_out=session.check_out,
            duration_minutes=session.duration_minutes,
            status=session.status,
        ),
        message="Check-out registrado.",
    )


@router.get("/today", response_model=Envelope[TodayRes])
def today(
    claims: Claims = Depends(current_claims),
    use_case: GetDailyStatusUseCase = Depends(get_daily_status_use_case),
):
    return ok(TodayRes.from_status(unwrap(use_case.execute(claims))))


@router.get("/all", response_model=Envelope[AttendanceListRes])
def list_all(
    branch: str | None = Query(None),
    day: date | None = Query(None, alias="date"),
    employee_id: str | None = Query(None),
    search: str | None = Query(None),
    claims: Claims = Depends(admin_claims),
    use_case: ListAttendanceUseCase = Depends(get_list_attendance_use_case),
):
    """Sesiones con datos del empleado; admin siempre ve solo su sucursal."""
    sessions = unwrap(
        use_case.execute(
            claims, branch=branch, day=day, employee_id=employee_id, search=search
        )
    )
    return ok(
        AttendanceListRes(
            logs=[SessionRes.from_session(s) for s in sessions], count=len(sessions)
        )
    )
