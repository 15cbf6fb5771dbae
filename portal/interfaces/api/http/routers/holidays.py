"""Holiday Router: feriados por sucursal (`All` = toda la empresa)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from portal.application.usecases import (
    CreateHolidayUseCase,
    DeleteHolidayUseCase,
    HolidayInput,
    ListHolidaysUseCase,
    UpdateHolidayUseCase,
)
from portal.container import (
    get_create_holiday_use_case,
    get_delete_holiday_use_case,
    get_list_holidays_use_case,
    get_update_holiday_use_case,
)
from portal.identity.users import Claims

from ..dependencies import admin_claims, current_claims
from ..error_mapping import unwrap
from ..schemas.common import Envelope, MessageRes, ok
from ..schemas.content import HolidayReq, HolidayRes, HolidaysListRes

router = APIRouter(prefix="/holidays", tags=["holidays"])


def _to_input(req: HolidayReq) -> HolidayInput:
    return HolidayInput(
        name=req.name, day=req.date, description=req.description, branch=req.branch
    )


@router.get("", response_model=Envelope[HolidaysListRes])
def list_holidays(
    year: int | None = Query(None, ge=1900, le=2999),
    branch: str | None = Query(None),
    claims: Claims = Depends(current_claims),
    use_case: ListHolidaysUseCase = Depends(get_list_holidays_use_case),
):
    listing = unwrap(use_case.execute(claims, year=year, branch=branch))
    return ok(
        HolidaysListRes(
            holidays=[
                HolidayRes.from_holiday(h, include_creator=listing.is_admin)
                for h in listing.holidays
            ],
            is_admin=listing.is_admin,
        )
    )


@router.post("", response_model=Envelope[HolidayRes], status_code=201)
def create_holiday(
    req: HolidayReq,
    claims: Claims = Depends(admin_claims),
    use_case: CreateHolidayUseCase = Depends(get_create_holiday_use_case),
):
    holiday = unwrap(use_case.execute(claims, _to_input(req)))
    return ok(HolidayRes.from_holiday(holiday), message="Feriado creado.")


@router.put("/{holiday_id}", response_model=Envelope[HolidayRes])
def update_holiday(
    holiday_id: int,
    req: HolidayReq,
    claims: Claims = Depends(admin_claims),
    use_case: UpdateHolidayUseCase = Depends(get_update_holiday_use_case),
):
    holiday = unwrap(use_case.execute(claims, holiday_id, _to_input(req)))
    return ok(HolidayRes.from_holiday(holiday), message="Feriado actualizado.")


@router.delete("/{holiday_id}", response_model=MessageRes)
def delete_holiday(
    holiday_id: int,
    claims: Claims = Depends(admin_claims),
    use_case: DeleteHolidayUseCase = Depends(get_delete_holiday_use_case),
):
    unwrap(use_case.execute(claims, holiday_id))
    return MessageRes(message="Feriado eliminado.")
