"""
===============================================================================
USE CASES: Holidays (feriados por sucursal)
===============================================================================

Business Goal:
    Publicar feriados por sucursal o para toda la compañía ("All").

Reglas:
    - Lectura: cada principal ve los feriados en su alcance (su sucursal +
      "All"); superadmin ve todo o filtra por el parámetro branch.
    - Alta: admin -> siempre su sucursal (debe tener una);
            superadmin -> branch del body o la sucursal por defecto ("All").
    - Update / delete: admin solo sobre feriados de su propia sucursal.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    ListHolidaysUseCase, CreateHolidayUseCase, UpdateHolidayUseCase,
    DeleteHolidayUseCase

Collaborators:
    - domain.repositories.HolidayRepository
    - identity.access_policy (visible_branches, can_manage_branch)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ...crosscutting.logger import logger
from ...domain.entities import Holiday
from ...domain.repositories import HolidayRepository
from ...identity.access_policy import (
    BRANCH_ALL,
    can_manage_branch,
    is_admin_tier,
    is_superadmin,
    visible_branches,
)
from ...identity.users import Claims
from .results import ServiceResult, forbidden_result, not_found_result, validation_failed


@dataclass(frozen=True)
class HolidayListing:
    holidays: list[Holiday]
    is_admin: bool


@dataclass(frozen=True)
class HolidayInput:
    name: str | None = None
    day: date | None = None
    description: str | None = None
    branch: str | None = None


class ListHolidaysUseCase:
    def __init__(self, holidays: HolidayRepository) -> None:
        self._holidays = holidays

    def execute(
        self, claims: Claims, *, year: int | None = None, branch: str | None = None
    ) -> ServiceResult[HolidayListing]:
        rows = self._holidays.list_holidays(
            year=year, branches=visible_branches(claims, branch)
        )
        return ServiceResult.success(
            HolidayListing(holidays=rows, is_admin=is_admin_tier(claims))
        )


class CreateHolidayUseCase:
    def __init__(
        self, holidays: HolidayRepository, *, default_branch: str = BRANCH_ALL
    ) -> None:
        self._holidays = holidays
        self._default_branch = default_branch

    def execute(self, claims: Claims, data: HolidayInput) -> ServiceResult[Holiday]:
        name = (data.name or "").strip()
        if not name or data.day is None:
            return validation_failed("name y date son requeridos.")

        if is_superadmin(claims):
            branch = (data.branch or "").strip() or self._default_branch
        elif claims.branch:
            branch = claims.branch
        else:
            return forbidden_result("El admin no tiene sucursal asignada.")

        holiday = self._holidays.create_holiday(
            name=name,
            day=data.day,
            description=(data.description or "").strip() or None,
            branch=branch,
            created_by=claims.user_id,
        )
        logger.info(
            "Feriado creado",
            extra={"holiday_id": holiday.id, "branch": branch, "by": claims.user_id},
        )
        return ServiceResult.success(holiday)


class UpdateHolidayUseCase:
    def __init__(self, holidays: HolidayRepository) -> None:
        self._holidays = holidays

    def execute(
        self, claims: Claims, holiday_id: int, data: HolidayInput
    ) -> ServiceResult[Holiday]:
        current = self._holidays.get_holiday(holiday_id)
        if current is None:
            return not_found_result("Feriado", holiday_id)
        if not can_manage_branch(claims, current.branch):
            return forbidden_result("Solo podés modificar feriados de tu sucursal.")

        name = (data.name or "").strip() if data.name is not None else current.name
        if not name:
            return validation_failed("name no puede quedar vacío.")

        # R: solo superadmin puede mover un feriado de sucursal.
        branch = current.branch
        if is_superadmin(claims) and (data.branch or "").strip():
            branch = data.branch.strip()

        updated = self._holidays.update_holiday(
            holiday_id,
            name=name,
            day=data.day or current.date,
            description=(
                data.description if data.description is not None else current.description
            ),
            branch=branch,
        )
        if updated is None:
            return not_found_result("Feriado", holiday_id)
        return ServiceResult.success(updated)


class DeleteHolidayUseCase:
    def __init__(self, holidays: HolidayRepository) -> None:
        self._holidays = holidays

    def execute(self, claims: Claims, holiday_id: int) -> ServiceResult[bool]:
        current = self._holidays.get_holiday(holiday_id)
        if current is None:
            return not_found_result("Feriado", holiday_id)
        if not can_manage_branch(claims, current.branch):
            return forbidden_result("Solo podés eliminar feriados de tu sucursal.")

        if not self._holidays.delete_holiday(holiday_id):
            return not_found_result("Feriado", holiday_id)
        logger.info("Feriado eliminado", extra={"holiday_id": holiday_id})
        return ServiceResult.success(True)
