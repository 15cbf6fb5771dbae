"""
===============================================================================
TARJETA CRC — portal/interfaces/api/http/routers/hr.py
===============================================================================

Class/Module:
    HR Policy Router

Responsibilities:
    - Listado / detalle de políticas de RRHH (cualquier autenticado).
    - Alta / edición parcial / baja (admin-tier) bajo /create, /update, /delete.

Collaborators:
    - portal.application.usecases (hr_policies)
    - portal.container
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from portal.application.usecases import (
    CreateHrPolicyUseCase,
    DeleteHrPolicyUseCase,
    GetHrPolicyUseCase,
    HrPolicyInput,
    ListHrPoliciesUseCase,
    UpdateHrPolicyUseCase,
)
from portal.container import (
    get_create_hr_policy_use_case,
    get_delete_hr_policy_use_case,
    get_hr_policy_use_case,
    get_list_hr_policies_use_case,
    get_update_hr_policy_use_case,
)
from portal.identity.users import Claims

from ..dependencies import admin_claims, current_claims
from ..error_mapping import unwrap
from ..schemas.common import Envelope, MessageRes, ok
from ..schemas.content import HrPolicyReq, HrPolicyRes

router = APIRouter(prefix="/hr", tags=["hr"])


def _to_input(req: HrPolicyReq) -> HrPolicyInput:
    return HrPolicyInput(**req.model_dump())


@router.get("", response_model=Envelope[list[HrPolicyRes]])
def list_policies(
    claims: Claims = Depends(current_claims),
    use_case: ListHrPoliciesUseCase = Depends(get_list_hr_policies_use_case),
):
    return ok([HrPolicyRes.from_policy(p) for p in unwrap(use_case.execute())])


@router.post("/create", response_model=Envelope[HrPolicyRes], status_code=201)
def create_policy(
    req: HrPolicyReq,
    claims: Claims = Depends(admin_claims),
    use_case: CreateHrPolicyUseCase = Depends(get_create_hr_policy_use_case),
):
    policy = unwrap(use_case.execute(claims, _to_input(req)))
    return ok(HrPolicyRes.from_policy(policy), message="Política creada.")


@router.put("/update/{policy_id}", response_model=Envelope[HrPolicyRes])
def update_policy(
    policy_id: int,
    req: HrPolicyReq,
    claims: Claims = Depends(admin_claims),
    use_case: UpdateHrPolicyUseCase = Depends(get_update_hr_policy_use_case),
):
    policy = unwrap(use_case.execute(policy_id, _to_input(req)))
    return ok(HrPolicyRes.from_policy(policy), message="Política actualizada.")


@router.delete("/delete/{policy_id}", response_model=MessageRes)
def delete_policy(
    policy_id: int,
    claims: Claims = Depends(admin_claims),
    use_case: DeleteHrPolicyUseCase = Depends(get_delete_hr_policy_use_case),
):
    unwrap(use_case.execute(policy_id))
    return MessageRes(message="Política eliminada.")


@router.get("/{policy_id}", response_model=Envelope[HrPolicyRes])
def get_policy(
    policy_id: int,
    claims: Claims = Depends(current_claims),
    use_case: GetHrPolicyUseCase = Depends(get_hr_policy_use_case),
):
    return ok(HrPolicyRes.from_policy(unwrap(use_case.execute(policy_id))))
