"""
===============================================================================
TARJETA CRC — portal/interfaces/api/http/routers/thoughts.py
===============================================================================

Class/Module:
    Thought Router

Responsibilities:
    - Pensamientos del día por sucursal (lectura para cualquier autenticado).
    - ABM admin-tier con soft delete (is_active = false).

Collaborators:
    - portal.application.usecases (thoughts)
    - portal.container

Notas:
    - Las rutas fijas (/all, /branch/..., /random/...) se declaran antes que
      /{thought_id}.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from portal.application.usecases import (
    CreateThoughtUseCase,
    DeleteThoughtUseCase,
    ListBranchThoughtsUseCase,
    ListThoughtsAdminUseCase,
    ListThoughtsInScopeUseCase,
    RandomThoughtUseCase,
    ThoughtInput,
    UpdateThoughtUseCase,
)
from portal.container import (
    get_create_thought_use_case,
    get_delete_thought_use_case,
    get_list_branch_thoughts_use_case,
    get_list_thoughts_admin_use_case,
    get_list_thoughts_in_scope_use_case,
    get_random_thought_use_case,
    get_update_thought_use_case,
)
from portal.domain.entities import Thought
from portal.identity.users import Claims

from ..dependencies import admin_claims, current_claims
from ..error_mapping import unwrap
from ..schemas.common import Envelope, MessageRes, ok
from ..schemas.content import ThoughtReq, ThoughtRes, ThoughtsListRes

router = APIRouter(prefix="/thoughts", tags=["thoughts"])


def _to_list_res(thoughts: list[Thought]) -> ThoughtsListRes:
    return ThoughtsListRes(
        thoughts=[ThoughtRes.from_thought(t) for t in thoughts], count=len(thoughts)
    )


def _to_input(req: ThoughtReq) -> ThoughtInput:
    return ThoughtInput(content=req.content, author=req.author, branch=req.branch)


@router.get("/all", response_model=Envelope[ThoughtsListRes])
def list_in_scope(
    claims: Claims = Depends(current_claims),
    use_case: ListThoughtsInScopeUseCase = Depends(
        get_list_thoughts_in_scope_use_case
    ),
):
    return ok(_to_list_res(unwrap(use_case.execute(claims))))


@router.get("/branch/{branch}", response_model=Envelope[ThoughtsListRes])
def list_for_branch(
    branch: str,
    claims: Claims = Depends(current_claims),
    use_case: ListBranchThoughtsUseCase = Depends(get_list_branch_thoughts_use_case),
):
    return ok(_to_list_res(unwrap(use_case.execute(claims, branch))))


@router.get("/random/{branch}", response_model=Envelope[ThoughtRes])
def random_for_branch(
    branch: str,
    claims: Claims = Depends(current_claims),
    use_case: RandomThoughtUseCase = Depends(get_random_thought_use_case),
):
    return ok(ThoughtRes.from_thought(unwrap(use_case.execute(claims, branch))))


@router.get("", response_model=Envelope[ThoughtsListRes])
def list_admin(
    branch: str | None = Query(None),
    claims: Claims = Depends(admin_claims),
    use_case: ListThoughtsAdminUseCase = Depends(get_list_thoughts_admin_use_case),
):
    return ok(_to_list_res(unwrap(use_case.execute(claims, branch=branch))))


@router.post("", response_model=Envelope[ThoughtRes], status_code=201)
def create_thought(
    req: ThoughtReq,
    claims: Claims = Depends(admin_claims),
    use_case: CreateThoughtUseCase = Depends(get_create_thought_use_case),
):
    thought = unwrap(use_case.execute(claims, _to_input(req)))
    return ok(ThoughtRes.from_thought(thought), message="Pensamiento creado.")


@router.put("/{thought_id}", response_model=Envelope[ThoughtRes])
def update_thought(
    thought_id: int,
    req: ThoughtReq,
    claims: Claims = Depends(admin_claims),
    use_case: UpdateThoughtUseCase = Depends(get_update_thought_use_case),
):
    thought = unwrap(use_case.execute(claims, thought_id, _to_input(req)))
    return ok(ThoughtRes.from_thought(thought), message="Pensamiento actualizado.")


@router.delete("/{thought_id}", response_model=MessageRes)
def delete_thought(
    thought_id: int,
    claims: Claims = Depends(admin_claims),
    use_case: DeleteThoughtUseCase = Depends(get_delete_thought_use_case),
):
    unwrap(use_case.execute(claims, thought_id))
    return MessageRes(message="Pensamiento eliminado.")
