"""
===============================================================================
TARJETA CRC — portal/interfaces/api/http/routers/ideas.py
===============================================================================

Class/Module:
    Idea Router

Responsibilities:
    - Tablero de ideas: listado / detalle con contadores e is_liked del caller.
    - Edición y baja solo por el autor.
    - Toggle de like y comentarios (baja de comentario solo por su autor).

Collaborators:
    - portal.application.usecases (ideas)
    - portal.container

Notas:
    - /comments/{comment_id} se declara antes que /{idea_id}.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from portal.application.usecases import (
    AddIdeaCommentUseCase,
    CreateIdeaUseCase,
    DeleteIdeaCommentUseCase,
    DeleteIdeaUseCase,
    GetIdeaUseCase,
    ListIdeasUseCase,
    ToggleIdeaLikeUseCase,
    UpdateIdeaUseCase,
)
from portal.container import (
    get_add_idea_comment_use_case,
    get_create_idea_use_case,
    get_delete_idea_comment_use_case,
    get_delete_idea_use_case,
    get_idea_use_case,
    get_list_ideas_use_case,
    get_toggle_idea_like_use_case,
    get_update_idea_use_case,
)
from portal.identity.users import Claims

from ..dependencies import current_claims
from ..error_mapping import unwrap
from ..schemas.common import Envelope, MessageRes, ok
from ..schemas.community import CommentReq, CommentRes, IdeaReq, IdeaRes, LikeRes

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.get("", response_model=Envelope[list[IdeaRes]])
def list_ideas(
    claims: Claims = Depends(current_claims),
    use_case: ListIdeasUseCase = Depends(get_list_ideas_use_case),
):
    return ok([IdeaRes.from_idea(i) for i in unwrap(use_case.execute(claims))])


@router.post("", response_model=Envelope[IdeaRes], status_code=201)
def create_idea(
    req: IdeaReq,
    claims: Claims = Depends(current_claims),
    use_case: CreateIdeaUseCase = Depends(get_create_idea_use_case),
):
    idea = unwrap(use_case.execute(claims, title=req.title, content=req.content))
    return ok(IdeaRes.from_idea(idea), message="Idea publicada.")


@router.delete("/comments/{comment_id}", response_model=MessageRes)
def delete_comment(
    comment_id: int,
    claims: Claims = Depends(current_claims),
    use_case: DeleteIdeaCommentUseCase = Depends(get_delete_idea_comment_use_case),
):
    unwrap(use_case.execute(claims, comment_id))
    return MessageRes(message="Comentario eliminado.")


@router.get("/{idea_id}", response_model=Envelope[IdeaRes])
def get_idea(
    idea_id: int,
    claims: Claims = Depends(current_claims),
    use_case: GetIdeaUseCase = Depends(get_idea_use_case),
):
    idea = unwrap(use_case.execute(claims, idea_id))
    return ok(IdeaRes.from_idea(idea, with_comments=True))


@router.put("/{idea_id}", response_model=Envelope[IdeaRes])
def update_idea(
    idea_id: int,
    req: IdeaReq,
    claims: Claims = Depends(current_claims),
    use_case: UpdateIdeaUseCase = Depends(get_update_idea_use_case),
):
    idea = unwrap(
        use_case.execute(claims, idea_id, title=req.title, content=req.content)
    )
    return ok(IdeaRes.from_idea(idea), message="Idea actualizada.")


@router.delete("/{idea_id}", response_model=MessageRes)
def delete_idea(
    idea_id: int,
    claims: Claims = Depends(current_claims),
    use_case: DeleteIdeaUseCase = Depends(get_delete_idea_use_case),
):
    unwrap(use_case.execute(claims, idea_id))
    return MessageRes(message="Idea eliminada.")


@router.post("/{idea_id}/like", response_model=Envelope[LikeRes])
def toggle_like(
    idea_id: int,
    claims: Claims = Depends(current_claims),
    use_case: ToggleIdeaLikeUseCase = Depends(get_toggle_idea_like_use_case),
):
    liked = unwrap(use_case.execute(claims, idea_id))
    return ok(LikeRes(liked=liked))


@router.post(
    "/{idea_id}/comments", response_model=Envelope[CommentRes], status_code=201
)
def add_comment(
    idea_id: int,
    req: CommentReq,
    claims: Claims = Depends(current_claims),
    use_case: AddIdeaCommentUseCase = Depends(get_add_idea_comment_use_case),
):
    comment = unwrap(use_case.execute(claims, idea_id, comment=req.comment))
    return ok(CommentRes.from_comment(comment), message="Comentario agregado.")
