"""
===============================================================================
USE CASES: Ideas (muro de ideas con likes y comentarios)
===============================================================================

Reglas:
    - Cualquier principal autenticado lista, crea, comenta y da like.
    - Editar / borrar una idea o un comentario: solo su autor.
    - Like es un toggle; el resultado indica si quedó "liked".

Collaborators:
    - domain.repositories.IdeaRepository
===============================================================================
"""

from __future__ import annotations

from ...crosscutting.logger import logger
from ...domain.entities import Idea, IdeaComment
from ...domain.repositories import IdeaRepository
from ...identity.users import Claims
from .results import ServiceResult, forbidden_result, not_found_result, validation_failed


def _require_text(**values: str | None) -> tuple[dict[str, str], ServiceResult | None]:
    cleaned = {k: (v or "").strip() for k, v in values.items()}
    missing = [k for k, v in cleaned.items() if not v]
    if missing:
        return cleaned, validation_failed(f"{' y '.join(missing)} requerido(s).")
    return cleaned, None


class ListIdeasUseCase:
    def __init__(self, ideas: IdeaRepository) -> None:
        self._ideas = ideas

    def execute(self, claims: Claims) -> ServiceResult[list[Idea]]:
        return ServiceResult.success(self._ideas.list_ideas(viewer_id=claims.user_id))


class GetIdeaUseCase:
    def __init__(self, ideas: IdeaRepository) -> None:
        self._ideas = ideas

    def execute(self, claims: Claims, idea_id: int) -> ServiceResult[Idea]:
        idea = self._ideas.get_idea(idea_id, viewer_id=claims.user_id)
        if idea is None:
            return not_found_result("Idea", idea_id)
        return ServiceResult.success(idea)


class CreateIdeaUseCase:
    def __init__(self, ideas: IdeaRepository) -> None:
        self._ideas = ideas

    def execute(
        self, claims: Claims, *, title: str | None, content: str | None
    ) -> ServiceResult[Idea]:
        cleaned, error = _require_text(title=title, content=content)
        if error:
            return error
        idea = self._ideas.create_idea(
            user_id=claims.user_id, title=cleaned["title"], content=cleaned["content"]
        )
        logger.info("Idea creada", extra={"idea_id": idea.id, "user_id": claims.user_id})
        return ServiceResult.success(idea)


class UpdateIdeaUseCase:
    def __init__(self, ideas: IdeaRepository) -> None:
        self._ideas = ideas

    def execute(
        self,
        claims: Claims,
        idea_id: int,
        *,
        title: str | None,
        content: str | None,
    ) -> ServiceResult[Idea]:
        cleaned, error = _require_text(title=title, content=content)
        if error:
            return error

        idea = self._ideas.get_idea(idea_id, viewer_id=claims.user_id)
        if idea is None:
            return not_found_result("Idea", idea_id)
        if idea.user_id != claims.user_id:
            return forbidden_result("Solo el autor puede editar la idea.")

        self._ideas.update_idea(idea_id, title=cleaned["title"], content=cleaned["content"])
        updated = self._ideas.get_idea(idea_id, viewer_id=claims.user_id)
        if updated is None:
            return not_found_result("Idea", idea_id)
        return ServiceResult.success(updated)


class DeleteIdeaUseCase:
    def __init__(self, ideas: IdeaRepository) -> None:
        self._ideas = ideas

    def execute(self, claims: Claims, idea_id: int) -> ServiceResult[bool]:
        idea = self._ideas.get_idea(idea_id, viewer_id=claims.user_id)
        if idea is None:
            return not_found_result("Idea", idea_id)
        if idea.user_id != claims.user_id:
            return forbidden_result("Solo el autor puede borrar la idea.")

        self._ideas.delete_idea(idea_id)
        return ServiceResult.success(True)


class ToggleIdeaLikeUseCase:
    def __init__(self, ideas: IdeaRepository) -> None:
        self._ideas = ideas

    def execute(self, claims: Claims, idea_id: int) -> ServiceResult[bool]:
        if self._ideas.get_idea(idea_id, viewer_id=claims.user_id) is None:
            return not_found_result("Idea", idea_id)
        return ServiceResult.success(
            self._ideas.toggle_like(idea_id, user_id=claims.user_id)
        )


class AddIdeaCommentUseCase:
    def __init__(self, ideas: IdeaRepository) -> None:
        self._ideas = ideas

    def execute(
        self, claims: Claims, idea_id: int, *, comment: str | None
    ) -> ServiceResult[IdeaComment]:
        cleaned, error = _require_text(comment=comment)
        if error:
            return error
        if self._ideas.get_idea(idea_id, viewer_id=claims.user_id) is None:
            return not_found_result("Idea", idea_id)

        return ServiceResult.success(
            self._ideas.add_comment(
                idea_id, user_id=claims.user_id, comment=cleaned["comment"]
            )
        )


class DeleteIdeaCommentUseCase:
    def __init__(self, ideas: IdeaRepository) -> None:
        self._ideas = ideas

    def execute(self, claims: Claims, comment_id: int) -> ServiceResult[bool]:
        comment = self._ideas.get_comment(comment_id)
        if comment is None:
            return not_found_result("Comentario", comment_id)
        if comment.user_id != claims.user_id:
            return forbidden_result("Solo el autor puede borrar el comentario.")

        self._ideas.delete_comment(comment_id)
        return ServiceResult.success(True)
