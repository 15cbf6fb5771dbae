"""
===============================================================================
USE CASES: Thoughts ("pensamiento del día" por sucursal)
===============================================================================

Reglas:
    - /all: pensamientos activos en el alcance del principal.
    - /branch/{b} y /random/{b}: la sucursal pedida debe estar en alcance
      (in_scope); si no, FORBIDDEN.
    - Listado administrativo: branch forcing (admin = su sucursal).
    - Alta: admin -> su sucursal; superadmin -> branch del body (requerido).
    - Baja lógica: is_active = False (nunca DELETE físico).

Collaborators:
    - domain.repositories.ThoughtRepository
    - identity.access_policy
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ...crosscutting.logger import logger
from ...domain.entities import Thought
from ...domain.repositories import ThoughtRepository
from ...identity.access_policy import (
    can_manage_branch,
    in_scope,
    is_superadmin,
    resolve_branch_filter,
    visible_branches,
)
from ...identity.users import Claims
from .results import ServiceResult, forbidden_result, not_found_result, validation_failed


@dataclass(frozen=True)
class ThoughtInput:
    content: str | None = None
    author: str | None = None
    branch: str | None = None


class ListThoughtsInScopeUseCase:
    def __init__(self, thoughts: ThoughtRepository) -> None:
        self._thoughts = thoughts

    def execute(self, claims: Claims) -> ServiceResult[list[Thought]]:
        return ServiceResult.success(
            self._thoughts.list_active(branches=visible_branches(claims))
        )


class ListBranchThoughtsUseCase:
    def __init__(self, thoughts: ThoughtRepository) -> None:
        self._thoughts = thoughts

    def execute(self, claims: Claims, branch: str) -> ServiceResult[list[Thought]]:
        branch = (branch or "").strip()
        if not branch:
            return validation_failed("branch es requerido.")
        if not in_scope(claims, branch):
            return forbidden_result("Sucursal fuera de tu alcance.")
        return ServiceResult.success(self._thoughts.list_active(branches=[branch]))


class RandomThoughtUseCase:
    def __init__(self, thoughts: ThoughtRepository) -> None:
        self._thoughts = thoughts

    def execute(self, claims: Claims, branch: str) -> ServiceResult[Thought]:
        branch = (branch or "").strip()
        if not branch:
            return validation_failed("branch es requerido.")
        if not in_scope(claims, branch):
            return forbidden_result("Sucursal fuera de tu alcance.")

        thought = self._thoughts.random_active(branches=[branch])
        if thought is None:
            return not_found_result("Pensamiento", branch)
        return ServiceResult.success(thought)


class ListThoughtsAdminUseCase:
    def __init__(self, thoughts: ThoughtRepository) -> None:
        self._thoughts = thoughts

    def execute(
        self, claims: Claims, *, branch: str | None = None
    ) -> ServiceResult[list[Thought]]:
        effective = resolve_branch_filter(claims, branch)
        if effective is None and not is_superadmin(claims):
            return forbidden_result("No tenés sucursal asignada.")
        branches = [effective] if effective else None
        return ServiceResult.success(self._thoughts.list_active(branches=branches))


class CreateThoughtUseCase:
    def __init__(self, thoughts: ThoughtRepository) -> None:
        self._thoughts = thoughts

    def execute(self, claims: Claims, data: ThoughtInput) -> ServiceResult[Thought]:
        content = (data.content or "").strip()
        author = (data.author or "").strip()
        if not content or not author:
            return validation_failed("content y author son requeridos.")

        branch = claims.branch
        if is_superadmin(claims) and (data.branch or "").strip():
            branch = data.branch.strip()
        if not branch:
            return validation_failed("branch es requerido.")

        thought = self._thoughts.create_thought(
            content=content, author=author, branch=branch, created_by=claims.user_id
        )
        logger.info(
            "Pensamiento creado", extra={"thought_id": thought.id, "branch": branch}
        )
        return ServiceResult.success(thought)


class UpdateThoughtUseCase:
    def __init__(self, thoughts: ThoughtRepository) -> None:
        self._thoughts = thoughts

    def execute(
        self, claims: Claims, thought_id: int, data: ThoughtInput
    ) -> ServiceResult[Thought]:
        current = self._thoughts.get_thought(thought_id)
        if current is None or not current.is_active:
            return not_found_result("Pensamiento", thought_id)
        if not can_manage_branch(claims, current.branch):
            return forbidden_result("Pensamiento fuera de tu sucursal.")

        content = (data.content or "").strip() or current.content
        author = (data.author or "").strip() or current.author
        updated = self._thoughts.update_thought(
            thought_id, content=content, author=author
        )
        if updated is None:
            return not_found_result("Pensamiento", thought_id)
        return ServiceResult.success(updated)


class DeleteThoughtUseCase:
    def __init__(self, thoughts: ThoughtRepository) -> None:
        self._thoughts = thoughts

    def execute(self, claims: Claims, thought_id: int) -> ServiceResult[bool]:
        current = self._thoughts.get_thought(thought_id)
        if current is None or not current.is_active:
            return not_found_result("Pensamiento", thought_id)
        if not can_manage_branch(claims, current.branch):
            return forbidden_result("Pensamiento fuera de tu sucursal.")

        self._thoughts.deactivate_thought(thought_id)
        logger.info("Pensamiento desactivado", extra={"thought_id": thought_id})
        return ServiceResult.success(True)
