"""
===============================================================================
USE CASES: HR Policies
===============================================================================

Reglas:
    - Lectura para cualquier principal autenticado.
    - Alta / edición / baja: admin-tier (lo garantiza el borde HTTP).
    - Alta requiere title, category y content; prepared_by / approved_by
      toman por defecto el nombre completo del creador.
    - Edición parcial: solo los campos enviados (allowlist en el repo).

Collaborators:
    - domain.repositories.HrPolicyRepository
    - domain.repositories.UserRepository (nombre del creador)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date

from ...crosscutting.logger import logger
from ...domain.entities import HrPolicy
from ...domain.repositories import HrPolicyRepository, UserRepository
from ...identity.users import Claims
from .results import ServiceResult, not_found_result, validation_failed

DEFAULT_STATUS = "Active"


@dataclass(frozen=True)
class HrPolicyInput:
    title: str | None = None
    category: str | None = None
    description: str | None = None
    content: str | None = None
    version: str | None = None
    effective_date: date | None = None
    prepared_by: str | None = None
    approved_by: str | None = None
    status: str | None = None

    def provided(self) -> dict[str, object]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


class ListHrPoliciesUseCase:
    def __init__(self, policies: HrPolicyRepository) -> None:
        self._policies = policies

    def execute(self) -> ServiceResult[list[HrPolicy]]:
        return ServiceResult.success(self._policies.list_policies())


class GetHrPolicyUseCase:
    def __init__(self, policies: HrPolicyRepository) -> None:
        self._policies = policies

    def execute(self, policy_id: int) -> ServiceResult[HrPolicy]:
        policy = self._policies.get_policy(policy_id)
        if policy is None:
            return not_found_result("Política", policy_id)
        return ServiceResult.success(policy)


class CreateHrPolicyUseCase:
    def __init__(self, policies: HrPolicyRepository, users: UserRepository) -> None:
        self._policies = policies
        self._users = users

    def execute(self, claims: Claims, data: HrPolicyInput) -> ServiceResult[HrPolicy]:
        title = (data.title or "").strip()
        category = (data.category or "").strip()
        content = (data.content or "").strip()
        if not title or not category or not content:
            return validation_failed("title, category y content son requeridos.")

        creator = self._users.get_user_by_id(claims.user_id)
        creator_name = creator.full_name if creator else None

        policy = self._policies.create_policy(
            HrPolicy(
                id=0,
                title=title,
                category=category,
                content=content,
                description=data.description,
                version=data.version,
                effective_date=data.effective_date,
                prepared_by=data.prepared_by or creator_name,
                approved_by=data.approved_by or creator_name,
                status=data.status or DEFAULT_STATUS,
                created_by=claims.user_id,
            )
        )
        logger.info("Política creada", extra={"policy_id": policy.id})
        return ServiceResult.success(policy)


class UpdateHrPolicyUseCase:
    def __init__(self, policies: HrPolicyRepository) -> None:
        self._policies = policies

    def execute(self, policy_id: int, data: HrPolicyInput) -> ServiceResult[HrPolicy]:
        changes = data.provided()
        for required in ("title", "category", "content"):
            if required in changes and not str(changes[required]).strip():
                return validation_failed(f"{required} no puede quedar vacío.")

        updated = self._policies.update_policy(policy_id, changes)
        if updated is None:
            return not_found_result("Política", policy_id)
        return ServiceResult.success(updated)


class DeleteHrPolicyUseCase:
    def __init__(self, policies: HrPolicyRepository) -> None:
        self._policies = policies

    def execute(self, policy_id: int) -> ServiceResult[bool]:
        if not self._policies.delete_policy(policy_id):
            return not_found_result("Política", policy_id)
        logger.info("Política eliminada", extra={"policy_id": policy_id})
        return ServiceResult.success(True)
