"""
===============================================================================
USE CASES: Principal lifecycle (registro, perfil, password, administración)
===============================================================================

Business Goal:
    Crear y administrar principals respetando la jerarquía de roles y el
    alcance por sucursal:
      - anónimo           -> solo puede crear "employee"
      - admin             -> crea usuarios de SU sucursal, nunca superadmin
      - superadmin        -> cualquier rol / sucursal

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    RegisterUserUseCase, GetCurrentUserUseCase, ChangePasswordUseCase,
    ListUsersUseCase, SetUserStatusUseCase, ListBirthdaysUseCase,
    ListRecentJoinedUseCase

Responsibilities:
    - Validar input (campos requeridos, largo de password, rol válido).
    - Aplicar reglas de creador (rol / sucursal forzada).
    - Traducir DuplicateKeyError -> CONFLICT.
    - Aplicar branch forcing en listados administrativos.

Collaborators:
    - domain.repositories.UserRepository
    - identity.auth_users (hash_password / verify_password)
    - identity.access_policy (resolve_branch_filter / visible_branches)
    - results (ServiceResult / ServiceErrorCode)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ...crosscutting.logger import logger
from ...domain.repositories import DuplicateKeyError, UserRepository
from ...identity.access_policy import (
    is_superadmin,
    resolve_branch_filter,
    visible_branches,
)
from ...identity.auth_users import hash_password, verify_password
from ...identity.users import Claims, User, UserRole, UserStatus
from .results import (
    ServiceErrorCode,
    ServiceResult,
    forbidden_result,
    not_found_result,
    validation_failed,
)

MIN_PASSWORD_LENGTH = 8
RECENT_JOINED_LIMIT = 10


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _clean(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None


@dataclass(frozen=True)
class RegisterUserInput:
    email: str
    password: str
    first_name: str
    last_name: str
    employee_id: str | None = None
    role: str | None = None
    branch: str | None = None
    department: str | None = None
    position: str | None = None
    birth_date: date | None = None
    phone: str | None = None


class RegisterUserUseCase:
    """Alta de principal (registro público o creación administrativa)."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(
        self, creator: Claims | None, data: RegisterUserInput
    ) -> ServiceResult[User]:
        email = normalize_email(data.email)
        first_name = (data.first_name or "").strip()
        last_name = (data.last_name or "").strip()
        if not email or not data.password or not first_name or not last_name:
            return validation_failed(
                "email, password, first_name y last_name son requeridos."
            )
        if len(data.password) < MIN_PASSWORD_LENGTH:
            return validation_failed(
                f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres."
            )

        try:
            requested_role = UserRole(data.role) if data.role else UserRole.EMPLOYEE
        except ValueError:
            return validation_failed(f"Rol inválido: {data.role}")

        role, branch, denied = self._apply_creator_rules(
            creator, requested_role, _clean(data.branch)
        )
        if denied is not None:
            return denied

        if role != UserRole.SUPERADMIN and not branch:
            return validation_failed("branch es requerido para este rol.")

        try:
            user = self._users.create_user(
                email=email,
                password_hash=hash_password(data.password),
                first_name=first_name,
                last_name=last_name,
                role=role,
                branch=branch,
                employee_id=_clean(data.employee_id),
                department=_clean(data.department),
                position=_clean(data.position),
                birth_date=data.birth_date,
                phone=_clean(data.phone),
            )
        except DuplicateKeyError as exc:
            label = "employee_id" if exc.field == "employee_id" else "email"
            return ServiceResult.fail(
                ServiceErrorCode.CONFLICT, f"Ya existe un usuario con ese {label}."
            )

        logger.info(
            "Usuario creado",
            extra={
                "user_id": user.id,
                "role": user.role.value,
                "created_by": creator.user_id if creator else None,
            },
        )
        return ServiceResult.success(user)

    @staticmethod
    def _apply_creator_rules(
        creator: Claims | None, role: UserRole, branch: str | None
    ) -> tuple[UserRole, str | None, ServiceResult | None]:
        """
        Devuelve (rol, sucursal) efectivos o un resultado de rechazo.

        Cualquier creador que no sea admin-tier se trata como registro público.
        """
        if creator is not None and is_superadmin(creator):
            return role, branch, None

        if creator is not None and creator.role == UserRole.ADMIN:
            if not creator.branch:
                return role, branch, forbidden_result(
                    "El admin no tiene sucursal asignada."
                )
            if role == UserRole.SUPERADMIN:
                return role, branch, forbidden_result(
                    "Un admin no puede crear superadmins."
                )
            return role, creator.branch, None

        return UserRole.EMPLOYEE, branch, None


class GetCurrentUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, claims: Claims) -> ServiceResult[User]:
        user = self._users.get_user_by_id(claims.user_id)
        if user is None:
            return not_found_result("Usuario", claims.user_id)
        return ServiceResult.success(user)


class ChangePasswordUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(
        self, claims: Claims, *, current_password: str, new_password: str
    ) -> ServiceResult[bool]:
        if not current_password or not new_password:
            return validation_failed("current_password y new_password son requeridos.")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return validation_failed(
                f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres."
            )

        user = self._users.get_user_by_id(claims.user_id)
        if user is None:
            return not_found_result("Usuario", claims.user_id)
        if not verify_password(current_password, user.password_hash):
            return ServiceResult.fail(
                ServiceErrorCode.INVALID_CREDENTIALS, "La contraseña actual es incorrecta."
            )

        self._users.update_password(user.id, hash_password(new_password))
        logger.info("Password actualizado", extra={"user_id": user.id})
        return ServiceResult.success(True)


class ListUsersUseCase:
    """Listado administrativo con branch forcing."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(
        self,
        claims: Claims,
        *,
        role: str | None = None,
        status: str | None = None,
        department: str | None = None,
        branch: str | None = None,
    ) -> ServiceResult[list[User]]:
        try:
            role_filter = UserRole(role) if role else None
            status_filter = UserStatus(status) if status else None
        except ValueError:
            return validation_failed("Filtro de rol/estado inválido.")

        effective_branch = resolve_branch_filter(claims, branch)
        if effective_branch is None and not is_superadmin(claims):
            return forbidden_result("No tenés sucursal asignada.")

        users = self._users.list_users(
            role=role_filter,
            status=status_filter,
            department=_clean(department),
            branch=effective_branch,
        )
        return ServiceResult.success(users)


class SetUserStatusUseCase:
    """Soft toggle active/inactive (nunca hard delete)."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(
        self, claims: Claims, user_id: int, status: str
    ) -> ServiceResult[User]:
        try:
            new_status = UserStatus(status)
        except ValueError:
            return validation_failed(f"Estado inválido: {status}")

        if user_id == claims.user_id and new_status != UserStatus.ACTIVE:
            return forbidden_result("No podés desactivar tu propia cuenta.")

        target = self._users.get_user_by_id(user_id)
        if target is None:
            return not_found_result("Usuario", user_id)
        if not is_superadmin(claims):
            if target.role == UserRole.SUPERADMIN or target.branch != claims.branch:
                return forbidden_result("Usuario fuera de tu sucursal.")

        updated = self._users.set_status(user_id, new_status)
        if updated is None:
            return not_found_result("Usuario", user_id)

        logger.info(
            "Estado de usuario actualizado",
            extra={"user_id": user_id, "status": new_status.value, "by": claims.user_id},
        )
        return ServiceResult.success(updated)


class ListBirthdaysUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, claims: Claims, *, today: date) -> ServiceResult[list[User]]:
        return ServiceResult.success(
            self._users.list_birthdays(
                month=today.month, branches=visible_branches(claims)
            )
        )


class ListRecentJoinedUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(
        self, claims: Claims, *, limit: int = RECENT_JOINED_LIMIT
    ) -> ServiceResult[list[User]]:
        return ServiceResult.success(
            self._users.list_recent(limit=limit, branches=visible_branches(claims))
        )
