"""
===============================================================================
TARJETA CRC — portal/interfaces/api/http/routers/auth.py
===============================================================================

Class/Module:
    Auth Router

Responsibilities:
    - Login con email/password (+ sucursal elegida opcional) -> JWT.
    - Registro público y alta administrativa de usuarios.
    - Perfil propio, cambio de password y logout stateless.
    - Listados de usuarios (admin), cumpleaños del mes y últimos ingresos.

Collaborators:
    - portal.identity.auth_users (authenticate_user / create_access_token)
    - portal.application.usecases (users)
    - portal.container (factories DI)
    - schemas.auth (DTOs Pydantic)

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from portal.application.usecases import (
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    ListBirthdaysUseCase,
    ListRecentJoinedUseCase,
    ListUsersUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    SetUserStatusUseCase,
)
from portal.container import (
    get_change_password_use_case,
    get_current_user_use_case,
    get_list_birthdays_use_case,
    get_list_recent_joined_use_case,
    get_list_users_use_case,
    get_register_user_use_case,
    get_set_user_status_use_case,
    get_user_repository,
)
from portal.domain.repositories import UserRepository
from portal.identity.auth_users import authenticate_user, create_access_token
from portal.identity.users import Claims

from ..dependencies import admin_claims, current_claims, local_today, maybe_claims
from ..error_mapping import unwrap
from ..schemas.auth import (
    ChangePasswordReq,
    LoginReq,
    LoginRes,
    RegisterReq,
    UserRes,
    UsersListRes,
    UserStatusReq,
)
from ..schemas.common import Envelope, MessageRes, ok

router = APIRouter(prefix="/auth", tags=["auth"])


def _to_register_input(req: RegisterReq) -> RegisterUserInput:
    return RegisterUserInput(
        email=req.email,
        password=req.password,
        first_name=req.first_name,
        last_name=req.last_name,
        employee_id=req.employee_id,
        role=req.role,
        branch=req.branch,
        department=req.department,
        position=req.position,
        birth_date=req.birth_date,
        phone=req.phone,
    )


# =============================================================================
# Sesión
# =============================================================================


@router.post("/login", response_model=Envelope[LoginRes])
def login(req: LoginReq, users: UserRepository = Depends(get_user_repository)):
    """Valida credenciales y emite el access token (errores ya son 401/403)."""
    user = authenticate_user(users, req.email, req.password, branch=req.branch)
    token, expires_in = create_access_token(user)
    return ok(
        LoginRes(token=token, expires_in=expires_in, user=UserRes.from_user(user)),
        message="Login exitoso.",
    )


@router.post("/logout", response_model=MessageRes)
def logout(claims: Claims = Depends(current_claims)):
    # R: sin lista de revocación; el cliente descarta el token.
    return MessageRes(message="Sesión cerrada.")


@router.get("/me", response_model=Envelope[UserRes])
def me(
    claims: Claims = Depends(current_claims),
    use_case: GetCurrentUserUseCase = Depends(get_current_user_use_case),
):
    return ok(UserRes.from_user(unwrap(use_case.execute(claims))))


@router.post("/change-password", response_model=MessageRes)
def change_password(
    req: ChangePasswordReq,
    claims: Claims = Depends(current_claims),
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
):
    unwrap(
        use_case.execute(
            claims,
            current_password=req.current_password,
            new_password=req.new_password,
        )
    )
    return MessageRes(message="Contraseña actualizada.")


# =============================================================================
# Alta de usuarios
# =============================================================================


@router.post("/register", response_model=Envelope[UserRes], status_code=201)
def register(
    req: RegisterReq,
    creator: Claims | None = Depends(maybe_claims),
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    """Registro público; con bearer admin-tier aplica las reglas del creador."""
    user = unwrap(use_case.execute(creator, _to_register_input(req)))
    return ok(UserRes.from_user(user), message="Usuario registrado.")


@router.post("/admin/users", response_model=Envelope[UserRes], status_code=201)
def admin_create_user(
    req: RegisterReq,
    claims: Claims = Depends(admin_claims),
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    user = unwrap(use_case.execute(claims, _to_register_input(req)))
    return ok(UserRes.from_user(user), message="Usuario creado.")


# =============================================================================
# Administración
# =============================================================================


@router.get("/admin/users", response_model=Envelope[UsersListRes])
def admin_list_users(
    role: str | None = Query(None),
    status: str | None = Query(None),
    department: str | None = Query(None),
    branch: str | None = Query(None),
    claims: Claims = Depends(admin_claims),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    users = unwrap(
        use_case.execute(
            claims, role=role, status=status, department=department, branch=branch
        )
    )
    return ok(
        UsersListRes(users=[UserRes.from_user(u) for u in users], count=len(users))
    )


@router.patch("/admin/users/{user_id}/status", response_model=Envelope[UserRes])
def admin_set_user_status(
    user_id: int,
    req: UserStatusReq,
    claims: Claims = Depends(admin_claims),
    use_case: SetUserStatusUseCase = Depends(get_set_user_status_use_case),
):
    user = unwrap(use_case.execute(claims, user_id, req.status.value))
    return ok(UserRes.from_user(user), message="Estado actualizado.")


# =============================================================================
# Directorio
# =============================================================================


@router.get("/birthdays", response_model=Envelope[UsersListRes])
def birthdays(
    claims: Claims = Depends(current_claims),
    use_case: ListBirthdaysUseCase = Depends(get_list_birthdays_use_case),
):
    users = unwrap(use_case.execute(claims, today=local_today()))
    return ok(
        UsersListRes(users=[UserRes.from_user(u) for u in users], count=len(users))
    )


@router.get("/recent-joined", response_model=Envelope[UsersListRes])
def recent_joined(
    limit: int = Query(10, ge=1, le=50),
    claims: Claims = Depends(current_claims),
    use_case: ListRecentJoinedUseCase = Depends(get_list_recent_joined_use_case),
):
    users = unwrap(use_case.execute(claims, limit=limit))
    return ok(
        UsersListRes(users=[UserRes.from_user(u) for u in users], count=len(users))
    )
