"""
===============================================================================
TARJETA CRC — schemas/auth.py
===============================================================================

Módulo:
    Schemas HTTP para autenticación y administración de usuarios

Responsabilidades:
    - DTOs de login / registro / cambio de password / estado de cuenta.
    - Normalizar email (strip + lower) en el borde.
    - Nunca exponer password_hash en respuestas.

Colaboradores:
    - identity.users.User / UserRole / UserStatus
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from portal.identity.users import User, UserRole, UserStatus


def _normalize_email(v: str) -> str:
    return (v or "").strip().lower()


class LoginReq(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=256)
    branch: str | None = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class RegisterReq(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=256)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    employee_id: str | None = Field(default=None, max_length=50)
    role: str | None = None
    branch: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)
    birth_date: date | None = None
    phone: str | None = Field(default=None, max_length=30)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class ChangePasswordReq(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=256)
    new_password: str = Field(..., min_length=1, max_length=256)


class UserStatusReq(BaseModel):
    status: UserStatus


class UserRes(BaseModel):
    id: int
    employee_id: str | None = None
    email: str
    first_name: str
    last_name: str
    role: UserRole
    branch: str | None = None
    department: str | None = None
    position: str | None = None
    birth_date: date | None = None
    phone: str | None = None
    status: UserStatus
    last_login: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserRes":
        return cls(
            id=user.id,
            employee_id=user.employee_id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            branch=user.branch,
            department=user.department,
            position=user.position,
            birth_date=user.birth_date,
            phone=user.phone,
            status=user.status,
            last_login=user.last_login,
            created_at=user.created_at,
        )


class LoginRes(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRes


class UsersListRes(BaseModel):
    users: list[UserRes]
    count: int
