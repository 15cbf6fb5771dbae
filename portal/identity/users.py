"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Principal (usuario) y Claims

Responsabilidades:
    - Definir el catálogo cerrado de roles y estados de cuenta.
    - Definir el dataclass User (fila de `users`, incluye el hash).
    - Definir Claims: el payload verificado del token que se pasa
      explícitamente a cada caso de uso.

Colaboradores:
    - identity/auth_users.py: emite/verifica tokens a partir de User / Claims.
    - identity/access_policy.py: decide sobre Claims.
    - infrastructure/repositories/*/user.py: mapean filas -> User.

Notas:
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
    - branch=None solo es válido para SUPERADMIN (todas las sucursales).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class UserRole(str, Enum):
    """Roles soportados por el portal."""

    EMPLOYEE = "employee"
    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    SUPERADMIN = "superadmin"


class UserStatus(str, Enum):
    """Ciclo de vida de la cuenta (soft toggle, nunca hard delete)."""

    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (Principal) tal como vive en la tabla `users`."""

    id: int
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: UserRole
    status: UserStatus
    employee_id: str | None = None
    branch: str | None = None
    department: str | None = None
    position: str | None = None
    birth_date: date | None = None
    phone: str | None = None
    last_login: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True, slots=True)
class Claims:
    """Identidad verificada extraída del access token."""

    user_id: int
    email: str
    role: UserRole
    branch: str | None = None
