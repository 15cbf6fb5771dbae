"""
===============================================================================
TARJETA CRC — identity/access_policy.py
===============================================================================

Módulo:
    Política de acceso (capabilities + alcance por sucursal)

Responsabilidades:
    - Evaluar si unos Claims satisfacen una Capability (allow/deny).
    - Resolver el filtro de sucursal efectivo para listados:
        * admin      -> siempre su propia sucursal (se ignora el parámetro)
        * superadmin -> el parámetro tal cual, o sin filtro
        * resto      -> su propia sucursal
    - Decidir si un recurso con sucursal está "en alcance" del principal.

Colaboradores:
    - identity.users: Claims, UserRole
    - identity.auth_users: require_capability() usa authorize()
    - application.usecases.*: aplican resolve_branch_filter / in_scope

Reglas:
    - Funciones puras: sin DB, sin FastAPI, sin estado global.
    - Deny nunca lanza acá; el borde HTTP lo traduce a 403.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .users import Claims, UserRole

# Marca de recurso independiente de sucursal (feriados/pensamientos globales).
BRANCH_ALL: str = "All"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True, slots=True)
class Capability:
    """
    Capacidad requerida por una operación.

    roles=None significa "cualquier principal autenticado".
    """

    name: str
    roles: frozenset[UserRole] | None = None

    def allows(self, role: UserRole) -> bool:
        return self.roles is None or role in self.roles


ANY_AUTHENTICATED = Capability("any-authenticated")
ADMIN_TIER = Capability(
    "admin-tier", frozenset({UserRole.ADMIN, UserRole.SUPERADMIN})
)


def role_set(*roles: UserRole | str) -> Capability:
    """Capability para un conjunto explícito de roles."""
    resolved = frozenset(UserRole(r) for r in roles)
    label = ",".join(sorted(r.value for r in resolved))
    return Capability(f"role-set({label})", resolved)


def authorize(claims: Claims | None, capability: Capability) -> Decision:
    """Evalúa claims contra la capability requerida."""
    if claims is None:
        return Decision.DENY
    return Decision.ALLOW if capability.allows(claims.role) else Decision.DENY


def is_superadmin(claims: Claims) -> bool:
    return claims.role == UserRole.SUPERADMIN


def is_admin_tier(claims: Claims) -> bool:
    return ADMIN_TIER.allows(claims.role)


def in_scope(claims: Claims, resource_branch: str | None) -> bool:
    """
    True si el principal puede ver/tocar un recurso de `resource_branch`.

    - superadmin: siempre
    - recurso independiente de sucursal ("All"): siempre
    - resto: sucursal del principal == sucursal del recurso
    """
    if is_superadmin(claims):
        return True
    if resource_branch == BRANCH_ALL:
        return True
    return claims.branch is not None and claims.branch == resource_branch


def can_manage_branch(claims: Claims, resource_branch: str | None) -> bool:
    """
    Escritura sobre recursos con sucursal: más estricta que in_scope.

    "All" solo lo administra superadmin; un admin solo su propia sucursal.
    """
    if is_superadmin(claims):
        return True
    return claims.branch is not None and claims.branch == resource_branch


def resolve_branch_filter(claims: Claims, requested: str | None) -> str | None:
    """
    Filtro de sucursal efectivo para listados.

    R: el parámetro del caller solo se respeta para superadmin; para cualquier
       otro rol se fuerza la sucursal de los claims (anti parameter injection).
    """
    if is_superadmin(claims):
        value = (requested or "").strip()
        return value or None
    return claims.branch


def visible_branches(claims: Claims, requested: str | None = None) -> list[str] | None:
    """
    Sucursales visibles para listados de contenido con sucursal.

    Devuelve None cuando no hay que filtrar (superadmin sin parámetro); si no,
    la lista de sucursales aceptadas (incluye siempre "All").
    """
    branch = resolve_branch_filter(claims, requested)
    if branch is None:
        return None if is_superadmin(claims) else [BRANCH_ALL]
    return [branch, BRANCH_ALL] if branch != BRANCH_ALL else [BRANCH_ALL]

