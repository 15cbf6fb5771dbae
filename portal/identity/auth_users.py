"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Emisor y verificador de credenciales (JWT)

Responsabilidades:
    - Hashear/verificar passwords (Argon2, comparación en tiempo constante).
    - Autenticar (email + password [+ sucursal]) y registrar último login.
    - Emitir JWT de acceso con expiración fija (access token).
    - Decodificar y validar JWT -> Claims (TokenExpired / TokenInvalid).
    - Exponer dependencias FastAPI (require_claims, require_capability).

Colaboradores:
    - crosscutting.config.get_settings: secreto y TTL.
    - crosscutting.error_responses: factories 401/403.
    - identity.access_policy: authorize() + capabilities.
    - domain.repositories.UserRepository: lookup por email, touch_last_login.

Decisiones de diseño:
    - Verificar un token NO toca la base: los Claims viajan en el token y se
      pasan explícitamente a cada caso de uso (nada en estado global).
    - Cualquier anomalía de decode termina en TokenInvalid; nunca 500.
    - No loguear secretos ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    account_inactive,
    forbidden,
    invalid_credentials,
    token_expired,
    token_invalid,
    unauthorized,
)
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from .access_policy import ADMIN_TIER, Capability, Decision, authorize
from .users import Claims, User, UserRole

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
_REQUIRED_CLAIMS = ("sub", "role", "exp")

_password_hasher = PasswordHasher()
_bearer = HTTPBearer(auto_error=False, description="JWT de acceso")


@dataclass(frozen=True, slots=True)
class AuthSettings:
    jwt_secret: str
    jwt_access_ttl_minutes: int

    @property
    def ttl_seconds(self) -> int:
        return int(self.jwt_access_ttl_minutes * 60)


def get_auth_settings() -> AuthSettings:
    settings = get_settings()
    return AuthSettings(settings.jwt_secret, settings.jwt_access_ttl_minutes)


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2 (salt aleatorio embebido)."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def authenticate_user(
    users: UserRepository,
    email: str,
    password: str,
    *,
    branch: str | None = None,
    now: datetime | None = None,
) -> User:
    """Valida credenciales y devuelve el principal autenticado.

    Orden de chequeos:
        1. email desconocido o password incorrecto -> InvalidCredentials
        2. cuenta no activa -> AccountInactive
        3. sucursal elegida distinta a la del principal -> 403
    Solo si todo pasa se actualiza last_login (único side effect).
    """
    normalized_email = (email or "").strip().lower()
    if not normalized_email or not password:
        raise invalid_credentials()

    user = users.get_user_by_email(normalized_email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Login fallido", extra={"email": normalized_email})
        raise invalid_credentials()

    if not user.is_active:
        logger.warning("Login de cuenta inactiva", extra={"user_id": user.id})
        raise account_inactive()

    requested_branch = (branch or "").strip()
    if user.branch and requested_branch and requested_branch != user.branch:
        raise forbidden(f"Acceso denegado. Pertenecés a la sucursal {user.branch}.")

    users.touch_last_login(user.id, now or datetime.now(timezone.utc))
    logger.info("Login ok", extra={"user_id": user.id, "role": user.role.value})
    return user


# ---------------------------------------------------------------------------
# Access tokens
# ---------------------------------------------------------------------------


def create_access_token(
    user: User, settings: AuthSettings | None = None, *, now: datetime | None = None
) -> tuple[str, int]:
    """Firma un access token para `user`; devuelve (token, expires_in en segundos)."""
    auth = settings or get_auth_settings()
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(seconds=auth.ttl_seconds)

    token = jwt.encode(
        {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "branch": user.branch,
            "typ": ACCESS_TOKEN_TYPE,
            "iat": issued_at,
            "exp": expires_at,
        },
        auth.jwt_secret,
        algorithm=JWT_ALGORITHM,
    )
    return token, auth.ttl_seconds


def _claims_from_payload(payload: dict) -> Claims:
    if payload.get("typ", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise token_invalid("Tipo de token inválido.")

    branch = payload.get("branch")
    if branch is not None and not isinstance(branch, str):
        raise token_invalid()
    try:
        return Claims(
            user_id=int(payload["sub"]),
            email=str(payload.get("email") or ""),
            role=UserRole(str(payload["role"])),
            branch=branch or None,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise token_invalid() from exc


def decode_access_token(token: str, settings: AuthSettings | None = None) -> Claims:
    """
    Verifica firma y expiración y arma los Claims.

    TokenExpired si venció; cualquier otra anomalía (firma, formato, claims
    faltantes o con tipos inesperados) es TokenInvalid.
    """
    auth = settings or get_auth_settings()
    try:
        payload = jwt.decode(
            token,
            auth.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(_REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as exc:
        raise token_expired() from exc
    except jwt.InvalidTokenError as exc:
        raise token_invalid() from exc
    return _claims_from_payload(payload)


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def optional_claims() -> Callable:
    """Claims si vino `Authorization: Bearer`, None si no vino (inválido => 401)."""

    async def dependency(
        credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    ) -> Claims | None:
        if credentials is None or not credentials.credentials.strip():
            return None
        return decode_access_token(credentials.credentials.strip())

    return dependency


def require_claims() -> Callable:
    maybe = optional_claims()

    async def dependency(claims: Claims | None = Depends(maybe)) -> Claims:
        if claims is None:
            raise unauthorized("Falta token Bearer.")
        return claims

    return dependency


def require_capability(capability: Capability) -> Callable:
    required = require_claims()

    async def dependency(claims: Claims = Depends(required)) -> Claims:
        if authorize(claims, capability) == Decision.DENY:
            logger.info(
                "Acceso denegado",
                extra={"capability": capability.name, "role": claims.role.value},
            )
            raise forbidden("Rol insuficiente.")
        return claims

    return dependency


def require_admin_tier() -> Callable:
    return require_capability(ADMIN_TIER)
