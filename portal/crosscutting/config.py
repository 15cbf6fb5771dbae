"""
===============================================================================
TARJETA CRC — portal/crosscutting/config.py
===============================================================================

Componente:
  Settings del portal (pydantic-settings, leídos del entorno / .env)

Responsabilidades:
  - Tipar y validar variables de entorno al arrancar.
  - Defaults de desarrollo local (JWT de 24 h = una jornada por token).
  - Rechazar secretos débiles cuando APP_ENV=production.

Colaboradores:
  - api/main.py (CORS, pool, uploads)
  - container.py (repos en memoria vs Postgres según app_env)
  - identity/auth_users.py (secreto y TTL del JWT)
===============================================================================
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_WEAK_SECRETS = frozenset({"dev-secret", "changeme", "change-me", "secret"})
_MIN_SECRET_LENGTH = 32
_TEST_ENVS = frozenset({"test", "testing", "ci"})


class Settings(BaseSettings):
    """Configuración del proceso; solo `database_url` es obligatoria."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str
    app_env: str = "development"

    # CORS
    allowed_origins: str = "http://localhost:5173,http://localhost:3000"
    cors_allow_credentials: bool = False

    # JWT
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 24 * 60

    # Pool psycopg
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 15000

    # Galerías de eventos
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    max_event_images: int = 10
    max_upload_bytes: int = 10 * 1024 * 1024

    # Etiqueta de sucursal para contenido de toda la empresa
    default_content_branch: str = "All"

    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("jwt_access_ttl_minutes")
    @classmethod
    def _ttl_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("jwt_access_ttl_minutes must be greater than 0")
        return value

    @field_validator("db_pool_min_size", "db_pool_max_size", "max_event_images")
    @classmethod
    def _count_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("value must be greater than 0")
        return value

    @field_validator("upload_url_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        trimmed = (value or "").strip().strip("/")
        return f"/{trimmed}" if trimmed else "/uploads"

    @model_validator(mode="after")
    def _check_consistency(self) -> "Settings":
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) exceeds "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        if self.is_production():
            self._require_strong_secret()
        return self

    def _require_strong_secret(self) -> None:
        secret = (self.jwt_secret or "").strip()
        if secret in _WEAK_SECRETS or not secret:
            raise ValueError("JWT_SECRET is missing or uses a default value")
        if len(secret) < _MIN_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET must be at least {_MIN_SECRET_LENGTH} characters"
            )

    def _env(self) -> str:
        return self.app_env.strip().lower()

    def is_production(self) -> bool:
        return self._env() == "production"

    def is_test(self) -> bool:
        return self._env() in _TEST_ENVS

    def get_allowed_origins_list(self) -> list[str]:
        """CSV de ALLOWED_ORIGINS -> lista sin entradas vacías."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
