"""
===============================================================================
TARJETA CRC — portal/crosscutting/logger.py
===============================================================================

Componentes:
    PortalJsonFormatter, PortalTextFormatter, configure_logger(), `logger`

Responsabilidades:
    - Una línea JSON por evento (timestamp, nivel, mensaje, origen).
    - Sumar los campos de correlación del request (portal/context.py).
    - Copiar los `extra=` del caller, ocultando credenciales (passwords,
      hashes, tokens, secretos) y acortando strings largos.
    - Modo texto legible para desarrollo (LOG_JSON=false).

Colaboradores:
    - portal/context.py (log_fields)
    - crosscutting/config.py (log_level / log_json)

Notas:
    - El logger "portal-api" propaga al root: pytest (caplog) lo captura.
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

LOGGER_NAME = "portal-api"

MASK = "[oculto]"
MAX_VALUE_CHARS = 2_000

_SECRET_HINTS = ("password", "secret", "token", "authorization", "hash")

# Atributos propios de LogRecord (no son `extra=`).
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("x", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _is_secret(key: str) -> bool:
    lowered = key.lower()
    return any(hint in lowered for hint in _SECRET_HINTS)


def scrub(key: str, value: Any) -> Any:
    """Valor apto para JSON; credenciales enmascaradas."""
    if _is_secret(key):
        return MASK
    if isinstance(value, str):
        if len(value) > MAX_VALUE_CHARS:
            return f"{value[:MAX_VALUE_CHARS]}... ({len(value)} chars)"
        return value
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, dict):
        return {str(k): scrub(str(k), v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [scrub(key, v) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: scrub(key, value)
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


def _request_fields() -> dict[str, str]:
    from ..context import log_fields

    return log_fields()


class PortalJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "src": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update(_request_fields())
        entry.update(record_extras(record))
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class PortalTextFormatter(logging.Formatter):
    """`NIVEL mensaje [rid] k=v ...` para la consola de desarrollo."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [f"{record.levelname:<7}", record.getMessage()]
        rid = _request_fields().get("request_id")
        if rid:
            parts.append(f"[{rid}]")
        parts.extend(f"{k}={v}" for k, v in record_extras(record).items())
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logger(
    *, level: str | None = None, json_output: bool | None = None
) -> logging.Logger:
    """
    Configura (una sola vez) el handler a stdout de `portal-api`.

    Sin argumentos toma log_level / log_json de Settings; si Settings no carga
    (tooling sin DATABASE_URL) queda INFO + JSON.
    """
    if level is None or json_output is None:
        try:
            from .config import get_settings

            settings = get_settings()
            level = level or settings.log_level
            json_output = settings.log_json if json_output is None else json_output
        except Exception:
            level = level or "INFO"
            json_output = True if json_output is None else json_output

    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            PortalJsonFormatter() if json_output else PortalTextFormatter()
        )
        log.addHandler(handler)
    return log


logger = configure_logger()
