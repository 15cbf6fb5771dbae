"""
===============================================================================
TARJETA CRC — interfaces/api/http/__init__.py
===============================================================================

Responsabilidades:
  - Exponer el router raíz HTTP para portal/api/main.py.

Colaboradores:
  - router.build_router
===============================================================================
"""

from .router import build_router, router

__all__ = ["build_router", "router"]
