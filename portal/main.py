"""
Name: Backend ASGI Entrypoint (portal.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path used by uvicorn and tests stable

Notes/Constraints:
  - No configuration or IO should live here
  - Run with: uvicorn portal.main:app
"""

from portal.api.main import app

__all__ = ["app"]
