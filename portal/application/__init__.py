"""
===============================================================================
APPLICATION LAYER
===============================================================================

Casos de uso del portal (orquestan repositorios + políticas de acceso).

Nota:
  - Los casos de uso se importan desde `usecases/`.
  - Esta capa no conoce FastAPI: devuelve ServiceResult y la API traduce.
===============================================================================
"""
