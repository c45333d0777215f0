"""
Interfaces layer package.

One sub-package per bounded context, each with its FastAPI router,
Pydantic schemas and dependency wiring. Routers only translate HTTP
to use case commands and results back to HTTP.
"""
