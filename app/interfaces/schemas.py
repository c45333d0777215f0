"""
Pydantic schemas shared by every router.
"""

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness answer.

    Attributes:
        integrations: Whether each integration has its credentials.
        missing: Names of the integrations that do not.
    """

    status: str
    service: str
    version: str
    integrations: dict[str, bool]
    missing: list[str]


class ErrorResponse(BaseModel):
    """Standard error response schema.

    Attributes:
        error: Short, stable error label.
        detail: User-facing message, when there is one.
    """

    error: str
    detail: Optional[str] = None
