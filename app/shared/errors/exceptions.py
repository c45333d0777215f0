"""
HTTP-facing exceptions raised by the interface layer.

Use cases report business failures as Result values; routers turn a
failed Result into ActionFailedError. Authentication and authorization
guards raise the other two.
"""


class ActionFailedError(Exception):
    """A use case refused the request. ``message`` is shown to the user."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotAuthenticatedError(Exception):
    """The request carries no user identity."""


class ForbiddenError(Exception):
    """The authenticated user lacks the required role."""

    def __init__(self, required_role: str) -> None:
        self.required_role = required_role
        super().__init__(f"role {required_role} required")
