"""
Domain-specific errors for the products bounded context.

No framework imports allowed.
"""


class ProductDomainError(Exception):
    """Base error for all products domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ProductMappingError(ProductDomainError):
    """Raised when a persisted catalog row cannot be rehydrated."""

    def __init__(self, entity_id: str, reason: str) -> None:
        super().__init__(f"Invalid persisted catalog entry {entity_id}: {reason}")
        self.entity_id = entity_id
        self.reason = reason
