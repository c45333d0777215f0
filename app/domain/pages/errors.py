"""
Domain-specific errors for the pages bounded context.

No framework imports allowed.
"""


class PageDomainError(Exception):
    """Base error for all pages domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class PageMappingError(PageDomainError):
    """Raised when a persisted page or section row cannot be rehydrated."""

    def __init__(self, page_id: str, reason: str) -> None:
        super().__init__(f"Invalid persisted page {page_id}: {reason}")
        self.page_id = page_id
        self.reason = reason
