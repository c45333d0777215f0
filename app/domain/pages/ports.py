"""
Port interfaces (ABCs) for the pages bounded context.

Infrastructure adapters implement these interfaces.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.pages.entities import CreatorPage


class PageRepository(ABC):
    """Port for persisting creator pages together with their sections."""

    @abstractmethod
    def find_by_id(self, page_id: str) -> Optional[CreatorPage]:
        raise NotImplementedError

    @abstractmethod
    def find_by_slug(self, slug: str) -> Optional[CreatorPage]:
        raise NotImplementedError

    @abstractmethod
    def find_by_creator_id(self, creator_id: str) -> list[CreatorPage]:
        """Return every page of a creator, most recently updated first."""
        raise NotImplementedError

    @abstractmethod
    def find_published_by_slug(self, slug: str) -> Optional[CreatorPage]:
        raise NotImplementedError

    @abstractmethod
    def save(self, page: CreatorPage) -> None:
        """Upsert the page, drop removed sections and upsert the others."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, page_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def slug_exists(self, slug: str, exclude_page_id: Optional[str] = None) -> bool:
        raise NotImplementedError
