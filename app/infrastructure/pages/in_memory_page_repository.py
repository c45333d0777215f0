"""
Adapter: In-memory page repository.

Implements PageRepository port with a plain dict.
Used by tests and by local runs without a database.
"""

import copy
from typing import Optional

from app.domain.pages.entities import CreatorPage, PageStatus
from app.domain.pages.ports import PageRepository


class InMemoryPageRepository(PageRepository):
    """Dict-backed repository. Stores copies so callers cannot mutate state."""

    def __init__(self) -> None:
        self._items: dict[str, CreatorPage] = {}

    def save(self, page: CreatorPage) -> None:
        self._items[page.id] = copy.deepcopy(page)

    def delete(self, page_id: str) -> None:
        self._items.pop(page_id, None)

    def find_by_id(self, page_id: str) -> Optional[CreatorPage]:
        page = self._items.get(page_id)
        return copy.deepcopy(page) if page else None

    def find_by_slug(self, slug: str) -> Optional[CreatorPage]:
        for page in self._items.values():
            if page.slug == slug:
                return copy.deepcopy(page)
        return None

    def find_published_by_slug(self, slug: str) -> Optional[CreatorPage]:
        page = self.find_by_slug(slug)
        if page is None or page.status is not PageStatus.PUBLISHED:
            return None
        return page

    def find_by_creator_id(self, creator_id: str) -> list[CreatorPage]:
        pages = [p for p in self._items.values() if p.creator_id == creator_id]
        pages.sort(key=lambda p: p.updated_at, reverse=True)
        return [copy.deepcopy(p) for p in pages]

    def slug_exists(self, slug: str, exclude_page_id: Optional[str] = None) -> bool:
        return any(
            p.slug == slug and p.id != exclude_page_id for p in self._items.values()
        )
