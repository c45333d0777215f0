"""
Adapter: Creator directory backed by the storefront pages.

Answers the products CreatorDirectory port: a creator is reachable by
the slug of one of their published pages.
"""

from typing import Optional

from app.domain.pages.ports import PageRepository
from app.domain.products.ports import CreatorDirectory


class PageCreatorDirectory(CreatorDirectory):
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def find_creator_id_by_slug(self, slug: str) -> Optional[str]:
        page = self._page_repo.find_published_by_slug(slug.strip().lower())
        return page.creator_id if page else None
