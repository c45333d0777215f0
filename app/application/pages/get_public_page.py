"""
Use case: Get the public view of a published page.

Input: GetPublicPageQuery (slug)
Output: Result[PublicPageResult]
Side effects: None (read-only query).
Failure cases:
    - Missing slug
    - No PUBLISHED page with that slug
"""

from app.application.pages.common import PAGE_NOT_FOUND
from app.application.pages.dtos import GetPublicPageQuery, PublicPageResult
from app.domain.pages.ports import PageRepository
from app.shared.domain import Result


class GetPublicPageUseCase:
    """Visitor-facing lookup. Drafts are reported as not found."""

    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, query: GetPublicPageQuery) -> Result[PublicPageResult]:
        if not query.slug or not query.slug.strip():
            return Result.fail("Slug est requis")

        page = self._page_repo.find_published_by_slug(query.slug.strip().lower())
        if page is None:
            return Result.fail(PAGE_NOT_FOUND)
        return Result.ok(PublicPageResult.from_entity(page))
