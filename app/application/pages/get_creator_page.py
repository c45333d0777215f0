"""
Use cases: Read a creator's own pages.

GetCreatorPageUseCase
    Input: GetCreatorPageQuery (page_id, creator_id)
    Output: Result[PageResult] with every section, hidden ones included
    Failure cases: unknown page, page owned by another creator

ListCreatorPagesUseCase
    Input: ListCreatorPagesQuery (creator_id)
    Output: Result[list[PageResult]]
"""

from app.application.pages.common import load_owned_page
from app.application.pages.dtos import (
    GetCreatorPageQuery,
    ListCreatorPagesQuery,
    PageResult,
)
from app.domain.pages.ports import PageRepository
from app.shared.domain import Result


class GetCreatorPageUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, query: GetCreatorPageQuery) -> Result[PageResult]:
        return load_owned_page(self._page_repo, query.page_id, query.creator_id).map(
            PageResult.from_entity
        )


class ListCreatorPagesUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, query: ListCreatorPagesQuery) -> Result[list[PageResult]]:
        if not query.creator_id or not query.creator_id.strip():
            return Result.fail("Creator ID est requis")
        pages = self._page_repo.find_by_creator_id(query.creator_id)
        return Result.ok([PageResult.from_entity(p) for p in pages])
