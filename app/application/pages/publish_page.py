"""
Use cases: Publish and unpublish a page.

Input: PageActionCommand (page_id, creator_id)
Output: Result[PageResult]
Side effects: Persists the new status.
Failure cases:
    - Unknown page, or page owned by another creator
    - Page already in the requested status
"""

import logging

from app.application.pages.common import load_owned_page
from app.application.pages.dtos import PageActionCommand, PageResult
from app.domain.pages.ports import PageRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class PublishPageUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: PageActionCommand) -> Result[PageResult]:
        loaded = load_owned_page(self._page_repo, command.page_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        page = loaded.value

        published = page.publish()
        if published.is_failure:
            return Result.fail(published.error)

        self._page_repo.save(page)
        logger.info("Published page %s (%s)", page.id, page.slug)
        return Result.ok(PageResult.from_entity(page))


class UnpublishPageUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: PageActionCommand) -> Result[PageResult]:
        loaded = load_owned_page(self._page_repo, command.page_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        page = loaded.value

        unpublished = page.unpublish()
        if unpublished.is_failure:
            return Result.fail(unpublished.error)

        self._page_repo.save(page)
        logger.info("Unpublished page %s (%s)", page.id, page.slug)
        return Result.ok(PageResult.from_entity(page))
