"""
Use case: Delete a page and its sections.

Input: PageActionCommand (page_id, creator_id)
Output: Result[None]
Side effects: Removes the page row (sections cascade).
Failure cases:
    - Unknown page, or page owned by another creator
"""

import logging

from app.application.pages.common import load_owned_page
from app.application.pages.dtos import PageActionCommand
from app.domain.pages.ports import PageRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class DeletePageUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: PageActionCommand) -> Result[None]:
        loaded = load_owned_page(self._page_repo, command.page_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)

        self._page_repo.delete(command.page_id)
        logger.info("Deleted page %s", command.page_id)
        return Result.ok()
