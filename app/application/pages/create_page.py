"""
Use case: Create a creator page.

Input: CreatePageCommand (creator_id, slug, title, description?, template_id?)
Output: Result[PageResult]
Side effects: Persists a new DRAFT page.
Failure cases:
    - Invalid creator id, slug, title or description
    - Slug already used by another page
"""

import logging

from app.application.pages.dtos import CreatePageCommand, PageResult
from app.domain.pages.entities import CreatorPage
from app.domain.pages.ports import PageRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class CreatePageUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: CreatePageCommand) -> Result[PageResult]:
        created = CreatorPage.create(
            creator_id=command.creator_id,
            slug=command.slug,
            title=command.title,
            description=command.description,
            template_id=command.template_id,
        )
        if created.is_failure:
            return Result.fail(created.error)
        page = created.value

        if self._page_repo.slug_exists(page.slug):
            logger.warning("Slug %s already taken", page.slug)
            return Result.fail("Ce slug est deja utilise")

        self._page_repo.save(page)
        logger.info("Created page %s (%s) for creator %s", page.id, page.slug, page.creator_id)
        return Result.ok(PageResult.from_entity(page))
