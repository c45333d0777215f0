"""
Use case: Update a page's title, description or slug.

Input: UpdatePageSettingsCommand (page_id, creator_id, title?, description?, slug?)
Output: Result[PageResult]
Side effects: Persists the updated page.
Failure cases:
    - Unknown page, or page owned by another creator
    - Invalid field value
    - New slug already used by another page
"""

import logging

from app.application.pages.common import load_owned_page
from app.application.pages.dtos import PageResult, UpdatePageSettingsCommand
from app.domain.pages.entities import normalize_slug
from app.domain.pages.ports import PageRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class UpdatePageSettingsUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: UpdatePageSettingsCommand) -> Result[PageResult]:
        loaded = load_owned_page(self._page_repo, command.page_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        page = loaded.value

        if command.slug is not None:
            slug_result = normalize_slug(command.slug)
            if slug_result.is_failure:
                return Result.fail(slug_result.error)
            new_slug = slug_result.value
            if new_slug != page.slug and self._page_repo.slug_exists(
                new_slug, exclude_page_id=page.id
            ):
                logger.warning("Slug %s already taken", new_slug)
                return Result.fail("Ce slug est deja utilise")

        updated = page.update_settings(
            title=command.title, description=command.description, slug=command.slug
        )
        if updated.is_failure:
            return Result.fail(updated.error)

        self._page_repo.save(page)
        logger.info("Updated settings of page %s", page.id)
        return Result.ok(PageResult.from_entity(page))
