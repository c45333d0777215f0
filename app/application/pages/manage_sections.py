"""
Use cases: Add, edit, remove and reorder the sections of a page.

Every use case loads the page on behalf of its owner first, so the
shared failures are "Page non trouvee" and "Acces non autorise".
Positions stay contiguous: the CreatorPage aggregate shifts the other
sections on insert and removal.
"""

import logging

from app.application.pages.common import load_owned_page
from app.application.pages.dtos import (
    AddSectionCommand,
    RemoveSectionCommand,
    ReorderSectionsCommand,
    ReorderSectionsResult,
    SectionResult,
    UpdateSectionCommand,
)
from app.domain.pages.entities import SectionType
from app.domain.pages.ports import PageRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class AddSectionUseCase:
    """Insert a typed section, at the end unless a position is given."""

    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: AddSectionCommand) -> Result[SectionResult]:
        loaded = load_owned_page(self._page_repo, command.page_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        page = loaded.value

        type_result = SectionType.from_value(command.type)
        if type_result.is_failure:
            return Result.fail(type_result.error)

        added = page.add_section(
            type=type_result.value,
            title=command.title,
            content=command.content,
            position=command.position,
        )
        if added.is_failure:
            return Result.fail(added.error)

        self._page_repo.save(page)
        section = added.value
        logger.info(
            "Added %s section %s to page %s at position %d",
            section.type.value,
            section.id,
            page.id,
            section.position,
        )
        return Result.ok(SectionResult.from_entity(section))


class UpdateSectionUseCase:
    """Apply title, content and visibility changes to one section."""

    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: UpdateSectionCommand) -> Result[SectionResult]:
        loaded = load_owned_page(self._page_repo, command.page_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        page = loaded.value

        section = page.get_section(command.section_id)
        if section is None:
            return Result.fail("Section non trouvee")

        if command.title is not None:
            titled = section.update_title(command.title)
            if titled.is_failure:
                return Result.fail(titled.error)
        if command.content is not None:
            section.update_content(command.content)
        if command.is_visible is True:
            section.show()
        elif command.is_visible is False:
            section.hide()

        self._page_repo.save(page)
        logger.info("Updated section %s of page %s", section.id, page.id)
        return Result.ok(SectionResult.from_entity(section))


class RemoveSectionUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: RemoveSectionCommand) -> Result[None]:
        loaded = load_owned_page(self._page_repo, command.page_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        page = loaded.value

        removed = page.remove_section(command.section_id)
        if removed.is_failure:
            return Result.fail(removed.error)

        self._page_repo.save(page)
        logger.info("Removed section %s from page %s", command.section_id, page.id)
        return Result.ok()


class ReorderSectionsUseCase:
    def __init__(self, page_repo: PageRepository) -> None:
        self._page_repo = page_repo

    def execute(self, command: ReorderSectionsCommand) -> Result[ReorderSectionsResult]:
        loaded = load_owned_page(self._page_repo, command.page_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        page = loaded.value

        reordered = page.reorder_sections(list(command.section_ids))
        if reordered.is_failure:
            return Result.fail(reordered.error)

        self._page_repo.save(page)
        logger.info("Reordered %d sections of page %s", len(command.section_ids), page.id)
        return Result.ok(
            ReorderSectionsResult(page_id=page.id, section_ids=list(command.section_ids))
        )
