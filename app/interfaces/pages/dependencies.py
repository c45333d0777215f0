"""
Dependency injection for the pages bounded context.

Tests override ``get_page_repository`` with the in-memory adapter.
"""

from fastapi import Depends

from app.application.pages.create_page import CreatePageUseCase
from app.application.pages.delete_page import DeletePageUseCase
from app.application.pages.get_creator_page import (
    GetCreatorPageUseCase,
    ListCreatorPagesUseCase,
)
from app.application.pages.get_public_page import GetPublicPageUseCase
from app.application.pages.manage_sections import (
    AddSectionUseCase,
    RemoveSectionUseCase,
    ReorderSectionsUseCase,
    UpdateSectionUseCase,
)
from app.application.pages.publish_page import PublishPageUseCase, UnpublishPageUseCase
from app.application.pages.update_page_settings import UpdatePageSettingsUseCase
from app.domain.pages.ports import PageRepository
from app.infrastructure.database import get_engine
from app.infrastructure.pages.page_repository import PageRepositoryAdapter


def get_page_repository() -> PageRepository:
    return PageRepositoryAdapter(get_engine())


def get_create_page_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> CreatePageUseCase:
    return CreatePageUseCase(page_repo=repo)


def get_public_page_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> GetPublicPageUseCase:
    return GetPublicPageUseCase(page_repo=repo)


def get_creator_page_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> GetCreatorPageUseCase:
    return GetCreatorPageUseCase(page_repo=repo)


def get_list_creator_pages_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> ListCreatorPagesUseCase:
    return ListCreatorPagesUseCase(page_repo=repo)


def get_update_page_settings_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> UpdatePageSettingsUseCase:
    return UpdatePageSettingsUseCase(page_repo=repo)


def get_publish_page_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> PublishPageUseCase:
    return PublishPageUseCase(page_repo=repo)


def get_unpublish_page_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> UnpublishPageUseCase:
    return UnpublishPageUseCase(page_repo=repo)


def get_delete_page_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> DeletePageUseCase:
    return DeletePageUseCase(page_repo=repo)


def get_add_section_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> AddSectionUseCase:
    return AddSectionUseCase(page_repo=repo)


def get_update_section_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> UpdateSectionUseCase:
    return UpdateSectionUseCase(page_repo=repo)


def get_remove_section_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> RemoveSectionUseCase:
    return RemoveSectionUseCase(page_repo=repo)


def get_reorder_sections_use_case(
    repo: PageRepository = Depends(get_page_repository),
) -> ReorderSectionsUseCase:
    return ReorderSectionsUseCase(page_repo=repo)
