"""
FastAPI router for the pages bounded context.

Owner routes act on the caller's pages; ``GET /public/{slug}`` is
open to visitors and only serves published pages.
"""

from fastapi import APIRouter, Depends, Response

from app.application.pages.create_page import CreatePageUseCase
from app.application.pages.delete_page import DeletePageUseCase
from app.application.pages.dtos import (
    AddSectionCommand,
    CreatePageCommand,
    GetCreatorPageQuery,
    GetPublicPageQuery,
    ListCreatorPagesQuery,
    PageActionCommand,
    RemoveSectionCommand,
    ReorderSectionsCommand,
    UpdatePageSettingsCommand,
    UpdateSectionCommand,
)
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
from app.interfaces.auth import CurrentUser, require_creator
from app.interfaces.common import unwrap
from app.interfaces.pages.dependencies import (
    get_add_section_use_case,
    get_create_page_use_case,
    get_creator_page_use_case,
    get_delete_page_use_case,
    get_list_creator_pages_use_case,
    get_public_page_use_case,
    get_publish_page_use_case,
    get_remove_section_use_case,
    get_reorder_sections_use_case,
    get_unpublish_page_use_case,
    get_update_page_settings_use_case,
    get_update_section_use_case,
)
from app.interfaces.pages.schemas import (
    AddSectionRequest,
    CreatePageRequest,
    PageResponse,
    PublicPageResponse,
    ReorderSectionsRequest,
    ReorderSectionsResponse,
    SectionResponse,
    UpdatePageSettingsRequest,
    UpdateSectionRequest,
)
from app.interfaces.schemas import ErrorResponse

router = APIRouter(prefix="/pages", tags=["pages"])

_ERRORS = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=PageResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Create a page",
)
def create_page(
    request: CreatePageRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: CreatePageUseCase = Depends(get_create_page_use_case),
) -> PageResponse:
    command = CreatePageCommand(
        creator_id=user.id,
        slug=request.slug,
        title=request.title,
        description=request.description,
        template_id=request.template_id,
    )
    return PageResponse.model_validate(unwrap(use_case.execute(command)))


@router.get(
    "",
    response_model=list[PageResponse],
    responses=_ERRORS,
    summary="List my pages",
)
def list_my_pages(
    user: CurrentUser = Depends(require_creator),
    use_case: ListCreatorPagesUseCase = Depends(get_list_creator_pages_use_case),
) -> list[PageResponse]:
    pages = unwrap(use_case.execute(ListCreatorPagesQuery(creator_id=user.id)))
    return [PageResponse.model_validate(p) for p in pages]


@router.get(
    "/public/{slug}",
    response_model=PublicPageResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Get a published page",
    description="Public storefront view: visible sections only.",
)
def get_public_page(
    slug: str,
    use_case: GetPublicPageUseCase = Depends(get_public_page_use_case),
) -> PublicPageResponse:
    return PublicPageResponse.model_validate(
        unwrap(use_case.execute(GetPublicPageQuery(slug=slug)))
    )


@router.get(
    "/{page_id}",
    response_model=PageResponse,
    responses=_ERRORS,
    summary="Get one of my pages",
)
def get_my_page(
    page_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: GetCreatorPageUseCase = Depends(get_creator_page_use_case),
) -> PageResponse:
    query = GetCreatorPageQuery(page_id=page_id, creator_id=user.id)
    return PageResponse.model_validate(unwrap(use_case.execute(query)))


@router.patch(
    "/{page_id}",
    response_model=PageResponse,
    responses=_ERRORS,
    summary="Update page settings",
)
def update_page_settings(
    page_id: str,
    request: UpdatePageSettingsRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: UpdatePageSettingsUseCase = Depends(get_update_page_settings_use_case),
) -> PageResponse:
    command = UpdatePageSettingsCommand(
        page_id=page_id,
        creator_id=user.id,
        title=request.title,
        description=request.description,
        slug=request.slug,
    )
    return PageResponse.model_validate(unwrap(use_case.execute(command)))


@router.delete(
    "/{page_id}",
    status_code=204,
    responses=_ERRORS,
    summary="Delete a page",
)
def delete_page(
    page_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: DeletePageUseCase = Depends(get_delete_page_use_case),
) -> Response:
    unwrap(use_case.execute(PageActionCommand(page_id=page_id, creator_id=user.id)))
    return Response(status_code=204)


@router.post(
    "/{page_id}/publish",
    response_model=PageResponse,
    responses=_ERRORS,
    summary="Publish a page",
)
def publish_page(
    page_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: PublishPageUseCase = Depends(get_publish_page_use_case),
) -> PageResponse:
    command = PageActionCommand(page_id=page_id, creator_id=user.id)
    return PageResponse.model_validate(unwrap(use_case.execute(command)))


@router.post(
    "/{page_id}/unpublish",
    response_model=PageResponse,
    responses=_ERRORS,
    summary="Unpublish a page",
)
def unpublish_page(
    page_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: UnpublishPageUseCase = Depends(get_unpublish_page_use_case),
) -> PageResponse:
    command = PageActionCommand(page_id=page_id, creator_id=user.id)
    return PageResponse.model_validate(unwrap(use_case.execute(command)))


@router.post(
    "/{page_id}/sections",
    response_model=SectionResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Add a section",
)
def add_section(
    page_id: str,
    request: AddSectionRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: AddSectionUseCase = Depends(get_add_section_use_case),
) -> SectionResponse:
    command = AddSectionCommand(
        page_id=page_id,
        creator_id=user.id,
        type=request.type,
        title=request.title,
        content=request.content,
        position=request.position,
    )
    return SectionResponse.model_validate(unwrap(use_case.execute(command)))


@router.put(
    "/{page_id}/sections/order",
    response_model=ReorderSectionsResponse,
    responses=_ERRORS,
    summary="Reorder sections",
    description="Positions follow the order of ``section_ids``.",
)
def reorder_sections(
    page_id: str,
    request: ReorderSectionsRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: ReorderSectionsUseCase = Depends(get_reorder_sections_use_case),
) -> ReorderSectionsResponse:
    command = ReorderSectionsCommand(
        page_id=page_id, creator_id=user.id, section_ids=request.section_ids
    )
    return ReorderSectionsResponse.model_validate(unwrap(use_case.execute(command)))


@router.patch(
    "/{page_id}/sections/{section_id}",
    response_model=SectionResponse,
    responses=_ERRORS,
    summary="Update a section",
)
def update_section(
    page_id: str,
    section_id: str,
    request: UpdateSectionRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: UpdateSectionUseCase = Depends(get_update_section_use_case),
) -> SectionResponse:
    command = UpdateSectionCommand(
        page_id=page_id,
        creator_id=user.id,
        section_id=section_id,
        title=request.title,
        content=request.content,
        is_visible=request.is_visible,
    )
    return SectionResponse.model_validate(unwrap(use_case.execute(command)))


@router.delete(
    "/{page_id}/sections/{section_id}",
    status_code=204,
    responses=_ERRORS,
    summary="Remove a section",
)
def remove_section(
    page_id: str,
    section_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: RemoveSectionUseCase = Depends(get_remove_section_use_case),
) -> Response:
    command = RemoveSectionCommand(page_id=page_id, creator_id=user.id, section_id=section_id)
    unwrap(use_case.execute(command))
    return Response(status_code=204)
