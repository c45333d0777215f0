"""
FastAPI router for the products bounded context.

All routes delegate to use cases. No business logic here.
Creator routes cover products and projects; the catalog router is
unauthenticated and only serves published products.
Image uploads are multipart and rate limited with HEAVY_RATE_LIMIT;
their use cases run in the threadpool since the Cloudinary SDK blocks.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile
from starlette.concurrency import run_in_threadpool

from app.application.products.create_product import CreateProductUseCase
from app.application.products.create_project import CreateProjectUseCase
from app.application.products.create_variant import CreateVariantUseCase
from app.application.products.delete_product import DeleteProductUseCase
from app.application.products.delete_product_image import DeleteProductImageUseCase
from app.application.products.delete_project import DeleteProjectUseCase
from app.application.products.delete_variant import DeleteVariantUseCase
from app.application.products.get_public_product import GetPublicProductUseCase
from app.application.products.dtos import (
    DEFAULT_PAGE_SIZE,
    AddVariantImageCommand,
    CreateProductCommand,
    CreateProjectCommand,
    CreateVariantCommand,
    DeleteProductImageCommand,
    ListProductsByProjectQuery,
    ListProductsQuery,
    ListProjectsQuery,
    ListPublicProductsQuery,
    ListVariantsQuery,
    ProductActionCommand,
    ProjectActionCommand,
    RemoveVariantImageCommand,
    ReorderProductImagesCommand,
    UpdateProductCommand,
    UpdateProjectCommand,
    UpdateVariantCommand,
    UploadProductImageCommand,
    UpsertSkuCommand,
    VariantActionCommand,
)
from app.application.products.list_products import ListProductsUseCase
from app.application.products.list_products_by_project import ListProductsByProjectUseCase
from app.application.products.list_projects import ListProjectsUseCase
from app.application.products.list_public_products import ListPublicProductsUseCase
from app.application.products.list_variants import ListVariantsUseCase
from app.application.products.publish_product import (
    PublishProductUseCase,
    UnpublishProductUseCase,
)
from app.application.products.reorder_product_images import ReorderProductImagesUseCase
from app.application.products.update_product import UpdateProductUseCase
from app.application.products.update_project import UpdateProjectUseCase
from app.application.products.update_variant import UpdateVariantUseCase
from app.application.products.upload_product_image import UploadProductImageUseCase
from app.application.products.upsert_sku import UpsertSkuUseCase
from app.application.products.variant_images import (
    AddVariantImageUseCase,
    RemoveVariantImageUseCase,
)
from app.interfaces.auth import CurrentUser, require_creator
from app.interfaces.common import unwrap
from app.interfaces.products.dependencies import (
    get_add_variant_image_use_case,
    get_create_product_use_case,
    get_create_project_use_case,
    get_create_variant_use_case,
    get_delete_product_image_use_case,
    get_delete_product_use_case,
    get_delete_project_use_case,
    get_delete_variant_use_case,
    get_list_products_by_project_use_case,
    get_list_products_use_case,
    get_list_projects_use_case,
    get_list_public_products_use_case,
    get_list_variants_use_case,
    get_public_product_use_case,
    get_publish_product_use_case,
    get_remove_variant_image_use_case,
    get_reorder_product_images_use_case,
    get_unpublish_product_use_case,
    get_update_product_use_case,
    get_update_project_use_case,
    get_update_variant_use_case,
    get_upload_product_image_use_case,
    get_upsert_sku_use_case,
)
from app.interfaces.products.schemas import (
    CreateProductRequest,
    CreateProjectRequest,
    CreateVariantRequest,
    DeleteProjectResponse,
    ProductImageResponse,
    ProductPageResponse,
    ProductResponse,
    ProjectListResponse,
    ProjectProductsResponse,
    ProjectResponse,
    PublicProductDetailResponse,
    PublicProductPageResponse,
    PublishProductResponse,
    ReorderImagesRequest,
    SkuResponse,
    UpdateProductRequest,
    UpdateProjectRequest,
    UpdateVariantRequest,
    UpsertSkuRequest,
    VariantImageResponse,
    VariantResponse,
)
from app.interfaces.schemas import ErrorResponse
from app.shared.security.rate_limiting import HEAVY_RATE_LIMIT, limiter

router = APIRouter(prefix="/products", tags=["products"])
projects_router = APIRouter(prefix="/projects", tags=["projects"])
catalog_router = APIRouter(prefix="/catalog", tags=["catalog"])

_ERRORS = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}


# ── Products ─────────────────────────────────────────────────────────


@router.post(
    "",
    response_model=ProductResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Create a product",
    description="Create a DRAFT product; the price is given in euros.",
)
def create_product(
    request: CreateProductRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> ProductResponse:
    command = CreateProductCommand(
        creator_id=user.id,
        name=request.name,
        price=request.price,
        description=request.description,
        project_id=request.project_id,
    )
    return ProductResponse.model_validate(unwrap(use_case.execute(command)))


@router.get(
    "",
    response_model=ProductPageResponse,
    responses=_ERRORS,
    summary="List my products",
)
def list_products(
    status: Optional[str] = Query(None, description="DRAFT, PUBLISHED or ARCHIVED"),
    project_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Match on the product name"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    user: CurrentUser = Depends(require_creator),
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
) -> ProductPageResponse:
    query = ListProductsQuery(
        creator_id=user.id,
        status=status,
        project_id=project_id,
        search=search,
        page=page,
        limit=limit,
    )
    return ProductPageResponse.model_validate(unwrap(use_case.execute(query)))


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses=_ERRORS,
    summary="Update a product",
)
def update_product(
    product_id: str,
    request: UpdateProductRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
) -> ProductResponse:
    command = UpdateProductCommand(
        product_id=product_id,
        creator_id=user.id,
        name=request.name,
        description=request.description,
        price=request.price,
        project_id=request.project_id,
        remove_project=request.remove_project,
    )
    return ProductResponse.model_validate(unwrap(use_case.execute(command)))


@router.delete(
    "/{product_id}",
    status_code=204,
    responses=_ERRORS,
    summary="Delete a product",
    description="Delete the product with its variants, images and SKUs.",
)
def delete_product(
    product_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
) -> Response:
    unwrap(use_case.execute(ProductActionCommand(product_id=product_id, creator_id=user.id)))
    return Response(status_code=204)


@router.post(
    "/{product_id}/publish",
    response_model=PublishProductResponse,
    responses=_ERRORS,
    summary="Publish a product",
    description="Refused when the plan's product limit is reached.",
)
def publish_product(
    product_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: PublishProductUseCase = Depends(get_publish_product_use_case),
) -> PublishProductResponse:
    command = ProductActionCommand(product_id=product_id, creator_id=user.id)
    return PublishProductResponse.model_validate(unwrap(use_case.execute(command)))


@router.post(
    "/{product_id}/unpublish",
    response_model=ProductResponse,
    responses=_ERRORS,
    summary="Unpublish a product",
)
def unpublish_product(
    product_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: UnpublishProductUseCase = Depends(get_unpublish_product_use_case),
) -> ProductResponse:
    command = ProductActionCommand(product_id=product_id, creator_id=user.id)
    return ProductResponse.model_validate(unwrap(use_case.execute(command)))


# ── Variants and SKUs ────────────────────────────────────────────────


@router.get(
    "/{product_id}/variants",
    response_model=list[VariantResponse],
    responses=_ERRORS,
    summary="List the variants of a product",
)
def list_variants(
    product_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: ListVariantsUseCase = Depends(get_list_variants_use_case),
) -> list[VariantResponse]:
    variants = unwrap(
        use_case.execute(ListVariantsQuery(product_id=product_id, creator_id=user.id))
    )
    return [VariantResponse.model_validate(v) for v in variants]


@router.post(
    "/{product_id}/variants",
    response_model=VariantResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Add a variant",
)
def create_variant(
    product_id: str,
    request: CreateVariantRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: CreateVariantUseCase = Depends(get_create_variant_use_case),
) -> VariantResponse:
    command = CreateVariantCommand(
        product_id=product_id,
        creator_id=user.id,
        name=request.name,
        stock=request.stock,
        sku=request.sku,
        price_override=request.price_override,
        color=request.color,
        color_code=request.color_code,
    )
    return VariantResponse.model_validate(unwrap(use_case.execute(command)))


@router.patch(
    "/{product_id}/variants/{variant_id}",
    response_model=VariantResponse,
    responses=_ERRORS,
    summary="Update a variant",
)
def update_variant(
    product_id: str,
    variant_id: str,
    request: UpdateVariantRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: UpdateVariantUseCase = Depends(get_update_variant_use_case),
) -> VariantResponse:
    command = UpdateVariantCommand(
        variant_id=variant_id,
        product_id=product_id,
        creator_id=user.id,
        name=request.name,
        stock=request.stock,
        sku=request.sku,
        price_override=request.price_override,
        remove_price_override=request.remove_price_override,
        color=request.color,
        color_code=request.color_code,
        remove_color=request.remove_color,
    )
    return VariantResponse.model_validate(unwrap(use_case.execute(command)))


@router.delete(
    "/{product_id}/variants/{variant_id}",
    status_code=204,
    responses=_ERRORS,
    summary="Delete a variant",
    description="The last variant of a product cannot be deleted.",
)
def delete_variant(
    product_id: str,
    variant_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: DeleteVariantUseCase = Depends(get_delete_variant_use_case),
) -> Response:
    command = VariantActionCommand(
        variant_id=variant_id, product_id=product_id, creator_id=user.id
    )
    unwrap(use_case.execute(command))
    return Response(status_code=204)


@router.put(
    "/{product_id}/skus",
    response_model=SkuResponse,
    responses=_ERRORS,
    summary="Set the stock of a variant/size combination",
)
def upsert_sku(
    product_id: str,
    request: UpsertSkuRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: UpsertSkuUseCase = Depends(get_upsert_sku_use_case),
) -> SkuResponse:
    command = UpsertSkuCommand(
        product_id=product_id,
        creator_id=user.id,
        stock=request.stock,
        variant_id=request.variant_id,
        size=request.size,
    )
    return SkuResponse.model_validate(unwrap(use_case.execute(command)))


@router.post(
    "/{product_id}/variants/{variant_id}/images",
    response_model=VariantImageResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Upload a variant image",
)
@limiter.limit(HEAVY_RATE_LIMIT)
async def add_variant_image(
    request: Request,
    product_id: str,
    variant_id: str,
    file: UploadFile = File(...),
    user: CurrentUser = Depends(require_creator),
    use_case: AddVariantImageUseCase = Depends(get_add_variant_image_use_case),
) -> VariantImageResponse:
    command = AddVariantImageCommand(
        product_id=product_id,
        variant_id=variant_id,
        creator_id=user.id,
        data=await file.read(),
        filename=file.filename or "",
    )
    result = await run_in_threadpool(use_case.execute, command)
    return VariantImageResponse.model_validate(unwrap(result))


@router.delete(
    "/{product_id}/variants/{variant_id}/images",
    response_model=VariantImageResponse,
    responses=_ERRORS,
    summary="Remove a variant image",
)
def remove_variant_image(
    product_id: str,
    variant_id: str,
    url: str = Query(..., description="URL of the image to remove"),
    user: CurrentUser = Depends(require_creator),
    use_case: RemoveVariantImageUseCase = Depends(get_remove_variant_image_use_case),
) -> VariantImageResponse:
    command = RemoveVariantImageCommand(
        product_id=product_id, variant_id=variant_id, creator_id=user.id, url=url
    )
    return VariantImageResponse.model_validate(unwrap(use_case.execute(command)))


# ── Product images ───────────────────────────────────────────────────


@router.post(
    "/{product_id}/images",
    response_model=ProductImageResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Upload a product image",
    description="Append an image to the gallery; the first image is the main one.",
)
@limiter.limit(HEAVY_RATE_LIMIT)
async def upload_product_image(
    request: Request,
    product_id: str,
    file: UploadFile = File(...),
    alt: str = Form(""),
    user: CurrentUser = Depends(require_creator),
    use_case: UploadProductImageUseCase = Depends(get_upload_product_image_use_case),
) -> ProductImageResponse:
    command = UploadProductImageCommand(
        product_id=product_id,
        creator_id=user.id,
        data=await file.read(),
        filename=file.filename or "",
        alt=alt,
    )
    result = await run_in_threadpool(use_case.execute, command)
    return ProductImageResponse.model_validate(unwrap(result))


@router.delete(
    "/{product_id}/images/{image_id}",
    status_code=204,
    responses=_ERRORS,
    summary="Delete a product image",
)
def delete_product_image(
    product_id: str,
    image_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: DeleteProductImageUseCase = Depends(get_delete_product_image_use_case),
) -> Response:
    command = DeleteProductImageCommand(
        product_id=product_id, image_id=image_id, creator_id=user.id
    )
    unwrap(use_case.execute(command))
    return Response(status_code=204)


@router.put(
    "/{product_id}/images/order",
    response_model=list[ProductImageResponse],
    responses=_ERRORS,
    summary="Reorder product images",
    description="Positions follow the order of ``image_ids``; position 0 is the main image.",
)
def reorder_product_images(
    product_id: str,
    request: ReorderImagesRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: ReorderProductImagesUseCase = Depends(get_reorder_product_images_use_case),
) -> list[ProductImageResponse]:
    command = ReorderProductImagesCommand(
        product_id=product_id, creator_id=user.id, image_ids=request.image_ids
    )
    images = unwrap(use_case.execute(command))
    return [ProductImageResponse.model_validate(i) for i in images]


# ── Projects ─────────────────────────────────────────────────────────


@projects_router.post(
    "",
    response_model=ProjectResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Create a project",
)
def create_project(
    request: CreateProjectRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: CreateProjectUseCase = Depends(get_create_project_use_case),
) -> ProjectResponse:
    command = CreateProjectCommand(
        creator_id=user.id,
        name=request.name,
        description=request.description,
        cover_image=request.cover_image,
    )
    return ProjectResponse.model_validate(unwrap(use_case.execute(command)))


@projects_router.get(
    "",
    response_model=ProjectListResponse,
    responses=_ERRORS,
    summary="List my projects",
    description="Newest first, each with the number of products it holds.",
)
def list_projects(
    user: CurrentUser = Depends(require_creator),
    use_case: ListProjectsUseCase = Depends(get_list_projects_use_case),
) -> ProjectListResponse:
    result = use_case.execute(ListProjectsQuery(creator_id=user.id))
    return ProjectListResponse.model_validate(unwrap(result))


@projects_router.patch(
    "/{project_id}",
    response_model=ProjectResponse,
    responses=_ERRORS,
    summary="Update a project",
)
def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: UpdateProjectUseCase = Depends(get_update_project_use_case),
) -> ProjectResponse:
    command = UpdateProjectCommand(
        project_id=project_id,
        creator_id=user.id,
        name=request.name,
        description=request.description,
        cover_image=request.cover_image,
    )
    return ProjectResponse.model_validate(unwrap(use_case.execute(command)))


@projects_router.delete(
    "/{project_id}",
    response_model=DeleteProjectResponse,
    responses=_ERRORS,
    summary="Delete a project",
    description="The project's products are kept and detached from it.",
)
def delete_project(
    project_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: DeleteProjectUseCase = Depends(get_delete_project_use_case),
) -> DeleteProjectResponse:
    command = ProjectActionCommand(project_id=project_id, creator_id=user.id)
    return DeleteProjectResponse.model_validate(unwrap(use_case.execute(command)))


# ── Public catalog ───────────────────────────────────────────────────


@catalog_router.get(
    "/creators/{slug}/products",
    response_model=PublicProductPageResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Browse a creator's published products",
    description="The creator is found by the slug of a published page.",
)
def list_public_products(
    slug: str,
    project_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Match on the product name"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    use_case: ListPublicProductsUseCase = Depends(get_list_public_products_use_case),
) -> PublicProductPageResponse:
    query = ListPublicProductsQuery(
        creator_slug=slug, project_id=project_id, search=search, page=page, limit=limit
    )
    return PublicProductPageResponse.model_validate(unwrap(use_case.execute(query)))


@catalog_router.get(
    "/products/{product_id}",
    response_model=PublicProductDetailResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Show a published product",
)
def get_public_product(
    product_id: str,
    use_case: GetPublicProductUseCase = Depends(get_public_product_use_case),
) -> PublicProductDetailResponse:
    return PublicProductDetailResponse.model_validate(unwrap(use_case.execute(product_id)))


@catalog_router.get(
    "/projects/{project_id}/products",
    response_model=ProjectProductsResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Browse the published products of a project",
)
def list_products_by_project(
    project_id: str,
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    use_case: ListProductsByProjectUseCase = Depends(get_list_products_by_project_use_case),
) -> ProjectProductsResponse:
    query = ListProductsByProjectQuery(project_id=project_id, page=page, limit=limit)
    return ProjectProductsResponse.model_validate(unwrap(use_case.execute(query)))
