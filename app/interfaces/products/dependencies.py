"""
Dependency injection for the products bounded context.

Images are hosted on Cloudinary and the publish allowance is answered
by the subscriptions context. Tests override the repository, image
upload and limit service providers.
"""

from fastapi import Depends

from app.application.products.create_product import CreateProductUseCase
from app.application.products.create_project import CreateProjectUseCase
from app.application.products.create_variant import CreateVariantUseCase
from app.application.products.delete_product import DeleteProductUseCase
from app.application.products.delete_product_image import DeleteProductImageUseCase
from app.application.products.delete_project import DeleteProjectUseCase
from app.application.products.delete_variant import DeleteVariantUseCase
from app.application.products.get_public_product import GetPublicProductUseCase
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
from app.core.config import settings
from app.domain.pages.ports import PageRepository
from app.domain.products.ports import (
    CreatorDirectory,
    ImageUploadService,
    ProductImageRepository,
    ProductRepository,
    ProjectRepository,
    SkuRepository,
    SubscriptionLimitService,
    VariantRepository,
)
from app.domain.subscriptions.ports import SubscriptionRepository
from app.infrastructure.database import get_engine
from app.infrastructure.pages.creator_directory import PageCreatorDirectory
from app.infrastructure.products.cloudinary_image_upload_service import (
    CloudinaryImageUploadService,
)
from app.infrastructure.products.product_image_repository import (
    ProductImageRepositoryAdapter,
)
from app.infrastructure.products.product_repository import ProductRepositoryAdapter
from app.infrastructure.products.project_repository import ProjectRepositoryAdapter
from app.infrastructure.products.sku_repository import SkuRepositoryAdapter
from app.infrastructure.products.variant_repository import VariantRepositoryAdapter
from app.infrastructure.subscriptions.quota_adapters import SubscriptionQuotaAdapter
from app.interfaces.pages.dependencies import get_page_repository
from app.interfaces.subscriptions.dependencies import get_subscription_repository


def get_product_repository() -> ProductRepository:
    return ProductRepositoryAdapter(get_engine())


def get_project_repository() -> ProjectRepository:
    return ProjectRepositoryAdapter(get_engine())


def get_variant_repository() -> VariantRepository:
    return VariantRepositoryAdapter(get_engine())


def get_product_image_repository() -> ProductImageRepository:
    return ProductImageRepositoryAdapter(get_engine())


def get_sku_repository() -> SkuRepository:
    return SkuRepositoryAdapter(get_engine())


def get_image_upload_service() -> ImageUploadService:
    """Build the Cloudinary adapter from application settings."""
    return CloudinaryImageUploadService(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        folder=settings.cloudinary_folder,
    )


def get_creator_directory(
    pages: PageRepository = Depends(get_page_repository),
) -> CreatorDirectory:
    return PageCreatorDirectory(pages)


def get_limit_service(
    subscription_repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> SubscriptionLimitService:
    return SubscriptionQuotaAdapter(subscription_repo)


# ── Products ─────────────────────────────────────────────────────────


def get_create_product_use_case(
    products: ProductRepository = Depends(get_product_repository),
    projects: ProjectRepository = Depends(get_project_repository),
) -> CreateProductUseCase:
    return CreateProductUseCase(product_repo=products, project_repo=projects)


def get_list_products_use_case(
    products: ProductRepository = Depends(get_product_repository),
) -> ListProductsUseCase:
    return ListProductsUseCase(product_repo=products)


def get_update_product_use_case(
    products: ProductRepository = Depends(get_product_repository),
    projects: ProjectRepository = Depends(get_project_repository),
) -> UpdateProductUseCase:
    return UpdateProductUseCase(product_repo=products, project_repo=projects)


def get_publish_product_use_case(
    products: ProductRepository = Depends(get_product_repository),
    limits: SubscriptionLimitService = Depends(get_limit_service),
) -> PublishProductUseCase:
    return PublishProductUseCase(product_repo=products, limit_service=limits)


def get_unpublish_product_use_case(
    products: ProductRepository = Depends(get_product_repository),
    limits: SubscriptionLimitService = Depends(get_limit_service),
) -> UnpublishProductUseCase:
    return UnpublishProductUseCase(product_repo=products, limit_service=limits)


def get_delete_product_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
    images: ProductImageRepository = Depends(get_product_image_repository),
    image_upload: ImageUploadService = Depends(get_image_upload_service),
    limits: SubscriptionLimitService = Depends(get_limit_service),
) -> DeleteProductUseCase:
    return DeleteProductUseCase(
        product_repo=products,
        variant_repo=variants,
        image_repo=images,
        image_upload=image_upload,
        limit_service=limits,
    )


# ── Variants and SKUs ────────────────────────────────────────────────


def get_list_variants_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
) -> ListVariantsUseCase:
    return ListVariantsUseCase(product_repo=products, variant_repo=variants)


def get_create_variant_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
) -> CreateVariantUseCase:
    return CreateVariantUseCase(product_repo=products, variant_repo=variants)


def get_update_variant_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
) -> UpdateVariantUseCase:
    return UpdateVariantUseCase(product_repo=products, variant_repo=variants)


def get_delete_variant_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
    image_upload: ImageUploadService = Depends(get_image_upload_service),
) -> DeleteVariantUseCase:
    return DeleteVariantUseCase(
        product_repo=products, variant_repo=variants, image_upload=image_upload
    )


def get_upsert_sku_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
    skus: SkuRepository = Depends(get_sku_repository),
) -> UpsertSkuUseCase:
    return UpsertSkuUseCase(product_repo=products, variant_repo=variants, sku_repo=skus)


def get_add_variant_image_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
    image_upload: ImageUploadService = Depends(get_image_upload_service),
) -> AddVariantImageUseCase:
    return AddVariantImageUseCase(
        product_repo=products,
        variant_repo=variants,
        image_upload=image_upload,
        max_size=settings.max_upload_size_bytes,
    )


def get_remove_variant_image_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
    image_upload: ImageUploadService = Depends(get_image_upload_service),
) -> RemoveVariantImageUseCase:
    return RemoveVariantImageUseCase(
        product_repo=products, variant_repo=variants, image_upload=image_upload
    )


# ── Product images ───────────────────────────────────────────────────


def get_upload_product_image_use_case(
    products: ProductRepository = Depends(get_product_repository),
    images: ProductImageRepository = Depends(get_product_image_repository),
    image_upload: ImageUploadService = Depends(get_image_upload_service),
) -> UploadProductImageUseCase:
    return UploadProductImageUseCase(
        product_repo=products,
        image_repo=images,
        image_upload=image_upload,
        max_size=settings.max_upload_size_bytes,
    )


def get_delete_product_image_use_case(
    products: ProductRepository = Depends(get_product_repository),
    images: ProductImageRepository = Depends(get_product_image_repository),
    image_upload: ImageUploadService = Depends(get_image_upload_service),
) -> DeleteProductImageUseCase:
    return DeleteProductImageUseCase(
        product_repo=products, image_repo=images, image_upload=image_upload
    )


def get_reorder_product_images_use_case(
    products: ProductRepository = Depends(get_product_repository),
    images: ProductImageRepository = Depends(get_product_image_repository),
) -> ReorderProductImagesUseCase:
    return ReorderProductImagesUseCase(product_repo=products, image_repo=images)


# ── Projects ─────────────────────────────────────────────────────────


def get_create_project_use_case(
    projects: ProjectRepository = Depends(get_project_repository),
) -> CreateProjectUseCase:
    return CreateProjectUseCase(project_repo=projects)


def get_list_projects_use_case(
    projects: ProjectRepository = Depends(get_project_repository),
    products: ProductRepository = Depends(get_product_repository),
) -> ListProjectsUseCase:
    return ListProjectsUseCase(project_repo=projects, product_repo=products)


def get_update_project_use_case(
    projects: ProjectRepository = Depends(get_project_repository),
    products: ProductRepository = Depends(get_product_repository),
) -> UpdateProjectUseCase:
    return UpdateProjectUseCase(project_repo=projects, product_repo=products)


def get_delete_project_use_case(
    projects: ProjectRepository = Depends(get_project_repository),
    products: ProductRepository = Depends(get_product_repository),
) -> DeleteProjectUseCase:
    return DeleteProjectUseCase(project_repo=projects, product_repo=products)


# ── Public catalog ───────────────────────────────────────────────────


def get_list_public_products_use_case(
    creators: CreatorDirectory = Depends(get_creator_directory),
    products: ProductRepository = Depends(get_product_repository),
    images: ProductImageRepository = Depends(get_product_image_repository),
    variants: VariantRepository = Depends(get_variant_repository),
) -> ListPublicProductsUseCase:
    return ListPublicProductsUseCase(
        creators=creators, product_repo=products, image_repo=images, variant_repo=variants
    )


def get_public_product_use_case(
    products: ProductRepository = Depends(get_product_repository),
    variants: VariantRepository = Depends(get_variant_repository),
    images: ProductImageRepository = Depends(get_product_image_repository),
) -> GetPublicProductUseCase:
    return GetPublicProductUseCase(product_repo=products, variant_repo=variants, image_repo=images)


def get_list_products_by_project_use_case(
    projects: ProjectRepository = Depends(get_project_repository),
    products: ProductRepository = Depends(get_product_repository),
    images: ProductImageRepository = Depends(get_product_image_repository),
    variants: VariantRepository = Depends(get_variant_repository),
) -> ListProductsByProjectUseCase:
    return ListProductsByProjectUseCase(
        project_repo=projects, product_repo=products, image_repo=images, variant_repo=variants
    )
