"""
Data Transfer Objects for the products application layer.

Prices cross this boundary in two forms: commands carry decimal amounts
as typed by the creator (e.g. 29.99), results carry integer cents.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.domain.products.entities import (
    Product,
    ProductImage,
    ProductSku,
    ProductVariant,
    Project,
)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# ── Products ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateProductCommand:
    creator_id: str
    name: str
    price: float
    description: Optional[str] = None
    project_id: Optional[str] = None


@dataclass(frozen=True)
class UpdateProductCommand:
    """Only the non-None fields are changed.

    Attributes:
        remove_project: Detach the product from its project.
    """

    product_id: str
    creator_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    project_id: Optional[str] = None
    remove_project: bool = False


@dataclass(frozen=True)
class ProductActionCommand:
    """Delete, publish and unpublish only need the product and its owner."""

    product_id: str
    creator_id: str


@dataclass(frozen=True)
class ListProductsQuery:
    creator_id: str
    status: Optional[str] = None
    project_id: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class ProductResult:
    id: str
    creator_id: str
    project_id: Optional[str]
    name: str
    description: Optional[str]
    price: int
    currency: str
    formatted_price: str
    status: str
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResult":
        return cls(
            id=product.id,
            creator_id=product.creator_id,
            project_id=product.project_id,
            name=product.name,
            description=product.description,
            price=product.price.amount,
            currency=product.price.currency,
            formatted_price=product.price.formatted,
            status=product.status.value,
            published_at=product.published_at,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


@dataclass(frozen=True)
class PublishProductResult:
    product: ProductResult
    limit_warning: Optional[str] = None


@dataclass(frozen=True)
class ProductPage:
    products: list[ProductResult]
    total: int
    page: int
    limit: int
    total_pages: int


# ── Variants and SKUs ────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateVariantCommand:
    product_id: str
    creator_id: str
    name: str
    stock: int = 0
    sku: Optional[str] = None
    price_override: Optional[float] = None
    color: Optional[str] = None
    color_code: Optional[str] = None


@dataclass(frozen=True)
class UpdateVariantCommand:
    """Only the non-None fields are changed; the ``remove_*`` flags clear a field."""

    variant_id: str
    product_id: str
    creator_id: str
    name: Optional[str] = None
    stock: Optional[int] = None
    sku: Optional[str] = None
    price_override: Optional[float] = None
    remove_price_override: bool = False
    color: Optional[str] = None
    color_code: Optional[str] = None
    remove_color: bool = False


@dataclass(frozen=True)
class VariantActionCommand:
    variant_id: str
    product_id: str
    creator_id: str


@dataclass(frozen=True)
class ListVariantsQuery:
    product_id: str
    creator_id: str


@dataclass(frozen=True)
class VariantResult:
    id: str
    product_id: str
    name: str
    sku: Optional[str]
    price_override: Optional[int]
    stock: int
    color: Optional[str]
    color_code: Optional[str]
    images: list[str]
    is_active: bool
    is_available: bool

    @classmethod
    def from_entity(cls, variant: ProductVariant) -> "VariantResult":
        return cls(
            id=variant.id,
            product_id=variant.product_id,
            name=variant.name,
            sku=variant.sku,
            price_override=variant.price_override.amount if variant.price_override else None,
            stock=variant.stock,
            color=variant.color,
            color_code=variant.color_code,
            images=list(variant.images),
            is_active=variant.is_active,
            is_available=variant.is_available,
        )


@dataclass(frozen=True)
class UpsertSkuCommand:
    product_id: str
    creator_id: str
    stock: int
    variant_id: Optional[str] = None
    size: Optional[str] = None


@dataclass(frozen=True)
class SkuResult:
    id: str
    product_id: str
    variant_id: Optional[str]
    size: Optional[str]
    stock: int

    @classmethod
    def from_entity(cls, sku: ProductSku) -> "SkuResult":
        return cls(
            id=sku.id,
            product_id=sku.product_id,
            variant_id=sku.variant_id,
            size=sku.size,
            stock=sku.stock,
        )


@dataclass(frozen=True)
class AddVariantImageCommand:
    product_id: str
    variant_id: str
    creator_id: str
    data: bytes
    filename: str


@dataclass(frozen=True)
class RemoveVariantImageCommand:
    product_id: str
    variant_id: str
    creator_id: str
    url: str


@dataclass(frozen=True)
class VariantImageResult:
    variant_id: str
    url: str
    images: list[str]


# ── Product images ───────────────────────────────────────────────────


@dataclass(frozen=True)
class UploadProductImageCommand:
    product_id: str
    creator_id: str
    data: bytes
    filename: str
    alt: str = ""


@dataclass(frozen=True)
class DeleteProductImageCommand:
    product_id: str
    image_id: str
    creator_id: str


@dataclass(frozen=True)
class ReorderProductImagesCommand:
    product_id: str
    creator_id: str
    image_ids: list[str]


@dataclass(frozen=True)
class ProductImageResult:
    id: str
    product_id: str
    url: str
    alt: str
    position: int
    is_main: bool

    @classmethod
    def from_entity(cls, image: ProductImage) -> "ProductImageResult":
        return cls(
            id=image.id,
            product_id=image.product_id,
            url=image.url.url,
            alt=image.alt,
            position=image.position,
            is_main=image.is_main,
        )


# ── Projects ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateProjectCommand:
    creator_id: str
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None


@dataclass(frozen=True)
class UpdateProjectCommand:
    """Only the non-None fields are changed."""

    project_id: str
    creator_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None


@dataclass(frozen=True)
class ProjectActionCommand:
    project_id: str
    creator_id: str


@dataclass(frozen=True)
class ListProjectsQuery:
    creator_id: str


@dataclass(frozen=True)
class ProjectResult:
    id: str
    creator_id: str
    name: str
    description: Optional[str]
    cover_image: Optional[str]
    product_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, project: Project, product_count: int = 0) -> "ProjectResult":
        return cls(
            id=project.id,
            creator_id=project.creator_id,
            name=project.name,
            description=project.description,
            cover_image=project.cover_image,
            product_count=product_count,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


@dataclass(frozen=True)
class ProjectList:
    projects: list[ProjectResult]
    total: int


@dataclass(frozen=True)
class DeleteProjectResult:
    deleted: bool
    orphaned_products: int


# ── Public catalog ───────────────────────────────────────────────────
# Public results never carry the creator id.


@dataclass(frozen=True)
class ListPublicProductsQuery:
    creator_slug: str
    project_id: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class ListProductsByProjectQuery:
    project_id: str
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class PublicProductItem:
    id: str
    name: str
    description: Optional[str]
    price: int
    currency: str
    formatted_price: str
    project_id: Optional[str]
    main_image_url: Optional[str]
    published_at: Optional[datetime]

    @classmethod
    def from_entity(
        cls, product: Product, main_image_url: Optional[str] = None
    ) -> "PublicProductItem":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price.amount,
            currency=product.price.currency,
            formatted_price=product.price.formatted,
            project_id=product.project_id,
            main_image_url=main_image_url,
            published_at=product.published_at,
        )


@dataclass(frozen=True)
class PublicProductPage:
    products: list[PublicProductItem]
    total: int
    page: int
    limit: int
    total_pages: int


@dataclass(frozen=True)
class PublicProjectResult:
    id: str
    name: str
    description: Optional[str]
    cover_image: Optional[str]


@dataclass(frozen=True)
class ProjectProductsPage:
    project: PublicProjectResult
    products: list[PublicProductItem]
    total: int
    page: int
    limit: int
    total_pages: int


@dataclass(frozen=True)
class PublicVariantResult:
    id: str
    name: str
    color: Optional[str]
    color_code: Optional[str]
    price_override: Optional[int]
    stock: int
    is_available: bool
    images: list[str]


@dataclass(frozen=True)
class PublicProductDetail:
    id: str
    name: str
    description: Optional[str]
    price: int
    currency: str
    formatted_price: str
    project_id: Optional[str]
    main_image_url: Optional[str]
    images: list[str]
    variants: list[PublicVariantResult]
    published_at: Optional[datetime]
