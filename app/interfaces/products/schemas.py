"""
Pydantic schemas for products API request/response validation.

Requests carry prices as decimal euros; responses return integer cents
plus a display string.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateProductRequest(BaseModel):
    name: str
    price: float = Field(..., description="Price in euros, e.g. 29.90")
    description: Optional[str] = None
    project_id: Optional[str] = None


class UpdateProductRequest(BaseModel):
    """Only the fields that are sent are changed.

    Attributes:
        remove_project: Detach the product from its project.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    project_id: Optional[str] = None
    remove_project: bool = False


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    creator_id: str
    project_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    price: int
    currency: str
    formatted_price: str
    status: str
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PublishProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product: ProductResponse
    limit_warning: Optional[str] = None


class ProductPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    products: list[ProductResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class CreateVariantRequest(BaseModel):
    name: str
    stock: int = 0
    sku: Optional[str] = None
    price_override: Optional[float] = Field(None, description="Price in euros")
    color: Optional[str] = None
    color_code: Optional[str] = None


class UpdateVariantRequest(BaseModel):
    name: Optional[str] = None
    stock: Optional[int] = None
    sku: Optional[str] = None
    price_override: Optional[float] = None
    remove_price_override: bool = False
    color: Optional[str] = None
    color_code: Optional[str] = None
    remove_color: bool = False


class VariantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    name: str
    sku: Optional[str] = None
    price_override: Optional[int] = None
    stock: int
    color: Optional[str] = None
    color_code: Optional[str] = None
    images: list[str]
    is_active: bool
    is_available: bool


class UpsertSkuRequest(BaseModel):
    stock: int
    variant_id: Optional[str] = None
    size: Optional[str] = None


class SkuResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    variant_id: Optional[str] = None
    size: Optional[str] = None
    stock: int


class VariantImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    variant_id: str
    url: str
    images: list[str]


class ProductImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    url: str
    alt: str
    position: int
    is_main: bool


class ReorderImagesRequest(BaseModel):
    image_ids: list[str]


# ── Projects ─────────────────────────────────────────────────────────


class CreateProjectRequest(BaseModel):
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None


class UpdateProjectRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    creator_id: str
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    product_count: int
    created_at: datetime
    updated_at: datetime


class ProjectListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    projects: list[ProjectResponse]
    total: int


class DeleteProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    deleted: bool
    orphaned_products: int


# ── Public catalog ───────────────────────────────────────────────────


class PublicProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    price: int
    currency: str
    formatted_price: str
    project_id: Optional[str] = None
    main_image_url: Optional[str] = None
    published_at: Optional[datetime] = None


class PublicProductPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    products: list[PublicProductResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class PublicProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None


class ProjectProductsResponse(PublicProductPageResponse):
    project: PublicProjectResponse


class PublicVariantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    color: Optional[str] = None
    color_code: Optional[str] = None
    price_override: Optional[int] = None
    stock: int
    is_available: bool
    images: list[str]


class PublicProductDetailResponse(PublicProductResponse):
    images: list[str]
    variants: list[PublicVariantResponse]
