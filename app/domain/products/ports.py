"""
Port interfaces (ABCs) for the products bounded context.

Ports define the contracts that the domain requires from the outside world:
catalog storage, image hosting, the creator's plan allowance and the
lookup of a creator behind a storefront slug.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from app.domain.products.entities import (
    Product,
    ProductImage,
    ProductSku,
    ProductStatus,
    ProductVariant,
    Project,
)
from app.shared.domain import Result


@dataclass(frozen=True)
class ProductFilters:
    status: Optional[ProductStatus] = None
    project_id: Optional[str] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class ProductPagination:
    skip: int = 0
    take: int = 20


class ProductRepository(ABC):
    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[Product]:
        raise NotImplementedError

    @abstractmethod
    def find_by_creator_id(
        self,
        creator_id: str,
        filters: Optional[ProductFilters] = None,
        pagination: Optional[ProductPagination] = None,
    ) -> tuple[list[Product], int]:
        """Return one page of a creator's products (newest first) and the total."""
        raise NotImplementedError

    @abstractmethod
    def save(self, product: Product) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Delete a product; its variants, images and SKUs go with it."""
        raise NotImplementedError

    @abstractmethod
    def count_by_project_ids(self, project_ids: list[str]) -> dict[str, int]:
        """Return the number of products in each project; missing ids count 0."""
        raise NotImplementedError

    @abstractmethod
    def detach_project(self, project_id: str) -> int:
        """Clear ``project_id`` on every product of a project; return how many."""
        raise NotImplementedError


class VariantRepository(ABC):
    @abstractmethod
    def find_by_id(self, variant_id: str) -> Optional[ProductVariant]:
        raise NotImplementedError

    @abstractmethod
    def find_by_product_id(self, product_id: str) -> list[ProductVariant]:
        raise NotImplementedError

    @abstractmethod
    def count_by_product_id(self, product_id: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def save(self, variant: ProductVariant) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, variant_id: str) -> None:
        raise NotImplementedError


class ProductImageRepository(ABC):
    @abstractmethod
    def find_by_id(self, image_id: str) -> Optional[ProductImage]:
        raise NotImplementedError

    @abstractmethod
    def find_by_product_id(self, product_id: str) -> list[ProductImage]:
        """Return the images of a product ordered by position."""
        raise NotImplementedError

    @abstractmethod
    def count_by_product_id(self, product_id: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def find_main_by_product_ids(self, product_ids: list[str]) -> dict[str, ProductImage]:
        """Return the position-0 image of each product that has one."""
        raise NotImplementedError

    @abstractmethod
    def save(self, image: ProductImage) -> None:
        raise NotImplementedError

    @abstractmethod
    def save_many(self, images: list[ProductImage]) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, image_id: str) -> None:
        raise NotImplementedError


class SkuRepository(ABC):
    @abstractmethod
    def find_by_product_id(self, product_id: str) -> list[ProductSku]:
        raise NotImplementedError

    @abstractmethod
    def find_by_key(
        self, product_id: str, variant_id: Optional[str], size: Optional[str]
    ) -> Optional[ProductSku]:
        """Return the SKU of one (product, variant, size) combination."""
        raise NotImplementedError

    @abstractmethod
    def save(self, sku: ProductSku) -> None:
        raise NotImplementedError


class ProjectRepository(ABC):
    @abstractmethod
    def find_by_id(self, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    @abstractmethod
    def find_by_creator_id(self, creator_id: str) -> list[Project]:
        """Return a creator's projects, newest first."""
        raise NotImplementedError

    @abstractmethod
    def save(self, project: Project) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, project_id: str) -> None:
        raise NotImplementedError


class ImageUploadService(ABC):
    """Port for the image hosting service."""

    @abstractmethod
    def upload(self, data: bytes, filename: str) -> Result[str]:
        """Store the file and return its public URL."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, url: str) -> Result[None]:
        raise NotImplementedError


class SubscriptionLimitService(ABC):
    """Port for the creator's published-products allowance."""

    @abstractmethod
    def check_can_publish(self, creator_id: str) -> Result[Optional[str]]:
        """Fail with the limit message when the creator cannot publish.

        On success the value is a warning message when the creator is
        about to reach the limit, None otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def record_product_published(self, creator_id: str) -> Result[None]:
        raise NotImplementedError

    @abstractmethod
    def record_product_unpublished(self, creator_id: str) -> Result[None]:
        raise NotImplementedError


class CreatorDirectory(ABC):
    """Port resolving the creator behind a published storefront slug."""

    @abstractmethod
    def find_creator_id_by_slug(self, slug: str) -> Optional[str]:
        raise NotImplementedError
