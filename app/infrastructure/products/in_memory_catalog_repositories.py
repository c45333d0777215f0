"""
Adapters: In-memory catalog repositories.

Dict-backed implementations of the product, variant, image, SKU and
project ports. Used by tests and by local runs without a database.
"""

import copy
from typing import Optional

from app.domain.products.entities import (
    Product,
    ProductImage,
    ProductSku,
    ProductVariant,
    Project,
)
from app.domain.products.ports import (
    ProductFilters,
    ProductImageRepository,
    ProductPagination,
    ProductRepository,
    ProjectRepository,
    SkuRepository,
    VariantRepository,
)


class InMemoryProductRepository(ProductRepository):
    def __init__(self) -> None:
        self._items: dict[str, Product] = {}

    def find_by_id(self, product_id: str) -> Optional[Product]:
        product = self._items.get(product_id)
        return copy.deepcopy(product) if product else None

    def find_by_creator_id(
        self,
        creator_id: str,
        filters: Optional[ProductFilters] = None,
        pagination: Optional[ProductPagination] = None,
    ) -> tuple[list[Product], int]:
        filters = filters or ProductFilters()
        pagination = pagination or ProductPagination()
        needle = filters.search.lower() if filters.search else None
        matches = [
            p
            for p in self._items.values()
            if p.creator_id == creator_id
            and (filters.status is None or p.status is filters.status)
            and (filters.project_id is None or p.project_id == filters.project_id)
            and (
                needle is None
                or needle in p.name.lower()
                or needle in (p.description or "").lower()
            )
        ]
        matches.sort(key=lambda p: p.created_at, reverse=True)
        window = matches[pagination.skip : pagination.skip + pagination.take]
        return [copy.deepcopy(p) for p in window], len(matches)

    def save(self, product: Product) -> None:
        self._items[product.id] = copy.deepcopy(product)

    def delete(self, product_id: str) -> None:
        self._items.pop(product_id, None)

    def count_by_project_ids(self, project_ids: list[str]) -> dict[str, int]:
        counts = {project_id: 0 for project_id in project_ids}
        for product in self._items.values():
            if product.project_id in counts:
                counts[product.project_id] += 1
        return counts

    def detach_project(self, project_id: str) -> int:
        detached = 0
        for product in self._items.values():
            if product.project_id == project_id:
                product.assign_project(None)
                detached += 1
        return detached


class InMemoryVariantRepository(VariantRepository):
    def __init__(self) -> None:
        self._items: dict[str, ProductVariant] = {}

    def find_by_id(self, variant_id: str) -> Optional[ProductVariant]:
        variant = self._items.get(variant_id)
        return copy.deepcopy(variant) if variant else None

    def find_by_product_id(self, product_id: str) -> list[ProductVariant]:
        variants = [v for v in self._items.values() if v.product_id == product_id]
        variants.sort(key=lambda v: v.created_at)
        return [copy.deepcopy(v) for v in variants]

    def count_by_product_id(self, product_id: str) -> int:
        return sum(1 for v in self._items.values() if v.product_id == product_id)

    def save(self, variant: ProductVariant) -> None:
        self._items[variant.id] = copy.deepcopy(variant)

    def delete(self, variant_id: str) -> None:
        self._items.pop(variant_id, None)


class InMemoryProductImageRepository(ProductImageRepository):
    def __init__(self) -> None:
        self._items: dict[str, ProductImage] = {}

    def find_by_id(self, image_id: str) -> Optional[ProductImage]:
        image = self._items.get(image_id)
        return copy.deepcopy(image) if image else None

    def find_by_product_id(self, product_id: str) -> list[ProductImage]:
        images = [i for i in self._items.values() if i.product_id == product_id]
        images.sort(key=lambda i: i.position)
        return [copy.deepcopy(i) for i in images]

    def count_by_product_id(self, product_id: str) -> int:
        return sum(1 for i in self._items.values() if i.product_id == product_id)

    def find_main_by_product_ids(self, product_ids: list[str]) -> dict[str, ProductImage]:
        wanted = set(product_ids)
        return {
            i.product_id: copy.deepcopy(i)
            for i in self._items.values()
            if i.product_id in wanted and i.is_main
        }

    def save(self, image: ProductImage) -> None:
        self._items[image.id] = copy.deepcopy(image)

    def save_many(self, images: list[ProductImage]) -> None:
        for image in images:
            self.save(image)

    def delete(self, image_id: str) -> None:
        self._items.pop(image_id, None)


class InMemorySkuRepository(SkuRepository):
    def __init__(self) -> None:
        self._items: dict[str, ProductSku] = {}

    def find_by_product_id(self, product_id: str) -> list[ProductSku]:
        return [copy.deepcopy(s) for s in self._items.values() if s.product_id == product_id]

    def find_by_key(
        self, product_id: str, variant_id: Optional[str], size: Optional[str]
    ) -> Optional[ProductSku]:
        for sku in self._items.values():
            if (
                sku.product_id == product_id
                and (sku.variant_id or None) == (variant_id or None)
                and (sku.size or None) == (size or None)
            ):
                return copy.deepcopy(sku)
        return None

    def save(self, sku: ProductSku) -> None:
        self._items[sku.id] = copy.deepcopy(sku)


class InMemoryProjectRepository(ProjectRepository):
    def __init__(self) -> None:
        self._items: dict[str, Project] = {}

    def find_by_id(self, project_id: str) -> Optional[Project]:
        project = self._items.get(project_id)
        return copy.deepcopy(project) if project else None

    def find_by_creator_id(self, creator_id: str) -> list[Project]:
        projects = [p for p in self._items.values() if p.creator_id == creator_id]
        projects.sort(key=lambda p: p.created_at, reverse=True)
        return [copy.deepcopy(p) for p in projects]

    def save(self, project: Project) -> None:
        self._items[project.id] = copy.deepcopy(project)

    def delete(self, project_id: str) -> None:
        self._items.pop(project_id, None)
