"""
Use case: List the published products of a creator's storefront.

Input: ListPublicProductsQuery (creator_slug, project_id?, search?, page, limit)
Output: Result[PublicProductPage]
Side effects: None (read-only query).

The creator is found through the slug of a published page; an unknown
slug yields an empty page rather than an error.
"""

import math

from app.application.products.common import main_image_urls, validate_page_window
from app.application.products.dtos import (
    ListPublicProductsQuery,
    PublicProductItem,
    PublicProductPage,
)
from app.domain.products.entities import ProductStatus
from app.domain.products.ports import (
    CreatorDirectory,
    ProductFilters,
    ProductImageRepository,
    ProductPagination,
    ProductRepository,
    VariantRepository,
)
from app.shared.domain import Result


class ListPublicProductsUseCase:
    def __init__(
        self,
        creators: CreatorDirectory,
        product_repo: ProductRepository,
        image_repo: ProductImageRepository,
        variant_repo: VariantRepository,
    ) -> None:
        self._creators = creators
        self._product_repo = product_repo
        self._image_repo = image_repo
        self._variant_repo = variant_repo

    def execute(self, query: ListPublicProductsQuery) -> Result[PublicProductPage]:
        if not query.creator_slug or not query.creator_slug.strip():
            return Result.fail("Creator slug est requis")
        window = validate_page_window(query.page, query.limit)
        if window.is_failure:
            return Result.fail(window.error)

        empty = PublicProductPage(
            products=[], total=0, page=query.page, limit=query.limit, total_pages=0
        )
        creator_id = self._creators.find_creator_id_by_slug(query.creator_slug)
        if creator_id is None:
            return Result.ok(empty)

        products, total = self._product_repo.find_by_creator_id(
            creator_id,
            ProductFilters(
                status=ProductStatus.PUBLISHED,
                project_id=query.project_id or None,
                search=query.search.strip() if query.search and query.search.strip() else None,
            ),
            ProductPagination(skip=(query.page - 1) * query.limit, take=query.limit),
        )
        if not products:
            return Result.ok(
                PublicProductPage(
                    products=[],
                    total=total,
                    page=query.page,
                    limit=query.limit,
                    total_pages=math.ceil(total / query.limit) if total else 0,
                )
            )

        images = main_image_urls(self._image_repo, self._variant_repo, products)
        return Result.ok(
            PublicProductPage(
                products=[PublicProductItem.from_entity(p, images.get(p.id)) for p in products],
                total=total,
                page=query.page,
                limit=query.limit,
                total_pages=math.ceil(total / query.limit),
            )
        )
