"""
Use case: List a creator's products.

Input: ListProductsQuery (creator_id, status?, project_id?, search?, page, limit)
Output: Result[ProductPage]
Side effects: None (read-only query).
"""

import math

from app.application.products.common import validate_page_window
from app.application.products.dtos import ListProductsQuery, ProductPage, ProductResult
from app.domain.products.entities import ProductStatus
from app.domain.products.ports import ProductFilters, ProductPagination, ProductRepository
from app.shared.domain import Result


class ListProductsUseCase:
    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def execute(self, query: ListProductsQuery) -> Result[ProductPage]:
        if not query.creator_id or not query.creator_id.strip():
            return Result.fail("Creator ID est requis")
        window = validate_page_window(query.page, query.limit)
        if window.is_failure:
            return Result.fail(window.error)

        status = None
        if query.status:
            status_result = ProductStatus.from_value(query.status)
            if status_result.is_failure:
                return Result.fail(status_result.error)
            status = status_result.value

        products, total = self._product_repo.find_by_creator_id(
            query.creator_id,
            ProductFilters(
                status=status,
                project_id=query.project_id,
                search=query.search.strip() if query.search and query.search.strip() else None,
            ),
            ProductPagination(skip=(query.page - 1) * query.limit, take=query.limit),
        )
        return Result.ok(
            ProductPage(
                products=[ProductResult.from_entity(p) for p in products],
                total=total,
                page=query.page,
                limit=query.limit,
                total_pages=math.ceil(total / query.limit) if total else 0,
            )
        )
