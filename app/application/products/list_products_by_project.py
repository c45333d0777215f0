"""
Use case: List the published products of a project.

Input: ListProductsByProjectQuery (project_id, page, limit)
Output: Result[ProjectProductsPage]
Side effects: None (read-only query).
Failure cases:
    - Missing project id, unknown project
    - Invalid page or limit
"""

import math

from app.application.products.common import (
    PROJECT_NOT_FOUND,
    main_image_urls,
    validate_page_window,
)
from app.application.products.dtos import (
    ListProductsByProjectQuery,
    ProjectProductsPage,
    PublicProductItem,
    PublicProjectResult,
)
from app.domain.products.entities import ProductStatus
from app.domain.products.ports import (
    ProductFilters,
    ProductImageRepository,
    ProductPagination,
    ProductRepository,
    ProjectRepository,
    VariantRepository,
)
from app.shared.domain import Result


class ListProductsByProjectUseCase:
    def __init__(
        self,
        project_repo: ProjectRepository,
        product_repo: ProductRepository,
        image_repo: ProductImageRepository,
        variant_repo: VariantRepository,
    ) -> None:
        self._project_repo = project_repo
        self._product_repo = product_repo
        self._image_repo = image_repo
        self._variant_repo = variant_repo

    def execute(self, query: ListProductsByProjectQuery) -> Result[ProjectProductsPage]:
        if not query.project_id or not query.project_id.strip():
            return Result.fail("Project ID est requis")
        window = validate_page_window(query.page, query.limit)
        if window.is_failure:
            return Result.fail(window.error)
        project = self._project_repo.find_by_id(query.project_id.strip())
        if project is None:
            return Result.fail(PROJECT_NOT_FOUND)

        products, total = self._product_repo.find_by_creator_id(
            project.creator_id,
            ProductFilters(status=ProductStatus.PUBLISHED, project_id=project.id),
            ProductPagination(skip=(query.page - 1) * query.limit, take=query.limit),
        )
        images = main_image_urls(self._image_repo, self._variant_repo, products)
        return Result.ok(
            ProjectProductsPage(
                project=PublicProjectResult(
                    id=project.id,
                    name=project.name,
                    description=project.description,
                    cover_image=project.cover_image,
                ),
                products=[PublicProductItem.from_entity(p, images.get(p.id)) for p in products],
                total=total,
                page=query.page,
                limit=query.limit,
                total_pages=math.ceil(total / query.limit) if total else 0,
            )
        )
