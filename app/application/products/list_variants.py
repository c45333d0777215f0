"""
Use case: List the variants of a product.

Input: ListVariantsQuery (product_id, creator_id)
Output: Result[list[VariantResult]]
Side effects: None (read-only query).
"""

from app.application.products.common import load_owned_product
from app.application.products.dtos import ListVariantsQuery, VariantResult
from app.domain.products.ports import ProductRepository, VariantRepository
from app.shared.domain import Result


class ListVariantsUseCase:
    def __init__(self, product_repo: ProductRepository, variant_repo: VariantRepository) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo

    def execute(self, query: ListVariantsQuery) -> Result[list[VariantResult]]:
        loaded = load_owned_product(self._product_repo, query.product_id, query.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        variants = self._variant_repo.find_by_product_id(query.product_id)
        return Result.ok([VariantResult.from_entity(v) for v in variants])
