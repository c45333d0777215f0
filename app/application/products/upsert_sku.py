"""
Use case: Set the stock of one (product, variant, size) combination.

Input: UpsertSkuCommand (product_id, creator_id, stock, variant_id?, size?)
Output: Result[SkuResult]
Side effects: Creates the SKU row, or updates its stock.
Failure cases:
    - Unknown product, or product owned by another creator
    - Variant that does not belong to the product
    - Negative stock
"""

import logging

from app.application.products.common import load_owned_product, load_product_variant
from app.application.products.dtos import SkuResult, UpsertSkuCommand
from app.domain.products.entities import ProductSku
from app.domain.products.ports import ProductRepository, SkuRepository, VariantRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class UpsertSkuUseCase:
    def __init__(
        self,
        product_repo: ProductRepository,
        variant_repo: VariantRepository,
        sku_repo: SkuRepository,
    ) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo
        self._sku_repo = sku_repo

    def execute(self, command: UpsertSkuCommand) -> Result[SkuResult]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)

        variant_id = command.variant_id or None
        if variant_id is not None:
            found = load_product_variant(self._variant_repo, variant_id, command.product_id)
            if found.is_failure:
                return Result.fail(found.error)
        size = command.size.strip() if command.size and command.size.strip() else None

        sku = self._sku_repo.find_by_key(command.product_id, variant_id, size)
        if sku is None:
            created = ProductSku.create(
                product_id=command.product_id,
                stock=command.stock,
                variant_id=variant_id,
                size=size,
            )
            if created.is_failure:
                return Result.fail(created.error)
            sku = created.value
        else:
            stocked = sku.update_stock(command.stock)
            if stocked.is_failure:
                return Result.fail(stocked.error)

        self._sku_repo.save(sku)
        logger.info(
            "SKU stock set: product=%s variant=%s size=%s stock=%d",
            command.product_id,
            variant_id,
            size,
            sku.stock,
        )
        return Result.ok(SkuResult.from_entity(sku))
