"""
Use case: Update a product variant.

Input: UpdateVariantCommand
Output: Result[VariantResult]
Side effects: Persists the updated variant.
Failure cases:
    - Unknown product or variant, product owned by another creator
    - Invalid name, stock or price override
"""

import logging

from app.application.products.common import load_owned_product, load_product_variant
from app.application.products.dtos import UpdateVariantCommand, VariantResult
from app.domain.products.ports import ProductRepository, VariantRepository
from app.domain.products.value_objects import Money
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class UpdateVariantUseCase:
    def __init__(self, product_repo: ProductRepository, variant_repo: VariantRepository) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo

    def execute(self, command: UpdateVariantCommand) -> Result[VariantResult]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        product = loaded.value

        found = load_product_variant(self._variant_repo, command.variant_id, product.id)
        if found.is_failure:
            return Result.fail(found.error)
        variant = found.value

        price_override = None
        if not command.remove_price_override and command.price_override is not None:
            price_result = Money.create(command.price_override, product.price.currency)
            if price_result.is_failure:
                return Result.fail(price_result.error)
            price_override = price_result.value

        if command.name is not None:
            renamed = variant.update_name(command.name)
            if renamed.is_failure:
                return Result.fail(renamed.error)
        if command.stock is not None:
            stocked = variant.update_stock(command.stock)
            if stocked.is_failure:
                return Result.fail(stocked.error)
        if command.remove_price_override:
            variant.remove_price_override()
        elif price_override is not None:
            variant.update_price_override(price_override)
        if command.remove_color:
            variant.update_color(None, None)
        elif command.color is not None or command.color_code is not None:
            variant.update_color(command.color, command.color_code)
        if command.sku is not None:
            variant.update_sku(command.sku)

        self._variant_repo.save(variant)
        logger.info("Updated variant %s of product %s", variant.id, product.id)
        return Result.ok(VariantResult.from_entity(variant))
