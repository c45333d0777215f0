"""
Use case: Add a variant to a product.

Input: CreateVariantCommand
Output: Result[VariantResult]
Side effects: Persists the new variant.
Failure cases:
    - Unknown product, or product owned by another creator
    - Invalid name, stock or price override
"""

import logging

from app.application.products.common import load_owned_product
from app.application.products.dtos import CreateVariantCommand, VariantResult
from app.domain.products.entities import ProductVariant
from app.domain.products.ports import ProductRepository, VariantRepository
from app.domain.products.value_objects import Money
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class CreateVariantUseCase:
    def __init__(self, product_repo: ProductRepository, variant_repo: VariantRepository) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo

    def execute(self, command: CreateVariantCommand) -> Result[VariantResult]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        product = loaded.value

        price_override = None
        if command.price_override is not None:
            price_result = Money.create(command.price_override, product.price.currency)
            if price_result.is_failure:
                return Result.fail(price_result.error)
            price_override = price_result.value

        created = ProductVariant.create(
            product_id=product.id,
            name=command.name,
            stock=command.stock,
            sku=command.sku,
            price_override=price_override,
            color=command.color,
            color_code=command.color_code,
        )
        if created.is_failure:
            return Result.fail(created.error)
        variant = created.value

        self._variant_repo.save(variant)
        logger.info("Created variant %s (%s) on product %s", variant.id, variant.name, product.id)
        return Result.ok(VariantResult.from_entity(variant))
