"""
Use cases: Publish and unpublish a product.

Publishing consumes one slot of the creator's published-products
allowance; unpublishing gives it back.

PublishProductUseCase
    Input: ProductActionCommand (product_id, creator_id)
    Output: Result[PublishProductResult] (carries the near-limit warning)
    Failure cases: unknown product, not the owner, already published,
        plan limit reached

UnpublishProductUseCase
    Input: ProductActionCommand (product_id, creator_id)
    Output: Result[ProductResult]
    Failure cases: unknown product, not the owner, already a draft
"""

import logging

from app.application.products.common import load_owned_product
from app.application.products.dtos import (
    ProductActionCommand,
    ProductResult,
    PublishProductResult,
)
from app.domain.products.ports import ProductRepository, SubscriptionLimitService
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class PublishProductUseCase:
    def __init__(
        self, product_repo: ProductRepository, limit_service: SubscriptionLimitService
    ) -> None:
        self._product_repo = product_repo
        self._limit_service = limit_service

    def execute(self, command: ProductActionCommand) -> Result[PublishProductResult]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        product = loaded.value

        if product.is_published:
            return Result.fail("Le produit est déjà publié")

        allowance = self._limit_service.check_can_publish(command.creator_id)
        if allowance.is_failure:
            logger.warning(
                "Publish of product %s refused for creator %s: %s",
                product.id,
                command.creator_id,
                allowance.error,
            )
            return Result.fail(allowance.error)

        published = product.publish()
        if published.is_failure:
            return Result.fail(published.error)

        self._product_repo.save(product)
        recorded = self._limit_service.record_product_published(command.creator_id)
        if recorded.is_failure:
            logger.warning(
                "Product %s published but usage not recorded: %s", product.id, recorded.error
            )

        logger.info("Published product %s", product.id)
        return Result.ok(
            PublishProductResult(
                product=ProductResult.from_entity(product), limit_warning=allowance.value
            )
        )


class UnpublishProductUseCase:
    def __init__(
        self, product_repo: ProductRepository, limit_service: SubscriptionLimitService
    ) -> None:
        self._product_repo = product_repo
        self._limit_service = limit_service

    def execute(self, command: ProductActionCommand) -> Result[ProductResult]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        product = loaded.value

        was_published = product.is_published
        unpublished = product.unpublish()
        if unpublished.is_failure:
            return Result.fail(unpublished.error)

        self._product_repo.save(product)
        if was_published:
            released = self._limit_service.record_product_unpublished(command.creator_id)
            if released.is_failure:
                logger.warning(
                    "Product %s unpublished but usage not released: %s",
                    product.id,
                    released.error,
                )

        logger.info("Unpublished product %s", product.id)
        return Result.ok(ProductResult.from_entity(product))
