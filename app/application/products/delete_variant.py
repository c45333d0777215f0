"""
Use case: Delete a product variant.

Input: VariantActionCommand (variant_id, product_id, creator_id)
Output: Result[None]
Side effects:
    - Best-effort deletion of the variant images at the host
    - Removal of the variant row
Failure cases:
    - Unknown product or variant, product owned by another creator
    - The variant is the last one of the product
"""

import logging

from app.application.products.common import (
    delete_hosted_images,
    load_owned_product,
    load_product_variant,
)
from app.application.products.dtos import VariantActionCommand
from app.domain.products.ports import ImageUploadService, ProductRepository, VariantRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class DeleteVariantUseCase:
    def __init__(
        self,
        product_repo: ProductRepository,
        variant_repo: VariantRepository,
        image_upload: ImageUploadService,
    ) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo
        self._image_upload = image_upload

    def execute(self, command: VariantActionCommand) -> Result[None]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)

        found = load_product_variant(self._variant_repo, command.variant_id, command.product_id)
        if found.is_failure:
            return Result.fail(found.error)
        variant = found.value

        if self._variant_repo.count_by_product_id(command.product_id) <= 1:
            return Result.fail("Impossible de supprimer la dernière variante du produit")

        delete_hosted_images(self._image_upload, variant.images)
        self._variant_repo.delete(variant.id)
        logger.info("Deleted variant %s of product %s", variant.id, command.product_id)
        return Result.ok()
