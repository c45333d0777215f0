"""
Use case: Delete a product with its variants, images and SKUs.

Input: ProductActionCommand (product_id, creator_id)
Output: Result[None]
Side effects:
    - Best-effort deletion of the gallery and variant images at the host
    - Removal of the product row (children cascade)
    - Release of the published-products slot when the product was live
Failure cases:
    - Unknown product, or product owned by another creator
"""

import logging

from app.application.products.common import delete_hosted_images, load_owned_product
from app.application.products.dtos import ProductActionCommand
from app.domain.products.ports import (
    ImageUploadService,
    ProductImageRepository,
    ProductRepository,
    SubscriptionLimitService,
    VariantRepository,
)
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class DeleteProductUseCase:
    def __init__(
        self,
        product_repo: ProductRepository,
        variant_repo: VariantRepository,
        image_repo: ProductImageRepository,
        image_upload: ImageUploadService,
        limit_service: SubscriptionLimitService,
    ) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo
        self._image_repo = image_repo
        self._image_upload = image_upload
        self._limit_service = limit_service

    def execute(self, command: ProductActionCommand) -> Result[None]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        product = loaded.value

        urls = [image.url.url for image in self._image_repo.find_by_product_id(product.id)]
        for variant in self._variant_repo.find_by_product_id(product.id):
            urls.extend(variant.images)
        delete_hosted_images(self._image_upload, urls)

        self._product_repo.delete(product.id)
        if product.is_published:
            self._limit_service.record_product_unpublished(product.creator_id)

        logger.info("Deleted product %s (%d hosted images)", product.id, len(urls))
        return Result.ok()
