"""
Use case: Remove an image from a product gallery.

Input: DeleteProductImageCommand (product_id, image_id, creator_id)
Output: Result[None]
Side effects: Best-effort deletion at the host, then removal of the row.
Failure cases:
    - Unknown product, or product owned by another creator
    - Image not found on this product
"""

import logging

from app.application.products.common import delete_hosted_images, load_owned_product
from app.application.products.dtos import DeleteProductImageCommand
from app.domain.products.ports import (
    ImageUploadService,
    ProductImageRepository,
    ProductRepository,
)
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class DeleteProductImageUseCase:
    def __init__(
        self,
        product_repo: ProductRepository,
        image_repo: ProductImageRepository,
        image_upload: ImageUploadService,
    ) -> None:
        self._product_repo = product_repo
        self._image_repo = image_repo
        self._image_upload = image_upload

    def execute(self, command: DeleteProductImageCommand) -> Result[None]:
        if not command.image_id or not command.image_id.strip():
            return Result.fail("Image ID est requis")

        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)

        image = self._image_repo.find_by_id(command.image_id)
        if image is None or image.product_id != command.product_id:
            return Result.fail("Image non trouvée")

        delete_hosted_images(self._image_upload, [image.url.url])
        self._image_repo.delete(image.id)
        logger.info("Deleted image %s of product %s", image.id, command.product_id)
        return Result.ok()
