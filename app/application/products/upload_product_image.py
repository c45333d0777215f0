"""
Use case: Upload an image to a product gallery.

Input: UploadProductImageCommand (product_id, creator_id, data, filename, alt)
Output: Result[ProductImageResult]
Side effects:
    - Stores the file at the image host
    - Persists a ProductImage placed after the existing ones
Failure cases:
    - Empty file, unsupported extension, file too large
    - Unknown product, or product owned by another creator
    - Host upload failure
    - Invalid hosted URL (the uploaded file is then deleted)
"""

import logging

from app.application.products.common import (
    MAX_IMAGE_SIZE_BYTES,
    load_owned_product,
    validate_image_file,
)
from app.application.products.dtos import ProductImageResult, UploadProductImageCommand
from app.domain.products.entities import ProductImage
from app.domain.products.ports import (
    ImageUploadService,
    ProductImageRepository,
    ProductRepository,
)
from app.domain.products.value_objects import ImageUrl, ImageUrlType
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class UploadProductImageUseCase:
    def __init__(
        self,
        product_repo: ProductRepository,
        image_repo: ProductImageRepository,
        image_upload: ImageUploadService,
        max_size: int = MAX_IMAGE_SIZE_BYTES,
    ) -> None:
        self._product_repo = product_repo
        self._image_repo = image_repo
        self._image_upload = image_upload
        self._max_size = max_size

    def execute(self, command: UploadProductImageCommand) -> Result[ProductImageResult]:
        valid = validate_image_file(command.data, command.filename, self._max_size)
        if valid.is_failure:
            return Result.fail(valid.error)

        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)

        position = self._image_repo.count_by_product_id(command.product_id)

        uploaded = self._image_upload.upload(command.data, command.filename)
        if uploaded.is_failure:
            return Result.fail(uploaded.error)
        url = uploaded.value

        image_url = ImageUrl.create(url, ImageUrlType.PRODUCT)
        created = image_url.bind(
            lambda u: ProductImage.create(
                product_id=command.product_id, url=u, alt=command.alt, position=position
            )
        )
        if created.is_failure:
            self._image_upload.delete(url)
            logger.warning("Discarded upload %s: %s", url, created.error)
            return Result.fail(created.error)
        image = created.value

        self._image_repo.save(image)
        logger.info(
            "Uploaded image %s for product %s at position %d",
            image.id,
            image.product_id,
            image.position,
        )
        return Result.ok(ProductImageResult.from_entity(image))
