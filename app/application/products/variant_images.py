"""
Use cases: Attach and detach images on a product variant.

Variant images are plain URLs stored on the variant itself; the files
live at the image host.
"""

import logging

from app.application.products.common import (
    MAX_IMAGE_SIZE_BYTES,
    load_owned_product,
    load_product_variant,
    validate_image_file,
)
from app.application.products.dtos import (
    AddVariantImageCommand,
    RemoveVariantImageCommand,
    VariantImageResult,
)
from app.domain.products.ports import ImageUploadService, ProductRepository, VariantRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class AddVariantImageUseCase:
    """Upload a file and append its URL to the variant's images."""

    def __init__(
        self,
        product_repo: ProductRepository,
        variant_repo: VariantRepository,
        image_upload: ImageUploadService,
        max_size: int = MAX_IMAGE_SIZE_BYTES,
    ) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo
        self._image_upload = image_upload
        self._max_size = max_size

    def execute(self, command: AddVariantImageCommand) -> Result[VariantImageResult]:
        valid = validate_image_file(command.data, command.filename, self._max_size)
        if valid.is_failure:
            return Result.fail(valid.error)

        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        found = load_product_variant(self._variant_repo, command.variant_id, command.product_id)
        if found.is_failure:
            return Result.fail(found.error)
        variant = found.value

        uploaded = self._image_upload.upload(command.data, command.filename)
        if uploaded.is_failure:
            return Result.fail(uploaded.error)

        variant.add_image(uploaded.value)
        self._variant_repo.save(variant)
        logger.info("Added image to variant %s", variant.id)
        return Result.ok(
            VariantImageResult(
                variant_id=variant.id, url=uploaded.value, images=list(variant.images)
            )
        )


class RemoveVariantImageUseCase:
    """Detach a URL from the variant, then delete the file at the host."""

    def __init__(
        self,
        product_repo: ProductRepository,
        variant_repo: VariantRepository,
        image_upload: ImageUploadService,
    ) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo
        self._image_upload = image_upload

    def execute(self, command: RemoveVariantImageCommand) -> Result[VariantImageResult]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        found = load_product_variant(self._variant_repo, command.variant_id, command.product_id)
        if found.is_failure:
            return Result.fail(found.error)
        variant = found.value

        removed = variant.remove_image(command.url)
        if removed.is_failure:
            return Result.fail(removed.error)

        self._variant_repo.save(variant)
        deleted = self._image_upload.delete(command.url)
        if deleted.is_failure:
            logger.warning("Could not delete hosted image %s: %s", command.url, deleted.error)

        logger.info("Removed image from variant %s", variant.id)
        return Result.ok(
            VariantImageResult(variant_id=variant.id, url=command.url, images=list(variant.images))
        )
