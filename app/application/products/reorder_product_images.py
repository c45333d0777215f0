"""
Use case: Reorder a product gallery.

Input: ReorderProductImagesCommand (product_id, creator_id, image_ids)
Output: Result[list[ProductImageResult]] in their new order
Side effects: Persists the new positions.
Failure cases:
    - Empty id list, product without images
    - Unknown product, or product owned by another creator
    - Ids that do not match the product's images exactly
"""

import logging

from app.application.products.common import load_owned_product
from app.application.products.dtos import ProductImageResult, ReorderProductImagesCommand
from app.domain.products.ports import ProductImageRepository, ProductRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class ReorderProductImagesUseCase:
    def __init__(
        self, product_repo: ProductRepository, image_repo: ProductImageRepository
    ) -> None:
        self._product_repo = product_repo
        self._image_repo = image_repo

    def execute(
        self, command: ReorderProductImagesCommand
    ) -> Result[list[ProductImageResult]]:
        if not command.image_ids:
            return Result.fail("La liste des images est requise")

        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)

        images = {
            image.id: image
            for image in self._image_repo.find_by_product_id(command.product_id)
        }
        if not images:
            return Result.fail("Le produit n'a aucune image")
        if len(command.image_ids) != len(images) or len(set(command.image_ids)) != len(images):
            return Result.fail("La liste des images ne correspond pas aux images du produit")
        for image_id in command.image_ids:
            if image_id not in images:
                return Result.fail(f"Image {image_id} non trouvée pour ce produit")

        ordered = [images[image_id] for image_id in command.image_ids]
        for position, image in enumerate(ordered):
            image.update_position(position)

        self._image_repo.save_many(ordered)
        logger.info("Reordered %d images of product %s", len(ordered), command.product_id)
        return Result.ok([ProductImageResult.from_entity(image) for image in ordered])
