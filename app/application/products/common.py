"""
Helpers shared by the product use cases.

- Loading a product or a project on behalf of its creator
- Checking pagination windows and picking listing thumbnails
- Validating uploaded image files
- Best-effort removal of hosted images
"""

import logging
import os
from typing import Iterable, Optional

from app.application.products.dtos import MAX_PAGE_SIZE
from app.domain.products.entities import Product, ProductVariant, Project
from app.domain.products.ports import (
    ImageUploadService,
    ProductImageRepository,
    ProductRepository,
    ProjectRepository,
    VariantRepository,
)
from app.shared.domain import Result

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Produit non trouvé"
NOT_ALLOWED = "Vous n'êtes pas autorisé à modifier ce produit"
VARIANT_NOT_FOUND = "Variante non trouvée"
PROJECT_NOT_FOUND = "Projet non trouvé"
PROJECT_NOT_ALLOWED = "Vous n'êtes pas autorisé à modifier ce projet"

ALLOWED_IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp"})
MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024


def load_owned_product(
    product_repo: ProductRepository, product_id: str, creator_id: str
) -> Result[Product]:
    """Fetch a product and check that ``creator_id`` owns it."""
    if not product_id or not product_id.strip():
        return Result.fail("Product ID est requis")
    if not creator_id or not creator_id.strip():
        return Result.fail("Creator ID est requis")
    product = product_repo.find_by_id(product_id)
    if product is None:
        return Result.fail(PRODUCT_NOT_FOUND)
    if not product.is_owned_by(creator_id):
        return Result.fail(NOT_ALLOWED)
    return Result.ok(product)


def load_owned_project(
    project_repo: ProjectRepository, project_id: str, creator_id: str
) -> Result[Project]:
    """Fetch a project and check that ``creator_id`` owns it."""
    if not project_id or not project_id.strip():
        return Result.fail("Project ID est requis")
    if not creator_id or not creator_id.strip():
        return Result.fail("Creator ID est requis")
    project = project_repo.find_by_id(project_id)
    if project is None:
        return Result.fail(PROJECT_NOT_FOUND)
    if not project.is_owned_by(creator_id):
        return Result.fail(PROJECT_NOT_ALLOWED)
    return Result.ok(project)


def load_product_variant(
    variant_repo: VariantRepository, variant_id: str, product_id: str
) -> Result[ProductVariant]:
    """Fetch a variant and check that it belongs to ``product_id``."""
    variant = variant_repo.find_by_id(variant_id)
    if variant is None or variant.product_id != product_id:
        return Result.fail(VARIANT_NOT_FOUND)
    return Result.ok(variant)


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lstrip(".").lower()


def validate_image_file(
    data: Optional[bytes], filename: str, max_size: int = MAX_IMAGE_SIZE_BYTES
) -> Result[None]:
    """Check that an upload is a non-empty jpg/png/webp under ``max_size``."""
    if not data:
        return Result.fail("Le fichier est requis")
    if file_extension(filename) not in ALLOWED_IMAGE_EXTENSIONS:
        return Result.fail("Format d'image non supporté")
    if len(data) > max_size:
        return Result.fail(f"L'image ne doit pas dépasser {max_size // (1024 * 1024)} Mo")
    return Result.ok()


def delete_hosted_images(image_upload: ImageUploadService, urls: Iterable[str]) -> None:
    """Delete files at the image host; failures are logged, never raised."""
    for url in urls:
        deleted = image_upload.delete(url)
        if deleted.is_failure:
            logger.warning("Could not delete hosted image %s: %s", url, deleted.error)


def validate_page_window(page: int, limit: int) -> Result[None]:
    if page < 1:
        return Result.fail("La page doit être supérieure ou égale à 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        return Result.fail(f"La limite doit être comprise entre 1 et {MAX_PAGE_SIZE}")
    return Result.ok()


def main_image_urls(
    image_repo: ProductImageRepository,
    variant_repo: VariantRepository,
    products: list[Product],
) -> dict[str, str]:
    """Thumbnail of each product: its main gallery image, else a variant image."""
    urls = {
        product_id: image.url.url
        for product_id, image in image_repo.find_main_by_product_ids(
            [p.id for p in products]
        ).items()
    }
    for product in products:
        if product.id in urls:
            continue
        for variant in variant_repo.find_by_product_id(product.id):
            if variant.images:
                urls[product.id] = variant.images[0]
                break
    return urls
