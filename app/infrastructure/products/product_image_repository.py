"""
Adapter: Product image repository.

Implements ProductImageRepository port over the product_images table.
"""

import logging
from typing import Any, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Engine

from app.domain.products.entities import ProductImage
from app.domain.products.errors import ProductMappingError
from app.domain.products.ports import ProductImageRepository
from app.domain.products.value_objects import ImageUrl

logger = logging.getLogger(__name__)

_SELECT_MAIN_IMAGES = text(
    "SELECT id, product_id, url, alt, position, created_at "
    "FROM product_images WHERE position = 0 AND product_id IN :product_ids"
).bindparams(bindparam("product_ids", expanding=True))

_UPSERT_IMAGE = text(
    """
    INSERT INTO product_images (id, product_id, url, alt, position, created_at)
    VALUES (:id, :product_id, :url, :alt, :position, :created_at)
    ON CONFLICT (id)
    DO UPDATE SET
        url = EXCLUDED.url,
        alt = EXCLUDED.alt,
        position = EXCLUDED.position
    """
)


def _row_to_image(row: Any) -> ProductImage:
    m = row._mapping
    url = ImageUrl.create(m["url"])
    if url.is_failure:
        raise ProductMappingError(m["id"], url.error or "unknown")
    return ProductImage(
        id=m["id"],
        product_id=m["product_id"],
        url=url.value,
        alt=m["alt"] or "",
        position=m["position"],
        created_at=m["created_at"],
    )


def _image_params(image: ProductImage) -> dict[str, Any]:
    return {
        "id": image.id,
        "product_id": image.product_id,
        "url": image.url.url,
        "alt": image.alt,
        "position": image.position,
        "created_at": image.created_at,
    }


class ProductImageRepositoryAdapter(ProductImageRepository):
    """PostgreSQL adapter for the product_images table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_by_id(self, image_id: str) -> Optional[ProductImage]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(
                    "SELECT id, product_id, url, alt, position, created_at "
                    "FROM product_images WHERE id = :id"
                ),
                {"id": image_id},
            ).fetchone()
        return _row_to_image(row) if row else None

    def find_by_product_id(self, product_id: str) -> list[ProductImage]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(
                    "SELECT id, product_id, url, alt, position, created_at "
                    "FROM product_images WHERE product_id = :product_id "
                    "ORDER BY position"
                ),
                {"product_id": product_id},
            ).fetchall()
        return [_row_to_image(r) for r in rows]

    def count_by_product_id(self, product_id: str) -> int:
        with self._engine.connect() as conn:
            total = conn.execute(
                text("SELECT COUNT(*) FROM product_images WHERE product_id = :product_id"),
                {"product_id": product_id},
            ).scalar()
        return int(total or 0)

    def find_main_by_product_ids(self, product_ids: list[str]) -> dict[str, ProductImage]:
        if not product_ids:
            return {}
        with self._engine.connect() as conn:
            rows = conn.execute(_SELECT_MAIN_IMAGES, {"product_ids": product_ids}).fetchall()
        images = [_row_to_image(r) for r in rows]
        return {image.product_id: image for image in images}

    def save(self, image: ProductImage) -> None:
        self.save_many([image])

    def save_many(self, images: list[ProductImage]) -> None:
        if not images:
            return
        with self._engine.begin() as conn:
            conn.execute(_UPSERT_IMAGE, [_image_params(image) for image in images])
        logger.debug("Saved %d product image(s)", len(images))

    def delete(self, image_id: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(text("DELETE FROM product_images WHERE id = :id"), {"id": image_id})
        logger.debug("Deleted product image: id=%s", image_id)
