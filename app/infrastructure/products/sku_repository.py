"""
Adapter: SKU repository.

Implements SkuRepository port over the product_skus table. A unique
index on (product_id, variant_id, size), with NULLs folded to '',
guarantees one row per combination.
"""

import logging
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.domain.products.entities import ProductSku
from app.domain.products.ports import SkuRepository

logger = logging.getLogger(__name__)

_SKU_COLUMNS = "id, product_id, variant_id, size, stock, updated_at"

_UPSERT_SKU = text(
    """
    INSERT INTO product_skus (id, product_id, variant_id, size, stock, updated_at)
    VALUES (:id, :product_id, :variant_id, :size, :stock, :updated_at)
    ON CONFLICT (id)
    DO UPDATE SET
        stock = EXCLUDED.stock,
        updated_at = EXCLUDED.updated_at
    """
)


def _row_to_sku(row: Any) -> ProductSku:
    m = row._mapping
    return ProductSku(
        id=m["id"],
        product_id=m["product_id"],
        variant_id=m["variant_id"],
        size=m["size"],
        stock=m["stock"],
        updated_at=m["updated_at"],
    )


class SkuRepositoryAdapter(SkuRepository):
    """PostgreSQL adapter for the product_skus table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_by_product_id(self, product_id: str) -> list[ProductSku]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(
                    f"SELECT {_SKU_COLUMNS} FROM product_skus "
                    "WHERE product_id = :product_id ORDER BY variant_id, size"
                ),
                {"product_id": product_id},
            ).fetchall()
        return [_row_to_sku(r) for r in rows]

    def find_by_key(
        self, product_id: str, variant_id: Optional[str], size: Optional[str]
    ) -> Optional[ProductSku]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(
                    f"""
                    SELECT {_SKU_COLUMNS}
                    FROM product_skus
                    WHERE product_id = :product_id
                      AND COALESCE(variant_id, '') = :variant_id
                      AND COALESCE(size, '') = :size
                    """
                ),
                {"product_id": product_id, "variant_id": variant_id or "", "size": size or ""},
            ).fetchone()
        return _row_to_sku(row) if row else None

    def save(self, sku: ProductSku) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                _UPSERT_SKU,
                {
                    "id": sku.id,
                    "product_id": sku.product_id,
                    "variant_id": sku.variant_id,
                    "size": sku.size,
                    "stock": sku.stock,
                    "updated_at": sku.updated_at,
                },
            )
        logger.debug(
            "Saved SKU: product=%s variant=%s size=%s stock=%d",
            sku.product_id,
            sku.variant_id,
            sku.size,
            sku.stock,
        )
