"""
Adapter: Product variant repository.

Implements VariantRepository port over the product_variants table.
Variant image URLs are kept in a JSONB array column.
"""

import json
import logging
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.domain.products.entities import ProductVariant
from app.domain.products.ports import VariantRepository
from app.domain.products.value_objects import Money

logger = logging.getLogger(__name__)

_VARIANT_COLUMNS = """
    v.id, v.product_id, v.name, v.sku, v.price_override, v.stock, v.color,
    v.color_code, v.images, v.is_active, v.created_at, v.updated_at, p.currency
"""

_UPSERT_VARIANT = text(
    """
    INSERT INTO product_variants (
        id, product_id, name, sku, price_override, stock, color, color_code,
        images, is_active, created_at, updated_at
    )
    VALUES (
        :id, :product_id, :name, :sku, :price_override, :stock, :color, :color_code,
        CAST(:images AS JSONB), :is_active, :created_at, :updated_at
    )
    ON CONFLICT (id)
    DO UPDATE SET
        name = EXCLUDED.name,
        sku = EXCLUDED.sku,
        price_override = EXCLUDED.price_override,
        stock = EXCLUDED.stock,
        color = EXCLUDED.color,
        color_code = EXCLUDED.color_code,
        images = EXCLUDED.images,
        is_active = EXCLUDED.is_active,
        updated_at = EXCLUDED.updated_at
    """
)


def _load_images(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return list(json.loads(raw)) if raw else []
    return list(raw)


def _row_to_variant(row: Any) -> ProductVariant:
    m = row._mapping
    price_override = m["price_override"]
    return ProductVariant(
        id=m["id"],
        product_id=m["product_id"],
        name=m["name"],
        sku=m["sku"],
        price_override=(
            Money.from_cents(price_override, m["currency"])
            if price_override is not None
            else None
        ),
        stock=m["stock"],
        color=m["color"],
        color_code=m["color_code"],
        images=_load_images(m["images"]),
        is_active=m["is_active"],
        created_at=m["created_at"],
        updated_at=m["updated_at"],
    )


class VariantRepositoryAdapter(VariantRepository):
    """PostgreSQL adapter for the product_variants table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _select(self, where: str, params: dict[str, Any]) -> list[ProductVariant]:
        query = text(
            f"""
            SELECT {_VARIANT_COLUMNS}
            FROM product_variants v
            JOIN products p ON p.id = v.product_id
            WHERE {where}
            ORDER BY v.created_at
            """
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_variant(r) for r in rows]

    def find_by_id(self, variant_id: str) -> Optional[ProductVariant]:
        variants = self._select("v.id = :id", {"id": variant_id})
        return variants[0] if variants else None

    def find_by_product_id(self, product_id: str) -> list[ProductVariant]:
        return self._select("v.product_id = :product_id", {"product_id": product_id})

    def count_by_product_id(self, product_id: str) -> int:
        with self._engine.connect() as conn:
            total = conn.execute(
                text("SELECT COUNT(*) FROM product_variants WHERE product_id = :product_id"),
                {"product_id": product_id},
            ).scalar()
        return int(total or 0)

    def save(self, variant: ProductVariant) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                _UPSERT_VARIANT,
                {
                    "id": variant.id,
                    "product_id": variant.product_id,
                    "name": variant.name,
                    "sku": variant.sku,
                    "price_override": (
                        variant.price_override.amount if variant.price_override else None
                    ),
                    "stock": variant.stock,
                    "color": variant.color,
                    "color_code": variant.color_code,
                    "images": json.dumps(variant.images),
                    "is_active": variant.is_active,
                    "created_at": variant.created_at,
                    "updated_at": variant.updated_at,
                },
            )
        logger.debug("Saved variant: id=%s product=%s", variant.id, variant.product_id)

    def delete(self, variant_id: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(text("DELETE FROM product_variants WHERE id = :id"), {"id": variant_id})
        logger.debug("Deleted variant: id=%s", variant_id)
