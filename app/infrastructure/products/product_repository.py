"""
Adapter: Product repository.

Implements ProductRepository port.
Reads/writes the products table; prices are stored as integer cents
with their currency.
"""

import logging
from typing import Any, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Engine

from app.domain.products.entities import Product
from app.domain.products.errors import ProductMappingError
from app.domain.products.ports import ProductFilters, ProductPagination, ProductRepository
from app.domain.products.value_objects import Money

logger = logging.getLogger(__name__)

_PRODUCT_COLUMNS = """
    id, creator_id, project_id, name, description, price, currency, status,
    published_at, created_at, updated_at
"""

_UPSERT_PRODUCT = text(
    """
    INSERT INTO products (
        id, creator_id, project_id, name, description, price, currency, status,
        published_at, created_at, updated_at
    )
    VALUES (
        :id, :creator_id, :project_id, :name, :description, :price, :currency, :status,
        :published_at, :created_at, :updated_at
    )
    ON CONFLICT (id)
    DO UPDATE SET
        project_id = EXCLUDED.project_id,
        name = EXCLUDED.name,
        description = EXCLUDED.description,
        price = EXCLUDED.price,
        currency = EXCLUDED.currency,
        status = EXCLUDED.status,
        published_at = EXCLUDED.published_at,
        updated_at = EXCLUDED.updated_at
    """
)

_COUNT_BY_PROJECT = text(
    """
    SELECT project_id, COUNT(*) AS total
    FROM products
    WHERE project_id IN :project_ids
    GROUP BY project_id
    """
).bindparams(bindparam("project_ids", expanding=True))


def _row_to_product(row: Any) -> Product:
    m = row._mapping
    result = Product.reconstitute(
        id=m["id"],
        creator_id=m["creator_id"],
        project_id=m["project_id"],
        name=m["name"],
        description=m["description"],
        price=Money.from_cents(m["price"], m["currency"]),
        status=m["status"],
        published_at=m["published_at"],
        created_at=m["created_at"],
        updated_at=m["updated_at"],
    )
    if result.is_failure:
        raise ProductMappingError(m["id"], result.error or "unknown")
    return result.value


class ProductRepositoryAdapter(ProductRepository):
    """PostgreSQL adapter for the products table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save(self, product: Product) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                _UPSERT_PRODUCT,
                {
                    "id": product.id,
                    "creator_id": product.creator_id,
                    "project_id": product.project_id,
                    "name": product.name,
                    "description": product.description,
                    "price": product.price.amount,
                    "currency": product.price.currency,
                    "status": product.status.value,
                    "published_at": product.published_at,
                    "created_at": product.created_at,
                    "updated_at": product.updated_at,
                },
            )
        logger.debug("Saved product: id=%s status=%s", product.id, product.status.value)

    def delete(self, product_id: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(text("DELETE FROM products WHERE id = :id"), {"id": product_id})
        logger.debug("Deleted product: id=%s", product_id)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        query = text(f"SELECT {_PRODUCT_COLUMNS} FROM products WHERE id = :id")
        with self._engine.connect() as conn:
            row = conn.execute(query, {"id": product_id}).fetchone()
        return _row_to_product(row) if row else None

    def find_by_creator_id(
        self,
        creator_id: str,
        filters: Optional[ProductFilters] = None,
        pagination: Optional[ProductPagination] = None,
    ) -> tuple[list[Product], int]:
        pagination = pagination or ProductPagination()
        clauses = ["creator_id = :creator_id"]
        params: dict[str, Any] = {"creator_id": creator_id}
        if filters is not None:
            if filters.status is not None:
                clauses.append("status = :status")
                params["status"] = filters.status.value
            if filters.project_id:
                clauses.append("project_id = :project_id")
                params["project_id"] = filters.project_id
            if filters.search:
                clauses.append("(name ILIKE :search OR description ILIKE :search)")
                params["search"] = f"%{filters.search}%"
        where = " AND ".join(clauses)

        page_query = text(
            f"""
            SELECT {_PRODUCT_COLUMNS}
            FROM products
            WHERE {where}
            ORDER BY created_at DESC
            OFFSET :skip LIMIT :take
            """
        )
        count_query = text(f"SELECT COUNT(*) FROM products WHERE {where}")
        with self._engine.connect() as conn:
            rows = conn.execute(
                page_query, {**params, "skip": pagination.skip, "take": pagination.take}
            ).fetchall()
            total = conn.execute(count_query, params).scalar() or 0
        return [_row_to_product(r) for r in rows], int(total)

    def count_by_project_ids(self, project_ids: list[str]) -> dict[str, int]:
        counts = {project_id: 0 for project_id in project_ids}
        if not project_ids:
            return counts
        with self._engine.connect() as conn:
            rows = conn.execute(_COUNT_BY_PROJECT, {"project_ids": project_ids}).fetchall()
        for row in rows:
            counts[row._mapping["project_id"]] = int(row._mapping["total"])
        return counts

    def detach_project(self, project_id: str) -> int:
        query = text(
            "UPDATE products SET project_id = NULL, updated_at = NOW() "
            "WHERE project_id = :project_id"
        )
        with self._engine.begin() as conn:
            detached = conn.execute(query, {"project_id": project_id}).rowcount
        logger.debug("Detached %d product(s) from project %s", detached, project_id)
        return int(detached or 0)
