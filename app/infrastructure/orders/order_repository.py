"""
Adapter: Order repository.

Implements OrderRepository port.
Reads/writes the orders and order_items tables.

Saves use optimistic locking: the stored ``updated_at`` must still match
the version the order was loaded with, otherwise the write is rejected
with ConcurrentModificationError. The check, the upsert and the
replacement of the line items run in a single transaction.
"""

import logging
from typing import Any, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection, Engine

from app.domain.orders.entities import Order, OrderItem, ShippingAddress
from app.domain.orders.errors import ConcurrentModificationError, OrderMappingError
from app.domain.orders.ports import OrderFilters, OrderRepository, Pagination

logger = logging.getLogger(__name__)

_ORDER_COLUMNS = """
    id, order_number, creator_id, customer_id, customer_name, customer_email,
    shipping_street, shipping_city, shipping_postal_code, shipping_country,
    status, total_amount, stripe_payment_intent_id, stripe_refund_id,
    tracking_number, carrier, cancellation_reason, shipped_at, delivered_at,
    shipping_mode, relay_point_id, relay_point_name, shipping_cost,
    created_at, updated_at
"""

_UPSERT_ORDER = text(
    """
    INSERT INTO orders (
        id, order_number, creator_id, customer_id, customer_name, customer_email,
        shipping_street, shipping_city, shipping_postal_code, shipping_country,
        status, total_amount, stripe_payment_intent_id, stripe_refund_id,
        tracking_number, carrier, cancellation_reason, shipped_at, delivered_at,
        shipping_mode, relay_point_id, relay_point_name, shipping_cost,
        created_at, updated_at
    )
    VALUES (
        :id, :order_number, :creator_id, :customer_id, :customer_name, :customer_email,
        :shipping_street, :shipping_city, :shipping_postal_code, :shipping_country,
        :status, :total_amount, :stripe_payment_intent_id, :stripe_refund_id,
        :tracking_number, :carrier, :cancellation_reason, :shipped_at, :delivered_at,
        :shipping_mode, :relay_point_id, :relay_point_name, :shipping_cost,
        :created_at, :updated_at
    )
    ON CONFLICT (id)
    DO UPDATE SET
        customer_name = EXCLUDED.customer_name,
        customer_email = EXCLUDED.customer_email,
        shipping_street = EXCLUDED.shipping_street,
        shipping_city = EXCLUDED.shipping_city,
        shipping_postal_code = EXCLUDED.shipping_postal_code,
        shipping_country = EXCLUDED.shipping_country,
        status = EXCLUDED.status,
        total_amount = EXCLUDED.total_amount,
        stripe_payment_intent_id = EXCLUDED.stripe_payment_intent_id,
        stripe_refund_id = EXCLUDED.stripe_refund_id,
        tracking_number = EXCLUDED.tracking_number,
        carrier = EXCLUDED.carrier,
        cancellation_reason = EXCLUDED.cancellation_reason,
        shipped_at = EXCLUDED.shipped_at,
        delivered_at = EXCLUDED.delivered_at,
        shipping_mode = EXCLUDED.shipping_mode,
        relay_point_id = EXCLUDED.relay_point_id,
        relay_point_name = EXCLUDED.relay_point_name,
        shipping_cost = EXCLUDED.shipping_cost,
        updated_at = EXCLUDED.updated_at
    """
)

_INSERT_ITEM = text(
    """
    INSERT INTO order_items (
        id, order_id, product_id, variant_id, product_name, variant_info,
        price, quantity, image
    )
    VALUES (
        :id, :order_id, :product_id, :variant_id, :product_name, :variant_info,
        :price, :quantity, :image
    )
    """
)

_SELECT_ITEMS = text(
    """
    SELECT id, order_id, product_id, variant_id, product_name, variant_info,
           price, quantity, image
    FROM order_items
    WHERE order_id IN :order_ids
    ORDER BY order_id, id
    """
).bindparams(bindparam("order_ids", expanding=True))


def _order_params(order: Order) -> dict[str, Any]:
    address = order.shipping_address
    return {
        "id": order.id,
        "order_number": order.order_number,
        "creator_id": order.creator_id,
        "customer_id": order.customer_id,
        "customer_name": order.customer_name,
        "customer_email": order.customer_email,
        "shipping_street": address.street,
        "shipping_city": address.city,
        "shipping_postal_code": address.postal_code,
        "shipping_country": address.country,
        "status": order.status.value,
        "total_amount": order.total_amount,
        "stripe_payment_intent_id": order.stripe_payment_intent_id,
        "stripe_refund_id": order.stripe_refund_id,
        "tracking_number": order.tracking_number,
        "carrier": order.carrier,
        "cancellation_reason": order.cancellation_reason,
        "shipped_at": order.shipped_at,
        "delivered_at": order.delivered_at,
        "shipping_mode": order.shipping_mode,
        "relay_point_id": order.relay_point_id,
        "relay_point_name": order.relay_point_name,
        "shipping_cost": order.shipping_cost,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def _row_to_item(row: Any) -> OrderItem:
    m = row._mapping
    return OrderItem(
        id=m["id"],
        product_id=m["product_id"],
        variant_id=m["variant_id"],
        product_name=m["product_name"],
        variant_info=m["variant_info"],
        price=m["price"],
        quantity=m["quantity"],
        image=m["image"],
    )


def _row_to_order(row: Any, items: list[OrderItem]) -> Order:
    """Map a DB row and its items to an Order, raising on corrupt status."""
    m = row._mapping
    result = Order.reconstitute(
        id=m["id"],
        order_number=m["order_number"],
        creator_id=m["creator_id"],
        customer_id=m["customer_id"],
        customer_name=m["customer_name"],
        customer_email=m["customer_email"],
        items=items,
        shipping_address=ShippingAddress(
            street=m["shipping_street"],
            city=m["shipping_city"],
            postal_code=m["shipping_postal_code"],
            country=m["shipping_country"],
        ),
        status=m["status"],
        total_amount=m["total_amount"],
        stripe_payment_intent_id=m["stripe_payment_intent_id"],
        stripe_refund_id=m["stripe_refund_id"],
        tracking_number=m["tracking_number"],
        carrier=m["carrier"],
        cancellation_reason=m["cancellation_reason"],
        shipped_at=m["shipped_at"],
        delivered_at=m["delivered_at"],
        shipping_mode=m["shipping_mode"],
        relay_point_id=m["relay_point_id"],
        relay_point_name=m["relay_point_name"],
        shipping_cost=m["shipping_cost"],
        created_at=m["created_at"],
        updated_at=m["updated_at"],
    )
    if result.is_failure:
        raise OrderMappingError(m["id"], result.error or "unknown")
    return result.value


class OrderRepositoryAdapter(OrderRepository):
    """PostgreSQL adapter for the orders and order_items tables."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ── Writes ───────────────────────────────────────────────────────

    def save(self, order: Order) -> None:
        """Persist an order and its items under an optimistic lock.

        Raises:
            ConcurrentModificationError: If the stored row's ``updated_at``
                differs from the version the order was loaded with.
        """
        with self._engine.begin() as conn:
            row = conn.execute(
                text("SELECT updated_at FROM orders WHERE id = :id FOR UPDATE"),
                {"id": order.id},
            ).fetchone()

            if row is not None and row[0] != order.persisted_version:
                logger.warning(
                    "Concurrent modification on order %s: stored=%s loaded=%s",
                    order.id,
                    row[0],
                    order.persisted_version,
                )
                raise ConcurrentModificationError(order.id)

            conn.execute(_UPSERT_ORDER, _order_params(order))
            conn.execute(
                text("DELETE FROM order_items WHERE order_id = :order_id"),
                {"order_id": order.id},
            )
            if order.items:
                conn.execute(
                    _INSERT_ITEM,
                    [
                        {
                            "id": item.id,
                            "order_id": order.id,
                            "product_id": item.product_id,
                            "variant_id": item.variant_id,
                            "product_name": item.product_name,
                            "variant_info": item.variant_info,
                            "price": item.price,
                            "quantity": item.quantity,
                            "image": item.image,
                        }
                        for item in order.items
                    ],
                )

        order.persisted_version = order.updated_at
        logger.debug(
            "Saved order: id=%s number=%s status=%s items=%d",
            order.id,
            order.order_number,
            order.status.value,
            len(order.items),
        )

    def delete(self, order_id: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(text("DELETE FROM order_items WHERE order_id = :id"), {"id": order_id})
            conn.execute(text("DELETE FROM orders WHERE id = :id"), {"id": order_id})
        logger.debug("Deleted order: id=%s", order_id)

    # ── Reads ────────────────────────────────────────────────────────

    def _hydrate(self, conn: Connection, rows: list[Any]) -> list[Order]:
        """Attach the line items to each order row, with one items query."""
        if not rows:
            return []
        order_ids = [r._mapping["id"] for r in rows]
        items_by_order: dict[str, list[OrderItem]] = {oid: [] for oid in order_ids}
        for item_row in conn.execute(_SELECT_ITEMS, {"order_ids": order_ids}).fetchall():
            items_by_order[item_row._mapping["order_id"]].append(_row_to_item(item_row))
        return [_row_to_order(r, items_by_order[r._mapping["id"]]) for r in rows]

    def _find_one(self, where: str, params: dict[str, Any]) -> Optional[Order]:
        query = text(f"SELECT {_ORDER_COLUMNS} FROM orders WHERE {where}")
        with self._engine.connect() as conn:
            row = conn.execute(query, params).fetchone()
            if not row:
                return None
            return self._hydrate(conn, [row])[0]

    def _find_page(
        self, where: str, params: dict[str, Any], pagination: Optional[Pagination]
    ) -> tuple[list[Order], int]:
        pagination = pagination or Pagination()
        page_query = text(
            f"""
            SELECT {_ORDER_COLUMNS}
            FROM orders
            WHERE {where}
            ORDER BY created_at DESC
            OFFSET :skip LIMIT :take
            """
        )
        count_query = text(f"SELECT COUNT(*) FROM orders WHERE {where}")
        with self._engine.connect() as conn:
            rows = conn.execute(
                page_query, {**params, "skip": pagination.skip, "take": pagination.take}
            ).fetchall()
            total = conn.execute(count_query, params).scalar() or 0
            orders = self._hydrate(conn, list(rows))
        return orders, int(total)

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self._find_one("id = :id", {"id": order_id})

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        return self._find_one("order_number = :order_number", {"order_number": order_number})

    def find_by_creator_id(
        self,
        creator_id: str,
        filters: Optional[OrderFilters] = None,
        pagination: Optional[Pagination] = None,
    ) -> tuple[list[Order], int]:
        clauses = ["creator_id = :creator_id"]
        params: dict[str, Any] = {"creator_id": creator_id}
        if filters is not None:
            if filters.status is not None:
                clauses.append("status = :status")
                params["status"] = filters.status.value
            if filters.search:
                clauses.append(
                    "(order_number ILIKE :search OR customer_name ILIKE :search "
                    "OR customer_email ILIKE :search)"
                )
                params["search"] = f"%{filters.search}%"
            if filters.customer_id:
                clauses.append("customer_id = :customer_id")
                params["customer_id"] = filters.customer_id
        return self._find_page(" AND ".join(clauses), params, pagination)

    def find_by_customer_id(
        self, customer_id: str, pagination: Optional[Pagination] = None
    ) -> tuple[list[Order], int]:
        return self._find_page(
            "customer_id = :customer_id", {"customer_id": customer_id}, pagination
        )
