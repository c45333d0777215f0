"""
Adapter: In-memory order repository.

Implements OrderRepository port with a plain dict, including the same
optimistic locking rule as the PostgreSQL adapter.
Used by tests and by local runs without a database.
"""

import copy
from typing import Optional

from app.domain.orders.entities import Order
from app.domain.orders.errors import ConcurrentModificationError
from app.domain.orders.ports import OrderFilters, OrderRepository, Pagination


class InMemoryOrderRepository(OrderRepository):
    """Dict-backed repository. Stores copies so callers cannot mutate state."""

    def __init__(self) -> None:
        self._items: dict[str, Order] = {}

    def save(self, order: Order) -> None:
        stored = self._items.get(order.id)
        if stored is not None and stored.updated_at != order.persisted_version:
            raise ConcurrentModificationError(order.id)
        order.persisted_version = order.updated_at
        self._items[order.id] = copy.deepcopy(order)

    def find_by_id(self, order_id: str) -> Optional[Order]:
        order = self._items.get(order_id)
        return copy.deepcopy(order) if order else None

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        for order in self._items.values():
            if order.order_number == order_number:
                return copy.deepcopy(order)
        return None

    @staticmethod
    def _paginate(
        orders: list[Order], pagination: Optional[Pagination]
    ) -> tuple[list[Order], int]:
        pagination = pagination or Pagination()
        ordered = sorted(orders, key=lambda o: o.created_at, reverse=True)
        window = ordered[pagination.skip : pagination.skip + pagination.take]
        return [copy.deepcopy(o) for o in window], len(ordered)

    def find_by_creator_id(
        self,
        creator_id: str,
        filters: Optional[OrderFilters] = None,
        pagination: Optional[Pagination] = None,
    ) -> tuple[list[Order], int]:
        filters = filters or OrderFilters()
        needle = filters.search.lower() if filters.search else None
        matches = [
            o
            for o in self._items.values()
            if o.creator_id == creator_id
            and (filters.status is None or o.status is filters.status)
            and (filters.customer_id is None or o.customer_id == filters.customer_id)
            and (
                needle is None
                or needle in o.order_number.lower()
                or needle in o.customer_name.lower()
                or needle in o.customer_email.lower()
            )
        ]
        return self._paginate(matches, pagination)

    def find_by_customer_id(
        self, customer_id: str, pagination: Optional[Pagination] = None
    ) -> tuple[list[Order], int]:
        matches = [o for o in self._items.values() if o.customer_id == customer_id]
        return self._paginate(matches, pagination)

    def delete(self, order_id: str) -> None:
        self._items.pop(order_id, None)
