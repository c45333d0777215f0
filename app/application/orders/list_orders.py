"""
Use case: List a creator's orders with filters and pagination.

Input: ListOrdersQuery (creator_id, status, search, page, limit)
Output: Result[OrderPage]
Side effects: None (read-only query).
Failure cases:
    - Invalid page or limit
    - Unknown status filter
"""

import logging

from app.application.orders.common import total_pages, validate_pagination
from app.application.orders.dtos import ListOrdersQuery, OrderPage, OrderSummary
from app.domain.orders.entities import OrderStatus
from app.domain.orders.ports import OrderFilters, OrderRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class ListOrdersUseCase:
    """Dashboard listing of the orders received by a creator."""

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, query: ListOrdersQuery) -> Result[OrderPage]:
        if not query.creator_id or not query.creator_id.strip():
            return Result.fail("Creator ID est requis")

        pagination = validate_pagination(query.page, query.limit)
        if pagination.is_failure:
            return Result.fail(pagination.error)

        status = None
        if query.status:
            status_result = OrderStatus.from_value(query.status)
            if status_result.is_failure:
                return Result.fail(status_result.error)
            status = status_result.value

        search = query.search.strip() if query.search and query.search.strip() else None
        orders, total = self._order_repo.find_by_creator_id(
            query.creator_id,
            OrderFilters(status=status, search=search),
            pagination.value,
        )
        logger.debug(
            "Listed orders: creator=%s page=%d total=%d", query.creator_id, query.page, total
        )
        return Result.ok(
            OrderPage(
                orders=[OrderSummary.from_entity(o) for o in orders],
                total=total,
                page=query.page,
                limit=query.limit,
                total_pages=total_pages(total, query.limit),
            )
        )
