"""
Use case: List the orders placed by a customer.

Input: ListCustomerOrdersQuery (customer_id, page, limit)
Output: Result[OrderPage]
Side effects: None (read-only query).
Failure cases:
    - Missing customer id
    - Invalid page or limit
"""

from app.application.orders.common import total_pages, validate_pagination
from app.application.orders.dtos import ListCustomerOrdersQuery, OrderPage, OrderSummary
from app.domain.orders.ports import OrderRepository
from app.shared.domain import Result


class ListCustomerOrdersUseCase:
    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, query: ListCustomerOrdersQuery) -> Result[OrderPage]:
        if not query.customer_id or not query.customer_id.strip():
            return Result.fail("Customer ID est requis")

        pagination = validate_pagination(query.page, query.limit)
        if pagination.is_failure:
            return Result.fail(pagination.error)

        orders, total = self._order_repo.find_by_customer_id(
            query.customer_id, pagination.value
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
