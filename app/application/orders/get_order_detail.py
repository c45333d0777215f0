"""
Use case: Show one order to its creator or to its customer.

Input: GetOrderDetailQuery (order_id, creator_id or customer_id)
Output: Result[OrderDetailResult]
Side effects: None (read-only query).
Failure cases:
    - Unknown order
    - Viewer is neither the order's creator nor its customer
"""

from app.application.orders.common import NOT_ALLOWED_TO_VIEW, ORDER_NOT_FOUND
from app.application.orders.dtos import GetOrderDetailQuery, OrderDetailResult
from app.domain.orders.ports import OrderRepository
from app.shared.domain import Result


class GetOrderDetailUseCase:
    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, query: GetOrderDetailQuery) -> Result[OrderDetailResult]:
        if not query.order_id or not query.order_id.strip():
            return Result.fail("Order ID est requis")

        order = self._order_repo.find_by_id(query.order_id)
        if order is None:
            return Result.fail(ORDER_NOT_FOUND)

        is_creator = query.creator_id is not None and order.creator_id == query.creator_id
        is_customer = (
            query.customer_id is not None and order.customer_id == query.customer_id
        )
        if not (is_creator or is_customer):
            return Result.fail(NOT_ALLOWED_TO_VIEW)

        return Result.ok(OrderDetailResult.from_entity(order))
