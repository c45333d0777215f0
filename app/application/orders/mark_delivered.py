"""
Use case: Confirm delivery of a shipped order.

Input: MarkDeliveredCommand (order_id, creator_id)
Output: Result[OrderDetailResult]
Side effects: Persists the DELIVERED order.
Failure cases:
    - Unknown order, or order owned by another creator
    - Order not SHIPPED
"""

import logging

from app.application.orders.common import load_creator_order
from app.application.orders.dtos import MarkDeliveredCommand, OrderDetailResult
from app.domain.orders.ports import OrderRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class MarkDeliveredUseCase:
    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, command: MarkDeliveredCommand) -> Result[OrderDetailResult]:
        loaded = load_creator_order(self._order_repo, command.order_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        order = loaded.value

        delivered = order.mark_as_delivered()
        if delivered.is_failure:
            return Result.fail(delivered.error)

        self._order_repo.save(order)
        logger.info("Order %s delivered", order.order_number)
        return Result.ok(OrderDetailResult.from_entity(order))
