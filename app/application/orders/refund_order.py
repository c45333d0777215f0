"""
Use case: Refund a paid order.

Input: RefundOrderCommand (order_id, creator_id, refund_id, reason)
Output: Result[OrderDetailResult]
Side effects: Persists the REFUNDED order.
Failure cases:
    - Unknown order, or order owned by another creator
    - Order not PAID
    - Missing refund reference
"""

import logging

from app.application.orders.common import load_creator_order
from app.application.orders.dtos import OrderDetailResult, RefundOrderCommand
from app.domain.orders.ports import OrderRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class RefundOrderUseCase:
    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, command: RefundOrderCommand) -> Result[OrderDetailResult]:
        loaded = load_creator_order(self._order_repo, command.order_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        order = loaded.value

        refunded = order.refund(command.refund_id, command.reason)
        if refunded.is_failure:
            return Result.fail(refunded.error)

        self._order_repo.save(order)
        logger.info("Order %s refunded (%s)", order.order_number, order.stripe_refund_id)
        return Result.ok(OrderDetailResult.from_entity(order))
