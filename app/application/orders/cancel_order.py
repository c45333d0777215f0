"""
Use case: Cancel an order before it ships.

Input: CancelOrderCommand (order_id, creator_id, reason)
Output: Result[OrderDetailResult]
Side effects: Persists the CANCELLED order with its reason.
Failure cases:
    - Empty reason
    - Unknown order, or order owned by another creator
    - Order already shipped, delivered, cancelled or refunded
"""

import logging

from app.application.orders.common import load_creator_order
from app.application.orders.dtos import CancelOrderCommand, OrderDetailResult
from app.domain.orders.ports import OrderRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class CancelOrderUseCase:
    """Cancels a pending or paid order on behalf of its creator."""

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, command: CancelOrderCommand) -> Result[OrderDetailResult]:
        """Run the cancellation.

        Args:
            command: Order id, acting creator and a free-text reason.

        Returns:
            Result wrapping the cancelled order.
        """
        if not command.reason or not command.reason.strip():
            return Result.fail("La raison d'annulation est requise")

        loaded = load_creator_order(self._order_repo, command.order_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        order = loaded.value

        cancelled = order.cancel(command.reason.strip())
        if cancelled.is_failure:
            return Result.fail(cancelled.error)

        self._order_repo.save(order)
        logger.info("Order %s cancelled by creator=%s", order.order_number, command.creator_id)
        return Result.ok(OrderDetailResult.from_entity(order))
