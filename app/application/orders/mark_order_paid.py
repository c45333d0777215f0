"""
Use case: Record the payment of an order.

Input: MarkOrderPaidCommand (order_id, payment_intent_id)
Output: Result[OrderDetailResult]
Side effects: Persists the PAID order and consumes one sale of the creator's plan.
Failure cases:
    - Unknown order
    - Order not PENDING
"""

import logging

from app.application.orders.common import ORDER_NOT_FOUND
from app.application.orders.dtos import MarkOrderPaidCommand, OrderDetailResult
from app.domain.orders.ports import OrderRepository, SalesQuotaService
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class MarkOrderPaidUseCase:
    """Moves a pending order to PAID once the payment succeeded."""

    def __init__(
        self, order_repo: OrderRepository, sales_quota: SalesQuotaService
    ) -> None:
        self._order_repo = order_repo
        self._sales_quota = sales_quota

    def execute(self, command: MarkOrderPaidCommand) -> Result[OrderDetailResult]:
        order = self._order_repo.find_by_id(command.order_id)
        if order is None:
            return Result.fail(ORDER_NOT_FOUND)

        paid = order.mark_as_paid(command.payment_intent_id)
        if paid.is_failure:
            return Result.fail(paid.error)

        self._order_repo.save(order)

        recorded = self._sales_quota.record_sale(order.creator_id)
        if recorded.is_failure:
            # The payment already happened; the order stays paid.
            logger.warning(
                "Sale not counted for creator=%s order=%s: %s",
                order.creator_id,
                order.id,
                recorded.error,
            )

        logger.info("Order %s marked as paid", order.order_number)
        return Result.ok(OrderDetailResult.from_entity(order))
