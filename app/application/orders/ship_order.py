"""
Use case: Ship a paid order.

Input: ShipOrderCommand (order_id, creator_id, tracking_number, carrier)
Output: Result[OrderDetailResult]
Side effects: Persists the SHIPPED order.
Failure cases:
    - Missing tracking number or carrier
    - Unknown order, or order owned by another creator
    - Order not PAID
"""

import logging

from app.application.orders.common import load_creator_order
from app.application.orders.dtos import OrderDetailResult, ShipOrderCommand
from app.domain.orders.ports import OrderRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class ShipOrderUseCase:
    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, command: ShipOrderCommand) -> Result[OrderDetailResult]:
        if not command.tracking_number or not command.tracking_number.strip():
            return Result.fail("Le numéro de suivi est requis")
        if not command.carrier or not command.carrier.strip():
            return Result.fail("Le transporteur est requis")

        loaded = load_creator_order(self._order_repo, command.order_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        order = loaded.value

        shipped = order.ship(command.tracking_number, command.carrier)
        if shipped.is_failure:
            return Result.fail(shipped.error)

        self._order_repo.save(order)
        logger.info(
            "Order %s shipped with %s (%s)",
            order.order_number,
            order.carrier,
            order.tracking_number,
        )
        return Result.ok(OrderDetailResult.from_entity(order))
