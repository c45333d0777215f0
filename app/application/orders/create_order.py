"""
Use case: Place a new order.

Input: CreateOrderCommand (creator, customer, items, shipping address)
Output: Result[OrderDetailResult]
Side effects: Persists a PENDING order.
Failure cases:
    - Invalid line item or shipping address
    - Missing customer or creator data
    - The creator has reached the sales limit of their plan
"""

import logging

from app.application.orders.dtos import CreateOrderCommand, OrderDetailResult
from app.domain.orders.entities import Order, OrderItem, ShippingAddress
from app.domain.orders.ports import OrderRepository, SalesQuotaService
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class CreateOrderUseCase:
    """Validates a cart and records it as a pending order."""

    def __init__(
        self, order_repo: OrderRepository, sales_quota: SalesQuotaService
    ) -> None:
        """Initialize the use case.

        Args:
            order_repo: Repository for persisting orders.
            sales_quota: Creator sales allowance checker.
        """
        self._order_repo = order_repo
        self._sales_quota = sales_quota

    def execute(self, command: CreateOrderCommand) -> Result[OrderDetailResult]:
        items: list[OrderItem] = []
        for line in command.items:
            item = OrderItem.create(
                product_id=line.product_id,
                product_name=line.product_name,
                price=line.price,
                quantity=line.quantity,
                variant_id=line.variant_id,
                variant_info=line.variant_info,
                image=line.image,
            )
            if item.is_failure:
                return Result.fail(item.error)
            items.append(item.value)

        address = ShippingAddress.create(
            street=command.shipping_address.street,
            city=command.shipping_address.city,
            postal_code=command.shipping_address.postal_code,
            country=command.shipping_address.country,
        )
        if address.is_failure:
            return Result.fail(address.error)

        created = Order.create(
            creator_id=command.creator_id,
            customer_id=command.customer_id,
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            items=items,
            shipping_address=address.value,
            shipping_mode=command.shipping_mode,
            relay_point_id=command.relay_point_id,
            relay_point_name=command.relay_point_name,
            shipping_cost=command.shipping_cost,
        )
        if created.is_failure:
            return Result.fail(created.error)

        quota = self._sales_quota.check_can_sell(command.creator_id)
        if quota.is_failure:
            logger.info("Order refused for creator=%s: %s", command.creator_id, quota.error)
            return Result.fail(quota.error)

        order = created.value
        self._order_repo.save(order)
        logger.info(
            "Created order %s (%s) for creator=%s total=%d",
            order.order_number,
            order.id,
            order.creator_id,
            order.total_amount,
        )
        return Result.ok(OrderDetailResult.from_entity(order))
