"""
Data Transfer Objects for the orders application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.domain.orders.entities import Order

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class OrderItemInput:
    """A line requested by the customer. ``price`` is in cents."""

    product_id: str
    product_name: str
    price: int
    quantity: int
    variant_id: Optional[str] = None
    variant_info: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class ShippingAddressInput:
    street: str
    city: str
    postal_code: str
    country: str


@dataclass(frozen=True)
class CreateOrderCommand:
    """Input DTO for placing an order with one creator.

    Attributes:
        creator_id: Seller of every line in the order.
        customer_id: Buyer account id.
        items: Requested lines (at least one).
        shipping_address: Delivery address.
        shipping_mode: Optional delivery mode (home, relay point, ...).
        shipping_cost: Shipping fee in cents.
    """

    creator_id: str
    customer_id: str
    customer_name: str
    customer_email: str
    items: list[OrderItemInput]
    shipping_address: ShippingAddressInput
    shipping_mode: Optional[str] = None
    relay_point_id: Optional[str] = None
    relay_point_name: Optional[str] = None
    shipping_cost: Optional[int] = None


@dataclass(frozen=True)
class MarkOrderPaidCommand:
    order_id: str
    payment_intent_id: Optional[str] = None


@dataclass(frozen=True)
class ShipOrderCommand:
    order_id: str
    creator_id: str
    tracking_number: str
    carrier: str


@dataclass(frozen=True)
class MarkDeliveredCommand:
    order_id: str
    creator_id: str


@dataclass(frozen=True)
class CancelOrderCommand:
    order_id: str
    creator_id: str
    reason: str


@dataclass(frozen=True)
class RefundOrderCommand:
    order_id: str
    creator_id: str
    refund_id: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class GetOrderDetailQuery:
    """Exactly one of ``creator_id`` / ``customer_id`` identifies the viewer."""

    order_id: str
    creator_id: Optional[str] = None
    customer_id: Optional[str] = None


@dataclass(frozen=True)
class ListOrdersQuery:
    creator_id: str
    status: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class ListCustomerOrdersQuery:
    customer_id: str
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class OrderItemResult:
    id: str
    product_id: str
    variant_id: Optional[str]
    product_name: str
    variant_info: Optional[str]
    price: int
    quantity: int
    subtotal: int
    image: Optional[str]


@dataclass(frozen=True)
class OrderDetailResult:
    """Output DTO with everything a dashboard needs about one order."""

    id: str
    order_number: str
    creator_id: str
    customer_id: str
    customer_name: str
    customer_email: str
    status: str
    total_amount: int
    items: list[OrderItemResult]
    shipping_street: str
    shipping_city: str
    shipping_postal_code: str
    shipping_country: str
    created_at: datetime
    updated_at: datetime
    tracking_number: Optional[str] = None
    carrier: Optional[str] = None
    cancellation_reason: Optional[str] = None
    stripe_payment_intent_id: Optional[str] = None
    stripe_refund_id: Optional[str] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    shipping_mode: Optional[str] = None
    relay_point_id: Optional[str] = None
    relay_point_name: Optional[str] = None
    shipping_cost: Optional[int] = None

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDetailResult":
        return cls(
            id=order.id,
            order_number=order.order_number,
            creator_id=order.creator_id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            status=order.status.value,
            total_amount=order.total_amount,
            items=[
                OrderItemResult(
                    id=item.id,
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    product_name=item.product_name,
                    variant_info=item.variant_info,
                    price=item.price,
                    quantity=item.quantity,
                    subtotal=item.subtotal,
                    image=item.image,
                )
                for item in order.items
            ],
            shipping_street=order.shipping_address.street,
            shipping_city=order.shipping_address.city,
            shipping_postal_code=order.shipping_address.postal_code,
            shipping_country=order.shipping_address.country,
            created_at=order.created_at,
            updated_at=order.updated_at,
            tracking_number=order.tracking_number,
            carrier=order.carrier,
            cancellation_reason=order.cancellation_reason,
            stripe_payment_intent_id=order.stripe_payment_intent_id,
            stripe_refund_id=order.stripe_refund_id,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            shipping_mode=order.shipping_mode,
            relay_point_id=order.relay_point_id,
            relay_point_name=order.relay_point_name,
            shipping_cost=order.shipping_cost,
        )


@dataclass(frozen=True)
class OrderSummary:
    """One row of an order listing."""

    id: str
    order_number: str
    creator_id: str
    customer_name: str
    customer_email: str
    status: str
    total_amount: int
    item_count: int
    created_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> "OrderSummary":
        return cls(
            id=order.id,
            order_number=order.order_number,
            creator_id=order.creator_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            status=order.status.value,
            total_amount=order.total_amount,
            item_count=order.item_count,
            created_at=order.created_at,
        )


@dataclass(frozen=True)
class OrderPage:
    """A page of order summaries."""

    orders: list[OrderSummary]
    total: int
    page: int
    limit: int
    total_pages: int = field(default=0)
