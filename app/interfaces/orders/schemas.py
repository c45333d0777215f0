"""
Pydantic schemas for orders API request/response validation.

Amounts are integers in cents. Response models read the application
DTOs directly (from_attributes).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1, max_length=200)
    price: int = Field(..., description="Unit price in cents")
    quantity: int = Field(..., description="Number of units (>= 1)")
    variant_id: Optional[str] = None
    variant_info: Optional[str] = None
    image: Optional[str] = None


class ShippingAddressRequest(BaseModel):
    street: str
    city: str
    postal_code: str
    country: str


class CreateOrderRequest(BaseModel):
    """Request schema for placing an order with one creator.

    Attributes:
        creator_id: Seller of every line.
        items: Requested lines; at least one.
        shipping_cost: Shipping fee in cents.
    """

    creator_id: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_email: str = Field(..., min_length=3, max_length=254)
    items: list[OrderItemRequest] = Field(..., min_length=1)
    shipping_address: ShippingAddressRequest
    shipping_mode: Optional[str] = None
    relay_point_id: Optional[str] = None
    relay_point_name: Optional[str] = None
    shipping_cost: Optional[int] = Field(None, ge=0)


class MarkPaidRequest(BaseModel):
    payment_intent_id: Optional[str] = None


class ShipOrderRequest(BaseModel):
    tracking_number: str
    carrier: str


class CancelOrderRequest(BaseModel):
    reason: str


class RefundOrderRequest(BaseModel):
    refund_id: str
    reason: Optional[str] = None


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    variant_id: Optional[str] = None
    product_name: str
    variant_info: Optional[str] = None
    price: int
    quantity: int
    subtotal: int
    image: Optional[str] = None


class OrderDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    creator_id: str
    customer_id: str
    customer_name: str
    customer_email: str
    status: str
    total_amount: int
    items: list[OrderItemResponse]
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


class OrderSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    creator_id: str
    customer_name: str
    customer_email: str
    status: str
    total_amount: int
    item_count: int
    created_at: datetime


class OrderPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    orders: list[OrderSummaryResponse]
    total: int
    page: int
    limit: int
    total_pages: int
