"""
Pydantic schemas for subscriptions API request/response validation.

Response models read the application DTOs directly (from_attributes).
No business logic belongs here.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubscriptionResponse(BaseModel):
    """A creator subscription and its usage.

    Attributes:
        product_limit: Maximum published products, -1 when unlimited.
        sales_limit: Maximum sales per period, -1 when unlimited.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    creator_id: str
    plan: str
    status: str
    products_used: int
    sales_used: int
    product_limit: int
    sales_limit: int
    current_period_start: datetime
    current_period_end: datetime
    is_near_product_limit: bool
    is_near_sales_limit: bool
    stripe_subscription_id: Optional[str] = None
    grace_period_start: Optional[datetime] = None


class SubscriptionListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[SubscriptionResponse]
    total: int


class LimitCheckItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    current: int
    limit: int
    message: Optional[str] = None


class CheckLimitResponse(BaseModel):
    """Counters that were checked; unrequested ones are null."""

    products: Optional[LimitCheckItem] = None
    sales: Optional[LimitCheckItem] = None
    has_blocking_limit: bool
    has_warning: bool


class ActionLimitResponse(BaseModel):
    allowed: bool
    status: str
    current: int
    limit: int
    message: Optional[str] = None


class CheckoutRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254, description="Billing email")


class CheckoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    session_id: str
    url: Optional[str] = None


class ExtendSubscriptionRequest(BaseModel):
    days: int = Field(..., description="Number of days added to the current period")


class ResetUsageResponse(BaseModel):
    reset_count: int


class WebhookResponse(BaseModel):
    received: bool
    handled: bool
