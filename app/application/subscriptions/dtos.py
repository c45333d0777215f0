"""
Data Transfer Objects for the subscriptions application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from app.domain.subscriptions.entities import Subscription


class LimitStatus(Enum):
    """Outcome of a usage limit check."""

    OK = "OK"
    WARNING = "WARNING"
    BLOCKED = "BLOCKED"


class LimitType(Enum):
    PRODUCTS = "products"
    SALES = "sales"
    BOTH = "both"


class LimitAction(Enum):
    PUBLISH_PRODUCT = "publish_product"
    MAKE_SALE = "make_sale"


@dataclass(frozen=True)
class SubscriptionResult:
    """Output DTO describing a subscription and its usage.

    Attributes:
        product_limit: Maximum published products, -1 when unlimited.
        sales_limit: Maximum sales per period, -1 when unlimited.
    """

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

    @classmethod
    def from_entity(cls, subscription: Subscription) -> "SubscriptionResult":
        return cls(
            id=subscription.id,
            user_id=subscription.user_id,
            creator_id=subscription.creator_id,
            plan=subscription.plan.value,
            status=subscription.status.value,
            products_used=subscription.products_used,
            sales_used=subscription.sales_used,
            product_limit=subscription.product_limit,
            sales_limit=subscription.sales_limit,
            current_period_start=subscription.current_period_start,
            current_period_end=subscription.current_period_end,
            is_near_product_limit=subscription.is_near_product_limit,
            is_near_sales_limit=subscription.is_near_sales_limit,
            stripe_subscription_id=subscription.stripe_subscription_id,
            grace_period_start=subscription.grace_period_start,
        )


@dataclass(frozen=True)
class GetSubscriptionQuery:
    creator_id: str


@dataclass(frozen=True)
class CheckLimitQuery:
    """Input DTO for a limit check.

    Attributes:
        creator_id: Creator whose subscription is checked.
        limit_type: Which counter(s) to check.
    """

    creator_id: str
    limit_type: LimitType = LimitType.BOTH


@dataclass(frozen=True)
class LimitCheck:
    """Result of checking one counter against its limit."""

    status: LimitStatus
    current: int
    limit: int
    message: Optional[str] = None


@dataclass(frozen=True)
class CheckLimitResult:
    """Output DTO for a limit check.

    ``products`` / ``sales`` are None when not requested.
    """

    products: Optional[LimitCheck] = None
    sales: Optional[LimitCheck] = None

    @property
    def has_blocking_limit(self) -> bool:
        return any(
            c is not None and c.status is LimitStatus.BLOCKED
            for c in (self.products, self.sales)
        )

    @property
    def has_warning(self) -> bool:
        # A blocked counter is also worth a warning banner.
        return any(
            c is not None and c.status in (LimitStatus.WARNING, LimitStatus.BLOCKED)
            for c in (self.products, self.sales)
        )


@dataclass(frozen=True)
class CheckLimitForActionQuery:
    creator_id: str
    action: LimitAction


@dataclass(frozen=True)
class ActionLimitResult:
    """Whether an action is permitted under the current plan."""

    allowed: bool
    status: LimitStatus
    current: int
    limit: int
    message: Optional[str] = None


@dataclass(frozen=True)
class CreateSubscriptionCommand:
    user_id: str
    creator_id: str


@dataclass(frozen=True)
class UpgradeToProCommand:
    """Input DTO for the upgrade after a completed checkout."""

    creator_id: str
    stripe_subscription_id: str
    stripe_customer_id: Optional[str] = None


@dataclass(frozen=True)
class DowngradeToFreeCommand:
    creator_id: str


@dataclass(frozen=True)
class HandlePaymentFailedCommand:
    stripe_subscription_id: str


@dataclass(frozen=True)
class ReactivateSubscriptionCommand:
    stripe_subscription_id: str


@dataclass(frozen=True)
class ExtendSubscriptionCommand:
    """Input DTO for an administrative period extension.

    Attributes:
        subscription_id: Subscription to extend.
        admin_id: Id of the administrator performing the change.
        is_admin: Whether the caller holds the ADMIN role.
        days: Number of days to add (> 0).
    """

    subscription_id: str
    admin_id: str
    is_admin: bool
    days: int


@dataclass(frozen=True)
class ListSubscriptionsQuery:
    plan: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class ListSubscriptionsResult:
    items: list[SubscriptionResult]
    total: int


class UsageKind(Enum):
    PRODUCTS = "products"
    SALES = "sales"


@dataclass(frozen=True)
class RecordUsageCommand:
    """Input DTO for a usage counter change.

    Attributes:
        creator_id: Creator whose counter changes.
        kind: Counter to change.
        released: True when a slot is given back (e.g. product unpublished).
    """

    creator_id: str
    kind: UsageKind
    released: bool = False


@dataclass(frozen=True)
class CreateCheckoutSessionCommand:
    user_id: str
    creator_id: str
    email: str


@dataclass(frozen=True)
class CheckoutSessionResult:
    session_id: str
    url: Optional[str]


@dataclass(frozen=True)
class BillingEventOutcome:
    """Whether a billing event triggered a subscription change."""

    event_type: str
    handled: bool
