"""
Domain entities for the subscriptions bounded context.

A creator owns exactly one subscription. The plan decides how many
products can be published and how many sales can be accepted per
billing period. Entities contain no framework imports and no IO.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from app.shared.domain import Entity, Result, generate_id, utcnow

BILLING_PERIOD_DAYS = 30
NEAR_LIMIT_RATIO = 0.8
UNLIMITED = -1


class Plan(Enum):
    """Subscription plan."""

    FREE = "FREE"
    PRO = "PRO"

    @classmethod
    def from_value(cls, value: str) -> Result["Plan"]:
        """Validate a raw plan value (e.g. read from the database)."""
        try:
            return Result.ok(cls(value))
        except ValueError:
            return Result.fail(f"Plan invalide: {value}")


class SubscriptionStatus(Enum):
    """Billing status of a subscription."""

    ACTIVE = "ACTIVE"
    PAST_DUE = "PAST_DUE"
    CANCELLED = "CANCELLED"

    @classmethod
    def from_value(cls, value: str) -> Result["SubscriptionStatus"]:
        try:
            return Result.ok(cls(value))
        except ValueError:
            return Result.fail(f"Statut d'abonnement invalide: {value}")


@dataclass(frozen=True)
class PlanLimits:
    """Usage allowance of a plan. ``UNLIMITED`` (-1) disables a limit."""

    products: int
    sales: int


PLAN_LIMITS: dict[Plan, PlanLimits] = {
    Plan.FREE: PlanLimits(products=5, sales=10),
    Plan.PRO: PlanLimits(products=UNLIMITED, sales=UNLIMITED),
}


def _is_near(used: int, limit: int) -> bool:
    if limit == UNLIMITED:
        return False
    return used >= limit * NEAR_LIMIT_RATIO


def _is_at(used: int, limit: int) -> bool:
    if limit == UNLIMITED:
        return False
    return used >= limit


@dataclass(eq=False)
class Subscription(Entity):
    """A creator's subscription with its usage counters.

    Build with ``Subscription.create`` for a new creator or
    ``Subscription.reconstitute`` when loading from storage.
    """

    user_id: str
    creator_id: str
    plan: Plan
    status: SubscriptionStatus
    current_period_start: datetime
    current_period_end: datetime
    products_used: int = 0
    sales_used: int = 0
    stripe_subscription_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    grace_period_start: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # ── Factories ────────────────────────────────────────────────────

    @classmethod
    def create(cls, user_id: str, creator_id: str) -> Result["Subscription"]:
        """Create a FREE subscription starting today.

        Args:
            user_id: Owner account id.
            creator_id: Creator profile id.

        Returns:
            Result wrapping the new subscription, or a validation failure.
        """
        if not user_id or not user_id.strip():
            return Result.fail("User ID est requis")
        if not creator_id or not creator_id.strip():
            return Result.fail("Creator ID est requis")

        now = utcnow()
        return Result.ok(
            cls(
                id=generate_id(),
                user_id=user_id,
                creator_id=creator_id,
                plan=Plan.FREE,
                status=SubscriptionStatus.ACTIVE,
                current_period_start=now,
                current_period_end=now + timedelta(days=BILLING_PERIOD_DAYS),
                created_at=now,
                updated_at=now,
            )
        )

    @classmethod
    def reconstitute(
        cls,
        *,
        id: str,
        user_id: str,
        creator_id: str,
        plan: str,
        status: str,
        current_period_start: datetime,
        current_period_end: datetime,
        products_used: int,
        sales_used: int,
        stripe_subscription_id: Optional[str],
        stripe_customer_id: Optional[str],
        grace_period_start: Optional[datetime],
        created_at: datetime,
        updated_at: datetime,
    ) -> Result["Subscription"]:
        """Rehydrate a subscription from persisted values.

        Enum columns are validated again; a bad value yields a failure.
        """
        plan_result = Plan.from_value(plan)
        if plan_result.is_failure:
            return Result.fail(plan_result.error)
        status_result = SubscriptionStatus.from_value(status)
        if status_result.is_failure:
            return Result.fail(status_result.error)

        return Result.ok(
            cls(
                id=id,
                user_id=user_id,
                creator_id=creator_id,
                plan=plan_result.value,
                status=status_result.value,
                current_period_start=current_period_start,
                current_period_end=current_period_end,
                products_used=products_used,
                sales_used=sales_used,
                stripe_subscription_id=stripe_subscription_id,
                stripe_customer_id=stripe_customer_id,
                grace_period_start=grace_period_start,
                created_at=created_at,
                updated_at=updated_at,
            )
        )

    # ── Limits ───────────────────────────────────────────────────────

    @property
    def limits(self) -> PlanLimits:
        return PLAN_LIMITS[self.plan]

    @property
    def product_limit(self) -> int:
        return self.limits.products

    @property
    def sales_limit(self) -> int:
        return self.limits.sales

    @property
    def is_unlimited(self) -> bool:
        return self.plan is Plan.PRO

    @property
    def can_add_product(self) -> bool:
        return not _is_at(self.products_used, self.product_limit)

    @property
    def can_make_sale(self) -> bool:
        return not _is_at(self.sales_used, self.sales_limit)

    @property
    def is_near_product_limit(self) -> bool:
        return _is_near(self.products_used, self.product_limit)

    @property
    def is_near_sales_limit(self) -> bool:
        return _is_near(self.sales_used, self.sales_limit)

    @property
    def is_at_product_limit(self) -> bool:
        return _is_at(self.products_used, self.product_limit)

    @property
    def is_at_sales_limit(self) -> bool:
        return _is_at(self.sales_used, self.sales_limit)

    @property
    def is_active(self) -> bool:
        return self.status is SubscriptionStatus.ACTIVE

    @property
    def is_past_due(self) -> bool:
        return self.status is SubscriptionStatus.PAST_DUE

    # ── Plan lifecycle ───────────────────────────────────────────────

    def upgrade(
        self, stripe_subscription_id: str, stripe_customer_id: Optional[str] = None
    ) -> Result[None]:
        """Move to the PRO plan after a successful checkout."""
        if self.plan is Plan.PRO:
            return Result.fail("Déjà abonné au plan PRO")

        self.plan = Plan.PRO
        self.status = SubscriptionStatus.ACTIVE
        self.stripe_subscription_id = stripe_subscription_id
        if stripe_customer_id:
            self.stripe_customer_id = stripe_customer_id
        self.grace_period_start = None
        self._touch()
        return Result.ok()

    def downgrade(self) -> Result[None]:
        """Return to the FREE plan; the paid subscription is cancelled."""
        if self.plan is Plan.FREE:
            return Result.fail("L'abonnement est déjà FREE")

        self.plan = Plan.FREE
        self.status = SubscriptionStatus.CANCELLED
        self.stripe_subscription_id = None
        self.grace_period_start = None
        self._touch()
        return Result.ok()

    def mark_as_past_due(self, grace_start: Optional[datetime] = None) -> Result[None]:
        """Flag a failed payment. Calling it twice keeps the first grace start."""
        if self.status is SubscriptionStatus.CANCELLED:
            return Result.fail(
                "Impossible de marquer un abonnement annulé comme impayé"
            )
        if self.status is SubscriptionStatus.PAST_DUE:
            return Result.ok()

        self.status = SubscriptionStatus.PAST_DUE
        self.grace_period_start = grace_start or utcnow()
        self._touch()
        return Result.ok()

    def reactivate(self) -> Result[None]:
        if self.status is not SubscriptionStatus.PAST_DUE:
            return Result.fail("Seul un abonnement impayé peut être réactivé")
        self.status = SubscriptionStatus.ACTIVE
        self.grace_period_start = None
        self._touch()
        return Result.ok()

    def extend(self, days: int) -> Result[None]:
        """Push the end of the current period by ``days`` days."""
        if days <= 0:
            return Result.fail("Le nombre de jours doit être positif")
        self.current_period_end = self.current_period_end + timedelta(days=days)
        self._touch()
        return Result.ok()

    # ── Usage ────────────────────────────────────────────────────────

    def increment_products_used(self) -> Result[None]:
        if not self.can_add_product:
            return Result.fail("Limite de produits atteinte")
        self.products_used += 1
        self._touch()
        return Result.ok()

    def decrement_products_used(self) -> None:
        if self.products_used > 0:
            self.products_used -= 1
            self._touch()

    def increment_sales_used(self) -> Result[None]:
        if not self.can_make_sale:
            return Result.fail("Limite de ventes atteinte")
        self.sales_used += 1
        self._touch()
        return Result.ok()

    def reset_monthly_usage(self) -> None:
        """Start a new billing period with a fresh sales counter."""
        now = utcnow()
        self.sales_used = 0
        self.current_period_start = now
        self.current_period_end = now + timedelta(days=BILLING_PERIOD_DAYS)
        self._touch()

    def _touch(self) -> None:
        self.updated_at = utcnow()
