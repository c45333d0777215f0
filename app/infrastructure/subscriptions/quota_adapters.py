"""
Adapters: Plan allowance services for the orders and products contexts.

SubscriptionQuotaAdapter answers the SalesQuotaService and
SubscriptionLimitService ports with the subscriptions use cases, so the
selling contexts never touch the subscription aggregate directly.
UnlimitedQuotaAdapter allows everything; it backs tests and local runs.
"""

from typing import Optional

from app.application.subscriptions.check_limit_for_action import CheckLimitForActionUseCase
from app.application.subscriptions.dtos import (
    CheckLimitForActionQuery,
    LimitAction,
    LimitStatus,
    RecordUsageCommand,
    UsageKind,
)
from app.application.subscriptions.record_usage import RecordUsageUseCase
from app.domain.orders.ports import SalesQuotaService
from app.domain.products.ports import SubscriptionLimitService
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result


class SubscriptionQuotaAdapter(SalesQuotaService, SubscriptionLimitService):
    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._check_limit = CheckLimitForActionUseCase(subscription_repo)
        self._record_usage = RecordUsageUseCase(subscription_repo)

    def _check(self, creator_id: str, action: LimitAction) -> Result[Optional[str]]:
        checked = self._check_limit.execute(
            CheckLimitForActionQuery(creator_id=creator_id, action=action)
        )
        if checked.is_failure:
            return Result.fail(checked.error)
        outcome = checked.value
        if not outcome.allowed:
            return Result.fail(outcome.message or "Limite atteinte")
        if outcome.status is LimitStatus.WARNING:
            return Result.ok(outcome.message)
        return Result.ok(None)

    def _record(self, creator_id: str, kind: UsageKind, released: bool = False) -> Result[None]:
        recorded = self._record_usage.execute(
            RecordUsageCommand(creator_id=creator_id, kind=kind, released=released)
        )
        if recorded.is_failure:
            return Result.fail(recorded.error)
        return Result.ok()

    # ── SalesQuotaService ────────────────────────────────────────────

    def check_can_sell(self, creator_id: str) -> Result[None]:
        return self._check(creator_id, LimitAction.MAKE_SALE).map(lambda _: None)

    def record_sale(self, creator_id: str) -> Result[None]:
        return self._record(creator_id, UsageKind.SALES)

    # ── SubscriptionLimitService ─────────────────────────────────────

    def check_can_publish(self, creator_id: str) -> Result[Optional[str]]:
        return self._check(creator_id, LimitAction.PUBLISH_PRODUCT)

    def record_product_published(self, creator_id: str) -> Result[None]:
        return self._record(creator_id, UsageKind.PRODUCTS)

    def record_product_unpublished(self, creator_id: str) -> Result[None]:
        return self._record(creator_id, UsageKind.PRODUCTS, released=True)


class UnlimitedQuotaAdapter(SalesQuotaService, SubscriptionLimitService):
    """Allows every sale and publish and records nothing."""

    def check_can_sell(self, creator_id: str) -> Result[None]:
        return Result.ok()

    def record_sale(self, creator_id: str) -> Result[None]:
        return Result.ok()

    def check_can_publish(self, creator_id: str) -> Result[Optional[str]]:
        return Result.ok(None)

    def record_product_published(self, creator_id: str) -> Result[None]:
        return Result.ok()

    def record_product_unpublished(self, creator_id: str) -> Result[None]:
        return Result.ok()
