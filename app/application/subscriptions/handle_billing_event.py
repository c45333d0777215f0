"""
Use case: React to a verified billing provider event.

Input: BillingEvent (id, type, data)
Output: Result[BillingEventOutcome]
Side effects: Delegates to the plan change use cases:
    - checkout.session.completed -> UpgradeToProUseCase
    - invoice.payment_failed -> HandlePaymentFailedUseCase
    - invoice.paid -> ReactivateSubscriptionUseCase
    - customer.subscription.deleted -> DowngradeToFreeUseCase
Any other event type is acknowledged without action.
Failure cases:
    - Event data lacks the ids the handler needs
    - The delegated use case fails
"""

import logging

from app.application.subscriptions.downgrade_to_free import DowngradeToFreeUseCase
from app.application.subscriptions.dtos import (
    BillingEventOutcome,
    DowngradeToFreeCommand,
    HandlePaymentFailedCommand,
    ReactivateSubscriptionCommand,
    UpgradeToProCommand,
)
from app.application.subscriptions.handle_payment_failed import HandlePaymentFailedUseCase
from app.application.subscriptions.reactivate_subscription import ReactivateSubscriptionUseCase
from app.application.subscriptions.upgrade_to_pro import UpgradeToProUseCase
from app.domain.subscriptions.ports import BillingEvent, SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
PAYMENT_FAILED = "invoice.payment_failed"
INVOICE_PAID = "invoice.paid"
SUBSCRIPTION_DELETED = "customer.subscription.deleted"


class HandleBillingEventUseCase:
    """Routes webhook events to the matching subscription use case."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo
        self._upgrade = UpgradeToProUseCase(subscription_repo)
        self._payment_failed = HandlePaymentFailedUseCase(subscription_repo)
        self._reactivate = ReactivateSubscriptionUseCase(subscription_repo)
        self._downgrade = DowngradeToFreeUseCase(subscription_repo)

    def execute(self, event: BillingEvent) -> Result[BillingEventOutcome]:
        handlers = {
            CHECKOUT_COMPLETED: self._on_checkout_completed,
            PAYMENT_FAILED: self._on_payment_failed,
            INVOICE_PAID: self._on_invoice_paid,
            SUBSCRIPTION_DELETED: self._on_subscription_deleted,
        }
        handler = handlers.get(event.type)
        if handler is None:
            logger.debug("Ignoring billing event %s (%s)", event.id, event.type)
            return Result.ok(BillingEventOutcome(event_type=event.type, handled=False))

        handled = handler(event.data)
        if handled.is_failure:
            logger.warning(
                "Billing event %s (%s) failed: %s", event.id, event.type, handled.error
            )
            return Result.fail(handled.error)

        logger.info("Handled billing event %s (%s)", event.id, event.type)
        return Result.ok(BillingEventOutcome(event_type=event.type, handled=True))

    def _on_checkout_completed(self, data: dict) -> Result:
        metadata = data.get("metadata") or {}
        creator_id = metadata.get("creatorId")
        if not creator_id:
            return Result.fail("Creator ID manquant dans les métadonnées")
        return self._upgrade.execute(
            UpgradeToProCommand(
                creator_id=creator_id,
                stripe_subscription_id=data.get("subscription") or "",
                stripe_customer_id=data.get("customer"),
            )
        )

    def _on_payment_failed(self, data: dict) -> Result:
        stripe_subscription_id = data.get("subscription")
        if not stripe_subscription_id:
            return Result.fail("Stripe subscription ID est requis")
        return self._payment_failed.execute(
            HandlePaymentFailedCommand(stripe_subscription_id=stripe_subscription_id)
        )

    def _on_invoice_paid(self, data: dict) -> Result:
        stripe_subscription_id = data.get("subscription")
        if not stripe_subscription_id:
            return Result.fail("Stripe subscription ID est requis")
        return self._reactivate.execute(
            ReactivateSubscriptionCommand(stripe_subscription_id=stripe_subscription_id)
        )

    def _on_subscription_deleted(self, data: dict) -> Result:
        stripe_subscription_id = data.get("id")
        subscription = (
            self._subscription_repo.find_by_stripe_subscription_id(stripe_subscription_id)
            if stripe_subscription_id
            else None
        )
        if subscription is None:
            return Result.fail("Abonnement non trouvé")
        return self._downgrade.execute(
            DowngradeToFreeCommand(creator_id=subscription.creator_id)
        )
