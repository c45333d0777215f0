"""
Use case: React to a failed renewal payment.

Input: HandlePaymentFailedCommand (stripe_subscription_id)
Output: Result[SubscriptionResult]
Side effects: Marks the subscription PAST_DUE and starts the grace period.
Failure cases:
    - Missing Stripe subscription id
    - Unknown Stripe subscription
    - Subscription already cancelled

Replaying the same webhook is harmless: an already PAST_DUE
subscription keeps its original grace period start.
"""

import logging

from app.application.subscriptions.dtos import (
    HandlePaymentFailedCommand,
    SubscriptionResult,
)
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result, utcnow

logger = logging.getLogger(__name__)


class HandlePaymentFailedUseCase:
    """Puts a subscription into its payment grace period."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, command: HandlePaymentFailedCommand) -> Result[SubscriptionResult]:
        if not command.stripe_subscription_id or not command.stripe_subscription_id.strip():
            return Result.fail("Stripe subscription ID est requis")

        subscription = self._subscription_repo.find_by_stripe_subscription_id(
            command.stripe_subscription_id
        )
        if subscription is None:
            logger.warning(
                "Payment failure for unknown Stripe subscription %s",
                command.stripe_subscription_id,
            )
            return Result.fail("Abonnement non trouvé")

        if subscription.is_past_due:
            return Result.ok(SubscriptionResult.from_entity(subscription))

        marked = subscription.mark_as_past_due(utcnow())
        if marked.is_failure:
            return Result.fail(marked.error)

        self._subscription_repo.save(subscription)
        logger.warning(
            "Subscription %s is past due (creator=%s)",
            subscription.id,
            subscription.creator_id,
        )
        return Result.ok(SubscriptionResult.from_entity(subscription))
