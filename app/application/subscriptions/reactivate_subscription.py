"""
Use case: Settle a past-due subscription once its invoice is paid.

Input: ReactivateSubscriptionCommand (stripe_subscription_id)
Output: Result[SubscriptionResult]
Side effects: A PAST_DUE subscription becomes ACTIVE again and its
    grace period is cleared.
Failure cases:
    - Missing Stripe subscription id
    - Unknown Stripe subscription

Stripe sends ``invoice.paid`` for every renewal, so a subscription that
is not past due is returned unchanged.
"""

import logging

from app.application.subscriptions.dtos import (
    ReactivateSubscriptionCommand,
    SubscriptionResult,
)
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class ReactivateSubscriptionUseCase:
    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, command: ReactivateSubscriptionCommand) -> Result[SubscriptionResult]:
        if not command.stripe_subscription_id or not command.stripe_subscription_id.strip():
            return Result.fail("Stripe subscription ID est requis")

        subscription = self._subscription_repo.find_by_stripe_subscription_id(
            command.stripe_subscription_id
        )
        if subscription is None:
            logger.warning(
                "Paid invoice for unknown Stripe subscription %s",
                command.stripe_subscription_id,
            )
            return Result.fail("Abonnement non trouvé")

        if not subscription.is_past_due:
            return Result.ok(SubscriptionResult.from_entity(subscription))

        reactivated = subscription.reactivate()
        if reactivated.is_failure:
            return Result.fail(reactivated.error)

        self._subscription_repo.save(subscription)
        logger.info(
            "Subscription %s reactivated after payment (creator=%s)",
            subscription.id,
            subscription.creator_id,
        )
        return Result.ok(SubscriptionResult.from_entity(subscription))
