"""
Use case: Downgrade a creator back to the FREE plan.

Input: DowngradeToFreeCommand (creator_id)
Output: Result[SubscriptionResult]
Side effects:
    - Cancels the paid subscription at the billing provider when a
      billing service is given (user-initiated downgrade)
    - Persists the downgraded subscription
Failure cases:
    - No subscription for the creator
    - Already on FREE
    - Billing provider refuses the cancellation
"""

import logging
from typing import Optional

from app.application.subscriptions.dtos import DowngradeToFreeCommand, SubscriptionResult
from app.domain.subscriptions.ports import BillingService, SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class DowngradeToFreeUseCase:
    """Cancels the PRO plan; the subscription keeps running as FREE.

    The webhook path runs without a billing service: the provider has
    already cancelled the paid subscription.
    """

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        billing_service: Optional[BillingService] = None,
    ) -> None:
        self._subscription_repo = subscription_repo
        self._billing_service = billing_service

    def execute(self, command: DowngradeToFreeCommand) -> Result[SubscriptionResult]:
        if not command.creator_id or not command.creator_id.strip():
            return Result.fail("Creator ID est requis")

        subscription = self._subscription_repo.find_by_creator_id(command.creator_id)
        if subscription is None:
            return Result.fail("Abonnement non trouvé")

        stripe_subscription_id = subscription.stripe_subscription_id
        downgraded = subscription.downgrade()
        if downgraded.is_failure:
            return Result.fail(downgraded.error)

        if self._billing_service is not None and stripe_subscription_id:
            cancelled = self._billing_service.cancel_subscription(stripe_subscription_id)
            if cancelled.is_failure:
                return Result.fail(cancelled.error)

        self._subscription_repo.save(subscription)
        logger.info("Creator %s downgraded to FREE", command.creator_id)
        return Result.ok(SubscriptionResult.from_entity(subscription))
