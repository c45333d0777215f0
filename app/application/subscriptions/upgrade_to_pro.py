"""
Use case: Upgrade a creator to the PRO plan.

Triggered once the billing provider confirms the checkout.

Input: UpgradeToProCommand (creator_id, stripe_subscription_id, stripe_customer_id)
Output: Result[SubscriptionResult]
Side effects: Persists the upgraded subscription.
Failure cases:
    - Missing creator id or Stripe subscription id
    - No subscription for the creator
    - Already on PRO
"""

import logging

from app.application.subscriptions.dtos import SubscriptionResult, UpgradeToProCommand
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class UpgradeToProUseCase:
    """Switches a subscription to the unlimited PRO plan."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, command: UpgradeToProCommand) -> Result[SubscriptionResult]:
        """Run the upgrade.

        Args:
            command: Creator id and the Stripe identifiers of the new subscription.

        Returns:
            Result wrapping the upgraded subscription.
        """
        if not command.creator_id or not command.creator_id.strip():
            return Result.fail("Creator ID est requis")
        if not command.stripe_subscription_id or not command.stripe_subscription_id.strip():
            return Result.fail("Stripe subscription ID est requis")

        subscription = self._subscription_repo.find_by_creator_id(command.creator_id)
        if subscription is None:
            return Result.fail("Abonnement non trouvé")

        upgraded = subscription.upgrade(
            command.stripe_subscription_id, command.stripe_customer_id
        )
        if upgraded.is_failure:
            logger.warning(
                "Upgrade refused for creator=%s: %s", command.creator_id, upgraded.error
            )
            return Result.fail(upgraded.error)

        self._subscription_repo.save(subscription)
        logger.info("Creator %s upgraded to PRO", command.creator_id)
        return Result.ok(SubscriptionResult.from_entity(subscription))
