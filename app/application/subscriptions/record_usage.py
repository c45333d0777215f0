"""
Use case: Record consumption (or release) of a plan allowance.

Input: RecordUsageCommand (creator_id, kind, released)
Output: Result[SubscriptionResult]
Side effects: Persists the updated usage counter.
Failure cases:
    - No subscription for the creator
    - Limit already reached
"""

import logging

from app.application.subscriptions.dtos import (
    RecordUsageCommand,
    SubscriptionResult,
    UsageKind,
)
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class RecordUsageUseCase:
    """Moves a usage counter after a publish, unpublish or sale."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, command: RecordUsageCommand) -> Result[SubscriptionResult]:
        subscription = self._subscription_repo.find_by_creator_id(command.creator_id)
        if subscription is None:
            return Result.fail("Abonnement non trouvé")

        if command.kind is UsageKind.PRODUCTS:
            if command.released:
                subscription.decrement_products_used()
                outcome = Result.ok()
            else:
                outcome = subscription.increment_products_used()
        else:
            if command.released:
                return Result.fail("Une vente ne peut pas être annulée du compteur")
            outcome = subscription.increment_sales_used()

        if outcome.is_failure:
            logger.warning(
                "Usage not recorded for creator=%s kind=%s: %s",
                command.creator_id,
                command.kind.value,
                outcome.error,
            )
            return Result.fail(outcome.error)

        self._subscription_repo.save(subscription)
        return Result.ok(SubscriptionResult.from_entity(subscription))
