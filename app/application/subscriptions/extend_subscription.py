"""
Use case: Extend the current period of a subscription (admin only).

Input: ExtendSubscriptionCommand (subscription_id, admin_id, is_admin, days)
Output: Result[SubscriptionResult]
Side effects: Persists the new period end.
Failure cases:
    - Missing subscription or admin id
    - Caller is not an administrator
    - Non-positive number of days
    - Unknown subscription
"""

import logging

from app.application.subscriptions.dtos import (
    ExtendSubscriptionCommand,
    SubscriptionResult,
)
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class ExtendSubscriptionUseCase:
    """Grants extra days on a subscription period."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, command: ExtendSubscriptionCommand) -> Result[SubscriptionResult]:
        if not command.subscription_id or not command.subscription_id.strip():
            return Result.fail("Subscription ID est requis")
        if not command.admin_id or not command.admin_id.strip():
            return Result.fail("Admin ID est requis")
        if not command.is_admin:
            return Result.fail("Seuls les administrateurs peuvent prolonger un abonnement")
        if command.days <= 0:
            return Result.fail("Le nombre de jours doit être positif")

        subscription = self._subscription_repo.find_by_id(command.subscription_id)
        if subscription is None:
            return Result.fail("Abonnement non trouvé")

        extended = subscription.extend(command.days)
        if extended.is_failure:
            return Result.fail(extended.error)

        self._subscription_repo.save(subscription)
        logger.info(
            "Admin %s extended subscription %s by %d days",
            command.admin_id,
            subscription.id,
            command.days,
        )
        return Result.ok(SubscriptionResult.from_entity(subscription))
