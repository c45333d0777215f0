"""
Use case: Open the FREE subscription of a newly onboarded creator.

Input: CreateSubscriptionCommand (user_id, creator_id)
Output: Result[SubscriptionResult]
Side effects: Persists a new subscription.
Failure cases:
    - Missing user or creator id
    - The user already has a subscription
"""

import logging

from app.application.subscriptions.dtos import (
    CreateSubscriptionCommand,
    SubscriptionResult,
)
from app.domain.subscriptions.entities import Subscription
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class CreateSubscriptionUseCase:
    """Creates the default FREE subscription for a creator."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, command: CreateSubscriptionCommand) -> Result[SubscriptionResult]:
        created = Subscription.create(command.user_id, command.creator_id)
        if created.is_failure:
            return Result.fail(created.error)

        if self._subscription_repo.exists_by_user_id(command.user_id):
            return Result.fail("Un abonnement existe déjà pour cet utilisateur")

        subscription = created.value
        self._subscription_repo.save(subscription)
        logger.info(
            "Created FREE subscription %s for creator=%s",
            subscription.id,
            subscription.creator_id,
        )
        return Result.ok(SubscriptionResult.from_entity(subscription))
