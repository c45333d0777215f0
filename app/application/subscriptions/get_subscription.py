"""
Use case: Retrieve a creator's subscription.

Input: GetSubscriptionQuery (creator_id)
Output: Result[SubscriptionResult]
Side effects: None (read-only query).
Failure cases:
    - Missing creator id
    - No subscription for the creator
"""

from app.application.subscriptions.dtos import GetSubscriptionQuery, SubscriptionResult
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result


class GetSubscriptionUseCase:
    """Read-only lookup of the subscription attached to a creator."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, query: GetSubscriptionQuery) -> Result[SubscriptionResult]:
        if not query.creator_id or not query.creator_id.strip():
            return Result.fail("Creator ID est requis")

        subscription = self._subscription_repo.find_by_creator_id(query.creator_id)
        if subscription is None:
            return Result.fail("Abonnement non trouvé")
        return Result.ok(SubscriptionResult.from_entity(subscription))
