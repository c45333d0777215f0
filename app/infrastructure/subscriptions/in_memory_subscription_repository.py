"""
Adapter: In-memory subscription repository.

Implements SubscriptionRepository port with a plain dict.
Used by tests and by local runs without a database.
"""

import copy
from datetime import datetime
from typing import Optional

from app.domain.subscriptions.entities import Plan, Subscription, SubscriptionStatus
from app.domain.subscriptions.ports import SubscriptionRepository


class InMemorySubscriptionRepository(SubscriptionRepository):
    """Dict-backed repository. Stores copies so callers cannot mutate state."""

    def __init__(self, subscriptions: Optional[list[Subscription]] = None) -> None:
        self._items: dict[str, Subscription] = {}
        for subscription in subscriptions or []:
            self.save(subscription)

    def _first(self, predicate) -> Optional[Subscription]:
        for subscription in self._items.values():
            if predicate(subscription):
                return copy.deepcopy(subscription)
        return None

    def find_by_id(self, subscription_id: str) -> Optional[Subscription]:
        return self._first(lambda s: s.id == subscription_id)

    def find_by_user_id(self, user_id: str) -> Optional[Subscription]:
        return self._first(lambda s: s.user_id == user_id)

    def find_by_creator_id(self, creator_id: str) -> Optional[Subscription]:
        return self._first(lambda s: s.creator_id == creator_id)

    def find_by_stripe_subscription_id(
        self, stripe_subscription_id: str
    ) -> Optional[Subscription]:
        return self._first(lambda s: s.stripe_subscription_id == stripe_subscription_id)

    def save(self, subscription: Subscription) -> None:
        self._items[subscription.id] = copy.deepcopy(subscription)

    def exists_by_user_id(self, user_id: str) -> bool:
        return any(s.user_id == user_id for s in self._items.values())

    def find_all_past_due(self) -> list[Subscription]:
        return self.find_all(status=SubscriptionStatus.PAST_DUE)

    def find_all(
        self,
        plan: Optional[Plan] = None,
        status: Optional[SubscriptionStatus] = None,
    ) -> list[Subscription]:
        matches = [
            copy.deepcopy(s)
            for s in self._items.values()
            if (plan is None or s.plan is plan) and (status is None or s.status is status)
        ]
        return sorted(matches, key=lambda s: s.created_at, reverse=True)

    def find_expired_periods(self, now: datetime) -> list[Subscription]:
        return [
            copy.deepcopy(s)
            for s in self._items.values()
            if s.current_period_end < now and s.status is not SubscriptionStatus.CANCELLED
        ]
