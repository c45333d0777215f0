"""
Port interfaces (ABCs) for the subscriptions bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from app.domain.subscriptions.entities import Plan, Subscription, SubscriptionStatus
from app.shared.domain import Result


class SubscriptionRepository(ABC):
    """Port for persisting and querying subscriptions."""

    @abstractmethod
    def find_by_id(self, subscription_id: str) -> Optional[Subscription]:
        raise NotImplementedError

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> Optional[Subscription]:
        raise NotImplementedError

    @abstractmethod
    def find_by_creator_id(self, creator_id: str) -> Optional[Subscription]:
        raise NotImplementedError

    @abstractmethod
    def find_by_stripe_subscription_id(
        self, stripe_subscription_id: str
    ) -> Optional[Subscription]:
        raise NotImplementedError

    @abstractmethod
    def save(self, subscription: Subscription) -> None:
        """Insert or update a subscription."""
        raise NotImplementedError

    @abstractmethod
    def exists_by_user_id(self, user_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def find_all_past_due(self) -> list[Subscription]:
        raise NotImplementedError

    @abstractmethod
    def find_all(
        self,
        plan: Optional[Plan] = None,
        status: Optional[SubscriptionStatus] = None,
    ) -> list[Subscription]:
        """Return subscriptions matching the optional filters, newest first."""
        raise NotImplementedError

    @abstractmethod
    def find_expired_periods(self, now: datetime) -> list[Subscription]:
        """Return subscriptions whose current period ended before ``now``."""
        raise NotImplementedError


@dataclass(frozen=True)
class CheckoutSession:
    """A hosted checkout page created by the billing provider."""

    session_id: str
    url: Optional[str]


@dataclass(frozen=True)
class BillingEvent:
    """A verified billing webhook event."""

    id: str
    type: str
    data: dict[str, Any]


class BillingService(ABC):
    """Port for the external billing provider."""

    @abstractmethod
    def create_checkout_session(
        self, user_id: str, creator_id: str, email: str
    ) -> Result[CheckoutSession]:
        """Start a PRO checkout for the given creator."""
        raise NotImplementedError

    @abstractmethod
    def get_checkout_session(self, session_id: str) -> Result[dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def cancel_subscription(self, stripe_subscription_id: str) -> Result[None]:
        raise NotImplementedError

    @abstractmethod
    def construct_webhook_event(self, payload: bytes, signature: str) -> BillingEvent:
        """Verify and parse a webhook payload.

        Raises:
            BillingProviderError: If the payload or signature is invalid.
        """
        raise NotImplementedError
