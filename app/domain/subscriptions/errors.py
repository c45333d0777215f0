"""
Domain-specific errors for the subscriptions bounded context.

Expected business failures are returned as Result values by use cases.
The errors below are raised for conditions the caller cannot recover
from and are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class SubscriptionDomainError(Exception):
    """Base error for all subscriptions domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class SubscriptionMappingError(SubscriptionDomainError):
    """Raised when a persisted subscription row cannot be rehydrated."""

    def __init__(self, subscription_id: str, reason: str) -> None:
        super().__init__(
            f"Invalid persisted subscription {subscription_id}: {reason}"
        )
        self.subscription_id = subscription_id
        self.reason = reason


class BillingProviderError(SubscriptionDomainError):
    """Raised when the billing provider rejects a webhook payload."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Billing provider error: {reason}")
        self.reason = reason
