"""
Use case: Start a PRO plan checkout.

Input: CreateCheckoutSessionCommand (user_id, creator_id, email)
Output: Result[CheckoutSessionResult]
Side effects: Creates a checkout session at the billing provider.
Failure cases:
    - Missing email
    - No subscription for the creator
    - Already on PRO
    - Billing provider error
"""

import logging

from app.application.subscriptions.dtos import (
    CheckoutSessionResult,
    CreateCheckoutSessionCommand,
)
from app.domain.subscriptions.entities import Plan
from app.domain.subscriptions.ports import BillingService, SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class CreateCheckoutSessionUseCase:
    """Creates a hosted checkout page for the PRO plan."""

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        billing_service: BillingService,
    ) -> None:
        """Initialize the use case.

        Args:
            subscription_repo: Repository for reading subscriptions.
            billing_service: External billing provider.
        """
        self._subscription_repo = subscription_repo
        self._billing_service = billing_service

    def execute(self, command: CreateCheckoutSessionCommand) -> Result[CheckoutSessionResult]:
        if not command.email or not command.email.strip():
            return Result.fail("L'email est requis")

        subscription = self._subscription_repo.find_by_creator_id(command.creator_id)
        if subscription is None:
            return Result.fail("Abonnement non trouvé")
        if subscription.plan is Plan.PRO:
            return Result.fail("Déjà abonné au plan PRO")

        session = self._billing_service.create_checkout_session(
            user_id=command.user_id,
            creator_id=command.creator_id,
            email=command.email,
        )
        if session.is_failure:
            return Result.fail(session.error)

        logger.info(
            "Checkout session %s created for creator=%s",
            session.value.session_id,
            command.creator_id,
        )
        return Result.ok(
            CheckoutSessionResult(
                session_id=session.value.session_id, url=session.value.url
            )
        )
