"""
Adapter: Stripe billing service.

Implements BillingService port on top of the Stripe API:
- PRO plan checkout sessions (mode=subscription)
- Subscription cancellation
- Webhook signature verification

Stripe errors never leak: they are logged and turned into failed Results
carrying a user-facing message.
"""

import logging
from typing import Any, Optional

import stripe

from app.domain.subscriptions.errors import BillingProviderError
from app.domain.subscriptions.ports import BillingEvent, BillingService, CheckoutSession
from app.shared.domain import Result

logger = logging.getLogger(__name__)

CHECKOUT_ERROR = "Erreur lors de la création de la session de paiement"
CANCEL_ERROR = "Erreur lors de l'annulation de l'abonnement"
RETRIEVE_ERROR = "Erreur lors de la récupération de la session de paiement"


class StripeBillingService(BillingService):
    """Stripe-backed billing adapter.

    Args:
        secret_key: Stripe secret API key.
        pro_price_id: Price id of the PRO plan.
        webhook_secret: Signing secret of the webhook endpoint.
        app_url: Public base URL used to build the redirect URLs.
    """

    def __init__(
        self,
        secret_key: Optional[str],
        pro_price_id: Optional[str],
        webhook_secret: Optional[str],
        app_url: str,
    ) -> None:
        if secret_key:
            stripe.api_key = secret_key
        self._pro_price_id = pro_price_id
        self._webhook_secret = webhook_secret
        self._app_url = app_url.rstrip("/")

    def create_checkout_session(
        self, user_id: str, creator_id: str, email: str
    ) -> Result[CheckoutSession]:
        """Create a subscription-mode checkout for the PRO price."""
        if not self._pro_price_id:
            return Result.fail("STRIPE_PRO_PRICE_ID non configuré")

        try:
            session = stripe.checkout.Session.create(
                mode="subscription",
                payment_method_types=["card"],
                line_items=[{"price": self._pro_price_id, "quantity": 1}],
                customer_email=email,
                success_url=(
                    f"{self._app_url}/subscription/success"
                    "?session_id={CHECKOUT_SESSION_ID}"
                ),
                cancel_url=f"{self._app_url}/subscription/cancel",
                metadata={"userId": user_id, "creatorId": creator_id, "plan": "PRO"},
                subscription_data={
                    "metadata": {"userId": user_id, "creatorId": creator_id}
                },
            )
        except stripe.StripeError as exc:
            logger.error("Failed to create checkout session: %s", exc)
            return Result.fail(CHECKOUT_ERROR)

        logger.info("Created checkout session %s for creator %s", session.id, creator_id)
        return Result.ok(CheckoutSession(session_id=session.id, url=session.url))

    def get_checkout_session(self, session_id: str) -> Result[dict[str, Any]]:
        try:
            session = stripe.checkout.Session.retrieve(session_id)
        except stripe.StripeError as exc:
            logger.error("Failed to retrieve checkout session %s: %s", session_id, exc)
            return Result.fail(RETRIEVE_ERROR)

        return Result.ok(
            {
                "id": session.id,
                "status": session.status,
                "payment_status": session.payment_status,
                "customer": session.customer,
                "subscription": session.subscription,
                "metadata": dict(session.metadata or {}),
            }
        )

    def cancel_subscription(self, stripe_subscription_id: str) -> Result[None]:
        try:
            stripe.Subscription.cancel(stripe_subscription_id)
        except stripe.StripeError as exc:
            logger.error(
                "Failed to cancel subscription %s: %s", stripe_subscription_id, exc
            )
            return Result.fail(CANCEL_ERROR)

        logger.info("Cancelled Stripe subscription %s", stripe_subscription_id)
        return Result.ok()

    def construct_webhook_event(self, payload: bytes, signature: str) -> BillingEvent:
        """Verify the Stripe signature and return the parsed event.

        Raises:
            BillingProviderError: On a missing secret, bad payload or bad signature.
        """
        if not self._webhook_secret:
            raise BillingProviderError("webhook secret not configured")

        try:
            event = stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except ValueError as exc:
            logger.error("Invalid webhook payload: %s", exc)
            raise BillingProviderError("invalid payload") from exc
        except stripe.SignatureVerificationError as exc:
            logger.error("Invalid webhook signature: %s", exc)
            raise BillingProviderError("invalid signature") from exc

        data_object = event["data"]["object"]
        return BillingEvent(
            id=event["id"],
            type=event["type"],
            data=data_object.to_dict() if hasattr(data_object, "to_dict") else dict(data_object),
        )
