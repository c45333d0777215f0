"""
Dependency injection for the subscriptions bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
Tests override ``get_subscription_repository`` and ``get_billing_service``.
"""

from fastapi import Depends

from app.application.subscriptions.check_limit import CheckLimitUseCase
from app.application.subscriptions.check_limit_for_action import CheckLimitForActionUseCase
from app.application.subscriptions.create_checkout_session import (
    CreateCheckoutSessionUseCase,
)
from app.application.subscriptions.create_subscription import CreateSubscriptionUseCase
from app.application.subscriptions.downgrade_to_free import DowngradeToFreeUseCase
from app.application.subscriptions.extend_subscription import ExtendSubscriptionUseCase
from app.application.subscriptions.get_subscription import GetSubscriptionUseCase
from app.application.subscriptions.handle_billing_event import HandleBillingEventUseCase
from app.application.subscriptions.list_subscriptions import ListSubscriptionsUseCase
from app.application.subscriptions.reset_monthly_usage import ResetMonthlyUsageUseCase
from app.core.config import settings
from app.domain.subscriptions.ports import BillingService, SubscriptionRepository
from app.infrastructure.database import get_engine
from app.infrastructure.subscriptions.stripe_billing_service import StripeBillingService
from app.infrastructure.subscriptions.subscription_repository import (
    SubscriptionRepositoryAdapter,
)


def get_subscription_repository() -> SubscriptionRepository:
    return SubscriptionRepositoryAdapter(get_engine())


def get_billing_service() -> BillingService:
    """Build the Stripe adapter from application settings."""
    return StripeBillingService(
        secret_key=settings.stripe_secret_key,
        pro_price_id=settings.stripe_pro_price_id,
        webhook_secret=settings.stripe_webhook_secret,
        app_url=settings.app_url,
    )


def get_get_subscription_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> GetSubscriptionUseCase:
    return GetSubscriptionUseCase(subscription_repo=repo)


def get_check_limit_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> CheckLimitUseCase:
    return CheckLimitUseCase(subscription_repo=repo)


def get_check_limit_for_action_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> CheckLimitForActionUseCase:
    return CheckLimitForActionUseCase(subscription_repo=repo)


def get_create_subscription_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> CreateSubscriptionUseCase:
    return CreateSubscriptionUseCase(subscription_repo=repo)


def get_create_checkout_session_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    billing: BillingService = Depends(get_billing_service),
) -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(subscription_repo=repo, billing_service=billing)


def get_downgrade_to_free_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    billing: BillingService = Depends(get_billing_service),
) -> DowngradeToFreeUseCase:
    """User-initiated downgrade: the paid subscription is cancelled at Stripe."""
    return DowngradeToFreeUseCase(subscription_repo=repo, billing_service=billing)


def get_extend_subscription_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> ExtendSubscriptionUseCase:
    return ExtendSubscriptionUseCase(subscription_repo=repo)


def get_list_subscriptions_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> ListSubscriptionsUseCase:
    return ListSubscriptionsUseCase(subscription_repo=repo)


def get_reset_monthly_usage_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> ResetMonthlyUsageUseCase:
    return ResetMonthlyUsageUseCase(subscription_repo=repo)


def get_handle_billing_event_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> HandleBillingEventUseCase:
    return HandleBillingEventUseCase(subscription_repo=repo)
