"""
FastAPI router for the subscriptions bounded context.

All routes delegate to use cases. No business logic here.
Failed use case results surface as 400 through ``unwrap``.
The Stripe webhook is the only unauthenticated route; it is verified
by signature instead.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request
from starlette.concurrency import run_in_threadpool

from app.application.subscriptions.check_limit import CheckLimitUseCase
from app.application.subscriptions.check_limit_for_action import CheckLimitForActionUseCase
from app.application.subscriptions.create_checkout_session import (
    CreateCheckoutSessionUseCase,
)
from app.application.subscriptions.create_subscription import CreateSubscriptionUseCase
from app.application.subscriptions.downgrade_to_free import DowngradeToFreeUseCase
from app.application.subscriptions.dtos import (
    CheckLimitForActionQuery,
    CheckLimitQuery,
    CreateCheckoutSessionCommand,
    CreateSubscriptionCommand,
    DowngradeToFreeCommand,
    ExtendSubscriptionCommand,
    GetSubscriptionQuery,
    LimitAction,
    LimitCheck,
    LimitType,
    ListSubscriptionsQuery,
)
from app.application.subscriptions.extend_subscription import ExtendSubscriptionUseCase
from app.application.subscriptions.get_subscription import GetSubscriptionUseCase
from app.application.subscriptions.handle_billing_event import HandleBillingEventUseCase
from app.application.subscriptions.list_subscriptions import ListSubscriptionsUseCase
from app.application.subscriptions.reset_monthly_usage import ResetMonthlyUsageUseCase
from app.domain.subscriptions.errors import BillingProviderError
from app.domain.subscriptions.ports import BillingService
from app.interfaces.auth import CurrentUser, require_admin, require_creator
from app.interfaces.common import unwrap
from app.interfaces.schemas import ErrorResponse
from app.interfaces.subscriptions.dependencies import (
    get_billing_service,
    get_check_limit_for_action_use_case,
    get_check_limit_use_case,
    get_create_checkout_session_use_case,
    get_create_subscription_use_case,
    get_downgrade_to_free_use_case,
    get_extend_subscription_use_case,
    get_get_subscription_use_case,
    get_handle_billing_event_use_case,
    get_list_subscriptions_use_case,
    get_reset_monthly_usage_use_case,
)
from app.interfaces.subscriptions.schemas import (
    ActionLimitResponse,
    CheckLimitResponse,
    CheckoutRequest,
    CheckoutResponse,
    ExtendSubscriptionRequest,
    LimitCheckItem,
    ResetUsageResponse,
    SubscriptionListResponse,
    SubscriptionResponse,
    WebhookResponse,
)
from app.shared.security.rate_limiting import HEAVY_RATE_LIMIT, limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])

_ERRORS = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}


def _limit_item(check: Optional[LimitCheck]) -> Optional[LimitCheckItem]:
    if check is None:
        return None
    return LimitCheckItem(
        status=check.status.value,
        current=check.current,
        limit=check.limit,
        message=check.message,
    )


@router.get(
    "/me",
    response_model=SubscriptionResponse,
    responses=_ERRORS,
    summary="Get my subscription",
)
def get_my_subscription(
    user: CurrentUser = Depends(require_creator),
    use_case: GetSubscriptionUseCase = Depends(get_get_subscription_use_case),
) -> SubscriptionResponse:
    result = unwrap(use_case.execute(GetSubscriptionQuery(creator_id=user.id)))
    return SubscriptionResponse.model_validate(result)


@router.get(
    "/me/limits",
    response_model=CheckLimitResponse,
    responses=_ERRORS,
    summary="Check my plan limits",
    description="Classify the product and/or sales counters as OK, WARNING or BLOCKED.",
)
def check_my_limits(
    limit_type: LimitType = Query(LimitType.BOTH, alias="type"),
    user: CurrentUser = Depends(require_creator),
    use_case: CheckLimitUseCase = Depends(get_check_limit_use_case),
) -> CheckLimitResponse:
    result = unwrap(
        use_case.execute(CheckLimitQuery(creator_id=user.id, limit_type=limit_type))
    )
    return CheckLimitResponse(
        products=_limit_item(result.products),
        sales=_limit_item(result.sales),
        has_blocking_limit=result.has_blocking_limit,
        has_warning=result.has_warning,
    )


@router.get(
    "/me/limits/{action}",
    response_model=ActionLimitResponse,
    responses=_ERRORS,
    summary="Check whether an action is allowed",
)
def check_my_action_limit(
    action: LimitAction,
    user: CurrentUser = Depends(require_creator),
    use_case: CheckLimitForActionUseCase = Depends(get_check_limit_for_action_use_case),
) -> ActionLimitResponse:
    result = unwrap(
        use_case.execute(CheckLimitForActionQuery(creator_id=user.id, action=action))
    )
    return ActionLimitResponse(
        allowed=result.allowed,
        status=result.status.value,
        current=result.current,
        limit=result.limit,
        message=result.message,
    )


@router.post(
    "",
    response_model=SubscriptionResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Start my FREE subscription",
)
def create_my_subscription(
    user: CurrentUser = Depends(require_creator),
    use_case: CreateSubscriptionUseCase = Depends(get_create_subscription_use_case),
) -> SubscriptionResponse:
    result = unwrap(
        use_case.execute(CreateSubscriptionCommand(user_id=user.id, creator_id=user.id))
    )
    return SubscriptionResponse.model_validate(result)


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    responses=_ERRORS,
    summary="Start a PRO checkout",
    description="Create a Stripe checkout session and return its hosted URL.",
)
@limiter.limit(HEAVY_RATE_LIMIT)
def create_checkout(
    request: Request,
    body: CheckoutRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
) -> CheckoutResponse:
    result = unwrap(
        use_case.execute(
            CreateCheckoutSessionCommand(
                user_id=user.id, creator_id=user.id, email=body.email
            )
        )
    )
    return CheckoutResponse.model_validate(result)


@router.post(
    "/downgrade",
    response_model=SubscriptionResponse,
    responses=_ERRORS,
    summary="Go back to the FREE plan",
)
def downgrade(
    user: CurrentUser = Depends(require_creator),
    use_case: DowngradeToFreeUseCase = Depends(get_downgrade_to_free_use_case),
) -> SubscriptionResponse:
    result = unwrap(use_case.execute(DowngradeToFreeCommand(creator_id=user.id)))
    return SubscriptionResponse.model_validate(result)


@router.get(
    "",
    response_model=SubscriptionListResponse,
    responses={**_ERRORS, 403: {"model": ErrorResponse}},
    summary="List subscriptions (admin)",
)
def list_subscriptions(
    plan: Optional[str] = Query(None, description="FREE or PRO"),
    status: Optional[str] = Query(None, description="ACTIVE, PAST_DUE or CANCELLED"),
    _admin: CurrentUser = Depends(require_admin),
    use_case: ListSubscriptionsUseCase = Depends(get_list_subscriptions_use_case),
) -> SubscriptionListResponse:
    result = unwrap(use_case.execute(ListSubscriptionsQuery(plan=plan, status=status)))
    return SubscriptionListResponse.model_validate(result)


@router.post(
    "/{subscription_id}/extend",
    response_model=SubscriptionResponse,
    responses={**_ERRORS, 403: {"model": ErrorResponse}},
    summary="Extend a subscription period (admin)",
)
def extend_subscription(
    subscription_id: str,
    body: ExtendSubscriptionRequest,
    admin: CurrentUser = Depends(require_admin),
    use_case: ExtendSubscriptionUseCase = Depends(get_extend_subscription_use_case),
) -> SubscriptionResponse:
    result = unwrap(
        use_case.execute(
            ExtendSubscriptionCommand(
                subscription_id=subscription_id,
                admin_id=admin.id,
                is_admin=admin.is_admin,
                days=body.days,
            )
        )
    )
    return SubscriptionResponse.model_validate(result)


@router.post(
    "/maintenance/reset-usage",
    response_model=ResetUsageResponse,
    responses={**_ERRORS, 403: {"model": ErrorResponse}},
    summary="Reset sales usage of ended periods (admin)",
)
def reset_monthly_usage(
    _admin: CurrentUser = Depends(require_admin),
    use_case: ResetMonthlyUsageUseCase = Depends(get_reset_monthly_usage_use_case),
) -> ResetUsageResponse:
    return ResetUsageResponse(reset_count=unwrap(use_case.execute()))


@router.post(
    "/webhooks/stripe",
    response_model=WebhookResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Stripe webhook",
    description="Verify the Stripe signature and apply the subscription change.",
)
@limiter.exempt
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None, alias="Stripe-Signature"),
    billing: BillingService = Depends(get_billing_service),
    use_case: HandleBillingEventUseCase = Depends(get_handle_billing_event_use_case),
) -> WebhookResponse:
    """Acknowledge every verified event; only a bad signature is refused.

    Business failures (unknown subscription...) are logged and acknowledged
    so Stripe does not retry them forever.
    """
    if not stripe_signature:
        raise BillingProviderError("missing signature")

    payload = await request.body()
    event = billing.construct_webhook_event(payload, stripe_signature)
    outcome = await run_in_threadpool(use_case.execute, event)
    if outcome.is_failure:
        return WebhookResponse(received=True, handled=False)
    return WebhookResponse(received=True, handled=outcome.value.handled)
