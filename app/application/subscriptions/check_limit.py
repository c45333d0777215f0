"""
Use case: Check a creator's usage against their plan limits.

Input: CheckLimitQuery (creator_id, limit_type)
Output: Result[CheckLimitResult]
Side effects: None (read-only query).
Failure cases:
    - Missing creator id
    - No subscription for the creator
"""

import logging

from app.application.subscriptions.dtos import (
    CheckLimitQuery,
    CheckLimitResult,
    LimitCheck,
    LimitStatus,
    LimitType,
)
from app.domain.subscriptions.entities import UNLIMITED, Subscription
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


def evaluate_product_limit(subscription: Subscription) -> LimitCheck:
    """Classify the product counter as OK, WARNING (last slot) or BLOCKED."""
    current = subscription.products_used
    limit = subscription.product_limit
    if limit == UNLIMITED:
        return LimitCheck(status=LimitStatus.OK, current=current, limit=UNLIMITED)
    if current >= limit:
        return LimitCheck(
            status=LimitStatus.BLOCKED,
            current=current,
            limit=limit,
            message=(
                f"Limite de produits atteinte ({limit}/{limit}). "
                "Passez à PRO pour publier plus de produits."
            ),
        )
    if current == limit - 1:
        return LimitCheck(
            status=LimitStatus.WARNING,
            current=current,
            limit=limit,
            message="Vous n'avez plus qu'un emplacement produit disponible.",
        )
    return LimitCheck(status=LimitStatus.OK, current=current, limit=limit)


def evaluate_sales_limit(subscription: Subscription) -> LimitCheck:
    """Classify the sales counter as OK, WARNING (last sale) or BLOCKED."""
    current = subscription.sales_used
    limit = subscription.sales_limit
    if limit == UNLIMITED:
        return LimitCheck(status=LimitStatus.OK, current=current, limit=UNLIMITED)
    if current >= limit:
        return LimitCheck(
            status=LimitStatus.BLOCKED,
            current=current,
            limit=limit,
            message=f"Ce créateur a atteint sa limite de ventes ({limit} ventes/mois).",
        )
    if current == limit - 1:
        return LimitCheck(
            status=LimitStatus.WARNING,
            current=current,
            limit=limit,
            message="Vous n'avez plus qu'une vente disponible ce mois-ci.",
        )
    return LimitCheck(status=LimitStatus.OK, current=current, limit=limit)


class CheckLimitUseCase:
    """Reports how close a creator is to the limits of their plan."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        """Initialize the use case.

        Args:
            subscription_repo: Repository for reading subscriptions.
        """
        self._subscription_repo = subscription_repo

    def execute(self, query: CheckLimitQuery) -> Result[CheckLimitResult]:
        """Run the limit check.

        Args:
            query: Creator id and which limit(s) to check.

        Returns:
            Result wrapping the per-counter statuses.
        """
        if not query.creator_id or not query.creator_id.strip():
            return Result.fail("Creator ID est requis")

        subscription = self._subscription_repo.find_by_creator_id(query.creator_id)
        if subscription is None:
            logger.warning("No subscription for creator=%s", query.creator_id)
            return Result.fail("Abonnement non trouvé")

        products = None
        sales = None
        if query.limit_type in (LimitType.PRODUCTS, LimitType.BOTH):
            products = evaluate_product_limit(subscription)
        if query.limit_type in (LimitType.SALES, LimitType.BOTH):
            sales = evaluate_sales_limit(subscription)

        logger.debug(
            "Limit check: creator=%s products=%s sales=%s",
            query.creator_id,
            products.status.value if products else None,
            sales.status.value if sales else None,
        )
        return Result.ok(CheckLimitResult(products=products, sales=sales))
