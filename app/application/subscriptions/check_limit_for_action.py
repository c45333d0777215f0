"""
Use case: Decide whether a creator may perform a limited action.

Input: CheckLimitForActionQuery (creator_id, action)
Output: Result[ActionLimitResult]
Side effects: None (read-only query).
Failure cases:
    - Missing creator id
    - No subscription for the creator
"""

import logging

from app.application.subscriptions.dtos import (
    ActionLimitResult,
    CheckLimitForActionQuery,
    LimitAction,
    LimitStatus,
)
from app.domain.subscriptions.entities import UNLIMITED
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)

_ACTION_LABELS = {
    LimitAction.PUBLISH_PRODUCT: ("publier un nouveau produit", "produits", "produit"),
    LimitAction.MAKE_SALE: ("accepter une nouvelle commande", "ventes", "vente"),
}


class CheckLimitForActionUseCase:
    """Gatekeeper used before publishing a product or accepting a sale."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, query: CheckLimitForActionQuery) -> Result[ActionLimitResult]:
        """Check the counter that ``query.action`` consumes.

        A WARNING still allows the action; only BLOCKED refuses it.
        """
        if not query.creator_id or not query.creator_id.strip():
            return Result.fail("Creator ID est requis")

        subscription = self._subscription_repo.find_by_creator_id(query.creator_id)
        if subscription is None:
            return Result.fail("Abonnement non trouvé")

        if query.action is LimitAction.PUBLISH_PRODUCT:
            current, limit = subscription.products_used, subscription.product_limit
        else:
            current, limit = subscription.sales_used, subscription.sales_limit

        if limit == UNLIMITED:
            return Result.ok(
                ActionLimitResult(
                    allowed=True, status=LimitStatus.OK, current=current, limit=UNLIMITED
                )
            )

        action_label, plural_label, singular_label = _ACTION_LABELS[query.action]

        if current >= limit:
            logger.info(
                "Action blocked by plan limit: creator=%s action=%s (%d/%d)",
                query.creator_id,
                query.action.value,
                current,
                limit,
            )
            return Result.ok(
                ActionLimitResult(
                    allowed=False,
                    status=LimitStatus.BLOCKED,
                    current=current,
                    limit=limit,
                    message=(
                        f"Impossible de {action_label}. Limite de {limit} "
                        f"{plural_label} atteinte. Passez à PRO pour continuer."
                    ),
                )
            )

        if current == limit - 1:
            return Result.ok(
                ActionLimitResult(
                    allowed=True,
                    status=LimitStatus.WARNING,
                    current=current,
                    limit=limit,
                    message=(
                        f"Attention : c'est votre dernier {singular_label} "
                        "disponible avec le plan FREE."
                    ),
                )
            )

        return Result.ok(
            ActionLimitResult(
                allowed=True, status=LimitStatus.OK, current=current, limit=limit
            )
        )
