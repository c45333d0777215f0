"""
Adapter: Subscription repository.

Implements SubscriptionRepository port.
Reads/writes the subscriptions table.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.domain.subscriptions.entities import Plan, Subscription, SubscriptionStatus
from app.domain.subscriptions.errors import SubscriptionMappingError
from app.domain.subscriptions.ports import SubscriptionRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    id, user_id, creator_id, plan, status, current_period_start,
    current_period_end, products_used, sales_used, stripe_subscription_id,
    stripe_customer_id, grace_period_start, created_at, updated_at
"""


def _row_to_subscription(row: Any) -> Subscription:
    """Map a DB row to a Subscription, raising on corrupt enum values."""
    m = row._mapping
    result = Subscription.reconstitute(
        id=m["id"],
        user_id=m["user_id"],
        creator_id=m["creator_id"],
        plan=m["plan"],
        status=m["status"],
        current_period_start=m["current_period_start"],
        current_period_end=m["current_period_end"],
        products_used=m["products_used"],
        sales_used=m["sales_used"],
        stripe_subscription_id=m["stripe_subscription_id"],
        stripe_customer_id=m["stripe_customer_id"],
        grace_period_start=m["grace_period_start"],
        created_at=m["created_at"],
        updated_at=m["updated_at"],
    )
    if result.is_failure:
        raise SubscriptionMappingError(m["id"], result.error or "unknown")
    return result.value


class SubscriptionRepositoryAdapter(SubscriptionRepository):
    """PostgreSQL adapter for the subscriptions table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _find_one(self, where: str, params: dict[str, Any]) -> Optional[Subscription]:
        query = text(f"SELECT {_COLUMNS} FROM subscriptions WHERE {where}")
        with self._engine.connect() as conn:
            row = conn.execute(query, params).fetchone()
        return _row_to_subscription(row) if row else None

    def _find_many(self, where: str, params: dict[str, Any]) -> list[Subscription]:
        query = text(
            f"SELECT {_COLUMNS} FROM subscriptions WHERE {where} ORDER BY created_at DESC"
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_subscription(r) for r in rows]

    def find_by_id(self, subscription_id: str) -> Optional[Subscription]:
        return self._find_one("id = :id", {"id": subscription_id})

    def find_by_user_id(self, user_id: str) -> Optional[Subscription]:
        return self._find_one("user_id = :user_id", {"user_id": user_id})

    def find_by_creator_id(self, creator_id: str) -> Optional[Subscription]:
        return self._find_one("creator_id = :creator_id", {"creator_id": creator_id})

    def find_by_stripe_subscription_id(
        self, stripe_subscription_id: str
    ) -> Optional[Subscription]:
        return self._find_one(
            "stripe_subscription_id = :sid", {"sid": stripe_subscription_id}
        )

    def exists_by_user_id(self, user_id: str) -> bool:
        query = text("SELECT 1 FROM subscriptions WHERE user_id = :user_id LIMIT 1")
        with self._engine.connect() as conn:
            row = conn.execute(query, {"user_id": user_id}).fetchone()
        return row is not None

    def find_all_past_due(self) -> list[Subscription]:
        return self._find_many("status = :status", {"status": SubscriptionStatus.PAST_DUE.value})

    def find_all(
        self,
        plan: Optional[Plan] = None,
        status: Optional[SubscriptionStatus] = None,
    ) -> list[Subscription]:
        clauses = ["TRUE"]
        params: dict[str, Any] = {}
        if plan is not None:
            clauses.append("plan = :plan")
            params["plan"] = plan.value
        if status is not None:
            clauses.append("status = :status")
            params["status"] = status.value
        return self._find_many(" AND ".join(clauses), params)

    def find_expired_periods(self, now: datetime) -> list[Subscription]:
        return self._find_many(
            "current_period_end < :now AND status <> :cancelled",
            {"now": now, "cancelled": SubscriptionStatus.CANCELLED.value},
        )

    def save(self, subscription: Subscription) -> None:
        """Upsert a subscription row."""
        query = text(
            """
            INSERT INTO subscriptions (
                id, user_id, creator_id, plan, status, current_period_start,
                current_period_end, products_used, sales_used,
                stripe_subscription_id, stripe_customer_id, grace_period_start,
                created_at, updated_at
            )
            VALUES (
                :id, :user_id, :creator_id, :plan, :status, :current_period_start,
                :current_period_end, :products_used, :sales_used,
                :stripe_subscription_id, :stripe_customer_id, :grace_period_start,
                :created_at, :updated_at
            )
            ON CONFLICT (id)
            DO UPDATE SET
                plan = EXCLUDED.plan,
                status = EXCLUDED.status,
                current_period_start = EXCLUDED.current_period_start,
                current_period_end = EXCLUDED.current_period_end,
                products_used = EXCLUDED.products_used,
                sales_used = EXCLUDED.sales_used,
                stripe_subscription_id = EXCLUDED.stripe_subscription_id,
                stripe_customer_id = EXCLUDED.stripe_customer_id,
                grace_period_start = EXCLUDED.grace_period_start,
                updated_at = EXCLUDED.updated_at
            """
        )
        with self._engine.begin() as conn:
            conn.execute(
                query,
                {
                    "id": subscription.id,
                    "user_id": subscription.user_id,
                    "creator_id": subscription.creator_id,
                    "plan": subscription.plan.value,
                    "status": subscription.status.value,
                    "current_period_start": subscription.current_period_start,
                    "current_period_end": subscription.current_period_end,
                    "products_used": subscription.products_used,
                    "sales_used": subscription.sales_used,
                    "stripe_subscription_id": subscription.stripe_subscription_id,
                    "stripe_customer_id": subscription.stripe_customer_id,
                    "grace_period_start": subscription.grace_period_start,
                    "created_at": subscription.created_at,
                    "updated_at": subscription.updated_at,
                },
            )
        logger.debug(
            "Saved subscription: id=%s plan=%s status=%s",
            subscription.id,
            subscription.plan.value,
            subscription.status.value,
        )
