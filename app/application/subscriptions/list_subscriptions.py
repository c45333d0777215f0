"""
Use case: List subscriptions for the admin back-office.

Input: ListSubscriptionsQuery (optional plan, optional status)
Output: Result[ListSubscriptionsResult]
Side effects: None (read-only query).
Failure cases:
    - Unknown plan or status filter value
"""

from app.application.subscriptions.dtos import (
    ListSubscriptionsQuery,
    ListSubscriptionsResult,
    SubscriptionResult,
)
from app.domain.subscriptions.entities import Plan, SubscriptionStatus
from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result


class ListSubscriptionsUseCase:
    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self, query: ListSubscriptionsQuery) -> Result[ListSubscriptionsResult]:
        plan = None
        if query.plan:
            plan_result = Plan.from_value(query.plan)
            if plan_result.is_failure:
                return Result.fail(plan_result.error)
            plan = plan_result.value

        status = None
        if query.status:
            status_result = SubscriptionStatus.from_value(query.status)
            if status_result.is_failure:
                return Result.fail(status_result.error)
            status = status_result.value

        subscriptions = self._subscription_repo.find_all(plan=plan, status=status)
        items = [SubscriptionResult.from_entity(s) for s in subscriptions]
        return Result.ok(ListSubscriptionsResult(items=items, total=len(items)))
