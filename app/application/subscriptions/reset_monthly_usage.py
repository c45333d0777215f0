"""
Use case: Roll over billing periods that have ended.

Input: None
Output: Result[int] (number of subscriptions reset)
Side effects: Resets sales counters and persists each subscription.
Failure cases: None.
"""

import logging

from app.domain.subscriptions.ports import SubscriptionRepository
from app.shared.domain import Result, utcnow

logger = logging.getLogger(__name__)


class ResetMonthlyUsageUseCase:
    """Starts a new period for every subscription whose period is over.

    Meant to run from a scheduler (cron, worker) once a day.
    """

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def execute(self) -> Result[int]:
        expired = self._subscription_repo.find_expired_periods(utcnow())
        for subscription in expired:
            subscription.reset_monthly_usage()
            self._subscription_repo.save(subscription)
        logger.info("Reset monthly usage on %d subscriptions", len(expired))
        return Result.ok(len(expired))
