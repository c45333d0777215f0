"""
Tests for the plan allowance adapters.

SubscriptionQuotaAdapter is wired to the in-memory subscription
repository so counters can be checked end to end.
"""

from app.domain.subscriptions.entities import Subscription
from app.infrastructure.subscriptions.in_memory_subscription_repository import (
    InMemorySubscriptionRepository,
)
from app.infrastructure.subscriptions.quota_adapters import (
    SubscriptionQuotaAdapter,
    UnlimitedQuotaAdapter,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _adapter(products_used: int = 0, sales_used: int = 0, pro: bool = False):
    subscription = Subscription.create("user-1", "creator-1").value
    subscription.products_used = products_used
    subscription.sales_used = sales_used
    if pro:
        subscription.upgrade("sub_1", "cus_1")
    repo = InMemorySubscriptionRepository([subscription])
    return SubscriptionQuotaAdapter(repo), repo


# ═════════════════════════════════════════════════════════════════════
# SubscriptionQuotaAdapter
# ═════════════════════════════════════════════════════════════════════


class TestSalesQuota:
    def test_can_sell_under_limit(self) -> None:
        adapter, _ = _adapter(sales_used=3)
        assert adapter.check_can_sell("creator-1").is_success

    def test_last_sale_is_still_allowed(self) -> None:
        adapter, _ = _adapter(sales_used=9)
        assert adapter.check_can_sell("creator-1").is_success

    def test_blocked_at_limit(self) -> None:
        adapter, _ = _adapter(sales_used=10)
        result = adapter.check_can_sell("creator-1")
        assert result.error == (
            "Impossible de accepter une nouvelle commande. Limite de 10 ventes atteinte. "
            "Passez à PRO pour continuer."
        )

    def test_pro_is_unlimited(self) -> None:
        adapter, _ = _adapter(sales_used=500, pro=True)
        assert adapter.check_can_sell("creator-1").is_success

    def test_record_sale_increments(self) -> None:
        adapter, repo = _adapter(sales_used=2)
        assert adapter.record_sale("creator-1").is_success
        assert repo.find_by_creator_id("creator-1").sales_used == 3

    def test_unknown_creator(self) -> None:
        adapter, _ = _adapter()
        assert adapter.check_can_sell("creator-404").error == "Abonnement non trouvé"


class TestPublishQuota:
    def test_ok_returns_no_warning(self) -> None:
        adapter, _ = _adapter(products_used=1)
        assert adapter.check_can_publish("creator-1").value is None

    def test_last_slot_returns_warning(self) -> None:
        adapter, _ = _adapter(products_used=4)
        warning = adapter.check_can_publish("creator-1").value
        assert warning == "Attention : c'est votre dernier produit disponible avec le plan FREE."

    def test_blocked_at_limit(self) -> None:
        adapter, _ = _adapter(products_used=5)
        assert adapter.check_can_publish("creator-1").is_failure

    def test_publish_and_unpublish_move_counter(self) -> None:
        adapter, repo = _adapter(products_used=2)
        adapter.record_product_published("creator-1")
        assert repo.find_by_creator_id("creator-1").products_used == 3
        adapter.record_product_unpublished("creator-1")
        assert repo.find_by_creator_id("creator-1").products_used == 2


# ═════════════════════════════════════════════════════════════════════
# UnlimitedQuotaAdapter
# ═════════════════════════════════════════════════════════════════════


class TestUnlimitedQuotaAdapter:
    def test_allows_everything(self) -> None:
        adapter = UnlimitedQuotaAdapter()
        assert adapter.check_can_sell("anyone").is_success
        assert adapter.check_can_publish("anyone").value is None
        assert adapter.record_sale("anyone").is_success
        assert adapter.record_product_published("anyone").is_success
        assert adapter.record_product_unpublished("anyone").is_success
