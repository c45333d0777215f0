"""
Tests for the orders application layer (use cases).

Use cases run against the in-memory order repository. The sales
allowance is either the UnlimitedQuotaAdapter or a MagicMock of the
SalesQuotaService port.
"""

from typing import Optional
from unittest.mock import MagicMock

from app.application.orders.cancel_order import CancelOrderUseCase
from app.application.orders.create_order import CreateOrderUseCase
from app.application.orders.dtos import (
    CancelOrderCommand,
    CreateOrderCommand,
    GetOrderDetailQuery,
    ListCustomerOrdersQuery,
    ListOrdersQuery,
    MarkDeliveredCommand,
    MarkOrderPaidCommand,
    OrderItemInput,
    RefundOrderCommand,
    ShipOrderCommand,
    ShippingAddressInput,
)
from app.application.orders.get_order_detail import GetOrderDetailUseCase
from app.application.orders.list_customer_orders import ListCustomerOrdersUseCase
from app.application.orders.list_orders import ListOrdersUseCase
from app.application.orders.mark_delivered import MarkDeliveredUseCase
from app.application.orders.mark_order_paid import MarkOrderPaidUseCase
from app.application.orders.refund_order import RefundOrderUseCase
from app.application.orders.ship_order import ShipOrderUseCase
from app.domain.orders.entities import OrderStatus
from app.domain.orders.ports import SalesQuotaService
from app.infrastructure.orders.in_memory_order_repository import InMemoryOrderRepository
from app.infrastructure.subscriptions.quota_adapters import UnlimitedQuotaAdapter
from app.shared.domain import Result


# ── Helpers ──────────────────────────────────────────────────────────


def _command(
    creator_id: str = "creator-1",
    customer_id: str = "customer-1",
    customer_name: str = "Alice Martin",
    items: Optional[list[OrderItemInput]] = None,
) -> CreateOrderCommand:
    return CreateOrderCommand(
        creator_id=creator_id,
        customer_id=customer_id,
        customer_name=customer_name,
        customer_email="alice@example.com",
        items=items
        if items is not None
        else [OrderItemInput(product_id="prod-1", product_name="Tote bag", price=2500, quantity=2)],
        shipping_address=ShippingAddressInput(
            street="12 rue des Lilas", city="Paris", postal_code="75011", country="France"
        ),
        shipping_cost=490,
    )


def _place(repo: InMemoryOrderRepository, **kwargs) -> str:
    result = CreateOrderUseCase(repo, UnlimitedQuotaAdapter()).execute(_command(**kwargs))
    return result.value.id


def _pay(repo: InMemoryOrderRepository, order_id: str) -> None:
    MarkOrderPaidUseCase(repo, UnlimitedQuotaAdapter()).execute(
        MarkOrderPaidCommand(order_id=order_id, payment_intent_id="pi_1")
    )


def _quota_mock(can_sell: bool = True) -> MagicMock:
    quota = MagicMock(spec=SalesQuotaService)
    quota.check_can_sell.return_value = (
        Result.ok() if can_sell else Result.fail("Limite de 10 ventes atteinte")
    )
    quota.record_sale.return_value = Result.ok()
    return quota


# ═════════════════════════════════════════════════════════════════════
# CreateOrderUseCase
# ═════════════════════════════════════════════════════════════════════


class TestCreateOrderUseCase:
    def test_creates_pending_order(self) -> None:
        repo = InMemoryOrderRepository()
        result = CreateOrderUseCase(repo, _quota_mock()).execute(_command())

        assert result.is_success
        detail = result.value
        assert detail.status == "PENDING"
        assert detail.total_amount == 5000
        assert detail.shipping_cost == 490
        assert detail.items[0].subtotal == 5000
        assert repo.find_by_id(detail.id) is not None

    def test_refused_when_sales_limit_reached(self) -> None:
        repo = InMemoryOrderRepository()
        result = CreateOrderUseCase(repo, _quota_mock(can_sell=False)).execute(_command())

        assert result.is_failure
        assert result.error == "Limite de 10 ventes atteinte"
        assert repo.find_by_creator_id("creator-1")[1] == 0

    def test_invalid_item_is_rejected_before_quota_check(self) -> None:
        quota = _quota_mock()
        items = [OrderItemInput(product_id="prod-1", product_name="Tote", price=100, quantity=0)]
        result = CreateOrderUseCase(InMemoryOrderRepository(), quota).execute(
            _command(items=items)
        )

        assert result.error == "La quantité doit être supérieure à 0"
        quota.check_can_sell.assert_not_called()

    def test_empty_cart(self) -> None:
        result = CreateOrderUseCase(InMemoryOrderRepository(), _quota_mock()).execute(
            _command(items=[])
        )
        assert result.error == "La commande doit contenir des articles"

    def test_does_not_record_sale(self) -> None:
        quota = _quota_mock()
        CreateOrderUseCase(InMemoryOrderRepository(), quota).execute(_command())
        quota.record_sale.assert_not_called()


# ═════════════════════════════════════════════════════════════════════
# MarkOrderPaidUseCase
# ═════════════════════════════════════════════════════════════════════


class TestMarkOrderPaidUseCase:
    def test_marks_paid_and_records_sale(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        quota = _quota_mock()

        result = MarkOrderPaidUseCase(repo, quota).execute(
            MarkOrderPaidCommand(order_id=order_id, payment_intent_id="pi_42")
        )

        assert result.value.status == "PAID"
        assert result.value.stripe_payment_intent_id == "pi_42"
        quota.record_sale.assert_called_once_with("creator-1")

    def test_order_stays_paid_when_recording_fails(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        quota = _quota_mock()
        quota.record_sale.return_value = Result.fail("Abonnement non trouvé")

        result = MarkOrderPaidUseCase(repo, quota).execute(MarkOrderPaidCommand(order_id=order_id))

        assert result.is_success
        assert repo.find_by_id(order_id).status is OrderStatus.PAID

    def test_unknown_order(self) -> None:
        result = MarkOrderPaidUseCase(InMemoryOrderRepository(), _quota_mock()).execute(
            MarkOrderPaidCommand(order_id="missing")
        )
        assert result.error == "Commande non trouvée"

    def test_already_paid(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        _pay(repo, order_id)
        quota = _quota_mock()

        result = MarkOrderPaidUseCase(repo, quota).execute(MarkOrderPaidCommand(order_id=order_id))

        assert result.error == "Commande déjà payée ou dans un état incompatible"
        quota.record_sale.assert_not_called()


# ═════════════════════════════════════════════════════════════════════
# Fulfilment use cases
# ═════════════════════════════════════════════════════════════════════


class TestShipOrderUseCase:
    def test_ships_paid_order(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        _pay(repo, order_id)

        result = ShipOrderUseCase(repo).execute(
            ShipOrderCommand(order_id, "creator-1", "TRACK1", "Colissimo")
        )

        assert result.value.status == "SHIPPED"
        assert repo.find_by_id(order_id).tracking_number == "TRACK1"

    def test_other_creator_cannot_ship(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        _pay(repo, order_id)

        result = ShipOrderUseCase(repo).execute(
            ShipOrderCommand(order_id, "creator-2", "TRACK1", "Colissimo")
        )

        assert result.error == "Vous n'êtes pas autorisé à modifier cette commande"

    def test_tracking_number_checked_first(self) -> None:
        result = ShipOrderUseCase(InMemoryOrderRepository()).execute(
            ShipOrderCommand("missing", "creator-1", " ", "Colissimo")
        )
        assert result.error == "Le numéro de suivi est requis"

    def test_unpaid_order(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        result = ShipOrderUseCase(repo).execute(
            ShipOrderCommand(order_id, "creator-1", "TRACK1", "DHL")
        )
        assert result.error == "La commande doit être payée avant expédition"


class TestMarkDeliveredUseCase:
    def test_delivers_shipped_order(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        _pay(repo, order_id)
        ShipOrderUseCase(repo).execute(ShipOrderCommand(order_id, "creator-1", "T1", "DHL"))

        result = MarkDeliveredUseCase(repo).execute(MarkDeliveredCommand(order_id, "creator-1"))

        assert result.value.status == "DELIVERED"
        assert result.value.delivered_at is not None

    def test_paid_order_is_not_delivered(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        _pay(repo, order_id)
        result = MarkDeliveredUseCase(repo).execute(MarkDeliveredCommand(order_id, "creator-1"))
        assert result.error == "La commande doit être expédiée avant livraison"


class TestCancelOrderUseCase:
    def test_cancels_pending_order(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)

        result = CancelOrderUseCase(repo).execute(
            CancelOrderCommand(order_id, "creator-1", "Rupture de stock")
        )

        assert result.value.status == "CANCELLED"
        assert result.value.cancellation_reason == "Rupture de stock"

    def test_reason_required(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        result = CancelOrderUseCase(repo).execute(CancelOrderCommand(order_id, "creator-1", ""))
        assert result.error == "La raison d'annulation est requise"

    def test_unknown_order(self) -> None:
        result = CancelOrderUseCase(InMemoryOrderRepository()).execute(
            CancelOrderCommand("missing", "creator-1", "Doublon")
        )
        assert result.error == "Commande non trouvée"


class TestRefundOrderUseCase:
    def test_refunds_paid_order(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        _pay(repo, order_id)

        result = RefundOrderUseCase(repo).execute(
            RefundOrderCommand(order_id, "creator-1", "re_1", "Colis perdu")
        )

        assert result.value.status == "REFUNDED"
        assert result.value.stripe_refund_id == "re_1"

    def test_pending_order_cannot_be_refunded(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        result = RefundOrderUseCase(repo).execute(RefundOrderCommand(order_id, "creator-1", "re_1"))
        assert result.error == "La commande doit être payée pour être remboursée"


# ═════════════════════════════════════════════════════════════════════
# Queries
# ═════════════════════════════════════════════════════════════════════


class TestGetOrderDetailUseCase:
    def test_creator_can_view(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        result = GetOrderDetailUseCase(repo).execute(
            GetOrderDetailQuery(order_id=order_id, creator_id="creator-1")
        )
        assert result.value.shipping_city == "Paris"

    def test_customer_can_view(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        result = GetOrderDetailUseCase(repo).execute(
            GetOrderDetailQuery(order_id=order_id, customer_id="customer-1")
        )
        assert result.is_success

    def test_stranger_cannot_view(self) -> None:
        repo = InMemoryOrderRepository()
        order_id = _place(repo)
        result = GetOrderDetailUseCase(repo).execute(
            GetOrderDetailQuery(order_id=order_id, creator_id="someone", customer_id="someone")
        )
        assert result.error == "Vous n'êtes pas autorisé à voir cette commande"

    def test_blank_id(self) -> None:
        result = GetOrderDetailUseCase(InMemoryOrderRepository()).execute(
            GetOrderDetailQuery(order_id=" ", creator_id="creator-1")
        )
        assert result.error == "Order ID est requis"


class TestListOrdersUseCase:
    def test_paginates_creator_orders(self) -> None:
        repo = InMemoryOrderRepository()
        for _ in range(5):
            _place(repo)
        _place(repo, creator_id="creator-2")

        result = ListOrdersUseCase(repo).execute(
            ListOrdersQuery(creator_id="creator-1", page=2, limit=2)
        )

        page = result.value
        assert page.total == 5
        assert page.total_pages == 3
        assert len(page.orders) == 2
        assert all(o.creator_id == "creator-1" for o in page.orders)

    def test_filters_by_status(self) -> None:
        repo = InMemoryOrderRepository()
        paid_id = _place(repo)
        _place(repo)
        _pay(repo, paid_id)

        result = ListOrdersUseCase(repo).execute(
            ListOrdersQuery(creator_id="creator-1", status="PAID")
        )

        assert [o.id for o in result.value.orders] == [paid_id]

    def test_search_matches_customer_name(self) -> None:
        repo = InMemoryOrderRepository()
        _place(repo, customer_name="Bruno Petit")
        _place(repo, customer_name="Alice Martin")

        result = ListOrdersUseCase(repo).execute(
            ListOrdersQuery(creator_id="creator-1", search="bruno")
        )

        assert result.value.total == 1
        assert result.value.orders[0].customer_name == "Bruno Petit"

    def test_invalid_status(self) -> None:
        result = ListOrdersUseCase(InMemoryOrderRepository()).execute(
            ListOrdersQuery(creator_id="creator-1", status="LOST")
        )
        assert result.is_failure

    def test_invalid_pagination(self) -> None:
        use_case = ListOrdersUseCase(InMemoryOrderRepository())
        assert (
            use_case.execute(ListOrdersQuery(creator_id="creator-1", page=0)).error
            == "La page doit être supérieure ou égale à 1"
        )
        assert use_case.execute(ListOrdersQuery(creator_id="creator-1", limit=500)).is_failure

    def test_empty_listing(self) -> None:
        page = ListOrdersUseCase(InMemoryOrderRepository()).execute(
            ListOrdersQuery(creator_id="creator-1")
        ).value
        assert page.total == 0
        assert page.total_pages == 0


class TestListCustomerOrdersUseCase:
    def test_lists_across_creators(self) -> None:
        repo = InMemoryOrderRepository()
        _place(repo, creator_id="creator-1")
        _place(repo, creator_id="creator-2")
        _place(repo, customer_id="customer-2")

        result = ListCustomerOrdersUseCase(repo).execute(
            ListCustomerOrdersQuery(customer_id="customer-1")
        )

        assert result.value.total == 2
        assert {o.creator_id for o in result.value.orders} == {"creator-1", "creator-2"}

    def test_requires_customer(self) -> None:
        result = ListCustomerOrdersUseCase(InMemoryOrderRepository()).execute(
            ListCustomerOrdersQuery(customer_id="")
        )
        assert result.error == "Customer ID est requis"
