"""
Tests for the orders API endpoints.

Orders are stored in the in-memory repository; the sales allowance is
answered by the in-memory subscription of ``creator-1``.
"""

from datetime import timedelta

from app.domain.subscriptions.entities import Subscription


# ── Helpers ──────────────────────────────────────────────────────────

CREATOR = {"X-User-Id": "creator-1", "X-User-Role": "CREATOR"}
OTHER_CREATOR = {"X-User-Id": "creator-2", "X-User-Role": "CREATOR"}
CUSTOMER = {"X-User-Id": "customer-1", "X-User-Role": "CUSTOMER"}
ADMIN = {"X-User-Id": "admin-1", "X-User-Role": "ADMIN"}
BASE = "/api/v1/orders"


def _seed_subscription(api, sales_used: int = 0) -> Subscription:
    subscription = Subscription.create("creator-1", "creator-1").value
    subscription.sales_used = sales_used
    api.subscriptions.save(subscription)
    return subscription


def _payload(**overrides) -> dict:
    payload = {
        "creator_id": "creator-1",
        "customer_name": "Alice Martin",
        "customer_email": "alice@example.com",
        "items": [
            {
                "product_id": "prod-1",
                "product_name": "Vase en grès",
                "price": 2500,
                "quantity": 2,
            }
        ],
        "shipping_address": {
            "street": "12 rue des Lilas",
            "city": "Lyon",
            "postal_code": "69001",
            "country": "FR",
        },
        "shipping_cost": 490,
    }
    payload.update(overrides)
    return payload


def _place(api) -> dict:
    response = api.client.post(BASE, json=_payload(), headers=CUSTOMER)
    assert response.status_code == 201
    return response.json()


def _place_paid(api) -> dict:
    order = _place(api)
    response = api.client.post(
        f"{BASE}/{order['id']}/pay", json={"payment_intent_id": "pi_1"}, headers=ADMIN
    )
    assert response.status_code == 200
    return response.json()


# ═════════════════════════════════════════════════════════════════════
# Placing and reading orders
# ═════════════════════════════════════════════════════════════════════


class TestCreateOrder:
    def test_creates_pending_order(self, api) -> None:
        _seed_subscription(api)

        body = _place(api)

        assert body["status"] == "PENDING"
        assert body["customer_id"] == "customer-1"
        assert body["total_amount"] == 5000
        assert body["items"][0]["subtotal"] == 5000
        assert body["order_number"].startswith("ORD-")
        assert body["shipping_city"] == "Lyon"

    def test_requires_identity(self, api) -> None:
        response = api.client.post(BASE, json=_payload())
        assert response.status_code == 401

    def test_refused_when_sales_limit_reached(self, api) -> None:
        _seed_subscription(api, sales_used=10)

        response = api.client.post(BASE, json=_payload(), headers=CUSTOMER)

        assert response.status_code == 400
        assert "Limite de 10 ventes atteinte" in response.json()["detail"]
        assert api.orders.find_by_customer_id("customer-1") == ([], 0)

    def test_invalid_quantity(self, api) -> None:
        _seed_subscription(api)
        items = [{"product_id": "p", "product_name": "Bol", "price": 100, "quantity": 0}]

        response = api.client.post(BASE, json=_payload(items=items), headers=CUSTOMER)

        assert response.status_code == 400
        assert response.json()["detail"] == "La quantité doit être supérieure à 0"

    def test_empty_items_is_a_validation_error(self, api) -> None:
        response = api.client.post(BASE, json=_payload(items=[]), headers=CUSTOMER)
        assert response.status_code == 422


class TestReadOrders:
    def test_creator_lists_sales(self, api) -> None:
        _seed_subscription(api)
        _place(api)

        body = api.client.get(BASE, headers=CREATOR).json()

        assert body["total"] == 1
        assert body["orders"][0]["item_count"] == 2
        assert body["total_pages"] == 1

    def test_list_filters_by_status(self, api) -> None:
        _seed_subscription(api)
        _place(api)

        body = api.client.get(BASE, params={"status": "PAID"}, headers=CREATOR).json()

        assert body["total"] == 0

    def test_list_rejects_unknown_status(self, api) -> None:
        response = api.client.get(BASE, params={"status": "LOST"}, headers=CREATOR)
        assert response.status_code == 400

    def test_customers_cannot_list_sales(self, api) -> None:
        assert api.client.get(BASE, headers=CUSTOMER).status_code == 403

    def test_customer_lists_purchases(self, api) -> None:
        _seed_subscription(api)
        _place(api)

        body = api.client.get(f"{BASE}/mine", headers=CUSTOMER).json()

        assert body["total"] == 1
        assert body["orders"][0]["creator_id"] == "creator-1"

    def test_detail_visible_to_creator_and_customer(self, api) -> None:
        _seed_subscription(api)
        order = _place(api)

        for headers in (CREATOR, CUSTOMER):
            response = api.client.get(f"{BASE}/{order['id']}", headers=headers)
            assert response.status_code == 200
            assert response.json()["id"] == order["id"]

    def test_detail_hidden_from_others(self, api) -> None:
        _seed_subscription(api)
        order = _place(api)

        response = api.client.get(f"{BASE}/{order['id']}", headers=OTHER_CREATOR)

        assert response.status_code == 400
        assert response.json()["detail"] == "Vous n'êtes pas autorisé à voir cette commande"

    def test_unknown_order(self, api) -> None:
        response = api.client.get(f"{BASE}/missing", headers=CREATOR)
        assert response.json()["detail"] == "Commande non trouvée"


# ═════════════════════════════════════════════════════════════════════
# Lifecycle
# ═════════════════════════════════════════════════════════════════════


class TestOrderLifecycle:
    def test_pay_counts_the_sale(self, api) -> None:
        _seed_subscription(api)

        body = _place_paid(api)

        assert body["status"] == "PAID"
        assert body["stripe_payment_intent_id"] == "pi_1"
        assert api.subscriptions.find_by_creator_id("creator-1").sales_used == 1

    def test_pay_requires_admin(self, api) -> None:
        _seed_subscription(api)
        order = _place(api)

        response = api.client.post(f"{BASE}/{order['id']}/pay", json={}, headers=CREATOR)

        assert response.status_code == 403

    def test_pay_twice_is_refused(self, api) -> None:
        _seed_subscription(api)
        order = _place_paid(api)

        response = api.client.post(f"{BASE}/{order['id']}/pay", json={}, headers=ADMIN)

        assert response.status_code == 400
        assert response.json()["detail"] == "Commande déjà payée ou dans un état incompatible"

    def test_ship_then_deliver(self, api) -> None:
        _seed_subscription(api)
        order = _place_paid(api)

        shipped = api.client.post(
            f"{BASE}/{order['id']}/ship",
            json={"tracking_number": "6A123", "carrier": "Colissimo"},
            headers=CREATOR,
        ).json()
        delivered = api.client.post(f"{BASE}/{order['id']}/deliver", headers=CREATOR).json()

        assert shipped["status"] == "SHIPPED"
        assert shipped["tracking_number"] == "6A123"
        assert shipped["shipped_at"] is not None
        assert delivered["status"] == "DELIVERED"
        assert delivered["delivered_at"] is not None

    def test_ship_before_payment(self, api) -> None:
        _seed_subscription(api)
        order = _place(api)

        response = api.client.post(
            f"{BASE}/{order['id']}/ship",
            json={"tracking_number": "6A123", "carrier": "Colissimo"},
            headers=CREATOR,
        )

        assert response.json()["detail"] == "La commande doit être payée avant expédition"

    def test_other_creator_cannot_ship(self, api) -> None:
        _seed_subscription(api)
        order = _place_paid(api)

        response = api.client.post(
            f"{BASE}/{order['id']}/ship",
            json={"tracking_number": "6A123", "carrier": "Colissimo"},
            headers=OTHER_CREATOR,
        )

        assert response.json()["detail"] == "Vous n'êtes pas autorisé à modifier cette commande"

    def test_cancel_pending(self, api) -> None:
        _seed_subscription(api)
        order = _place(api)

        body = api.client.post(
            f"{BASE}/{order['id']}/cancel", json={"reason": "Rupture de stock"}, headers=CREATOR
        ).json()

        assert body["status"] == "CANCELLED"
        assert body["cancellation_reason"] == "Rupture de stock"

    def test_cancel_after_shipping_is_refused(self, api) -> None:
        _seed_subscription(api)
        order = _place_paid(api)
        api.client.post(
            f"{BASE}/{order['id']}/ship",
            json={"tracking_number": "6A123", "carrier": "Colissimo"},
            headers=CREATOR,
        )

        response = api.client.post(
            f"{BASE}/{order['id']}/cancel", json={"reason": "Trop tard"}, headers=CREATOR
        )

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "La commande ne peut pas être annulée car elle a été expédiée"
        )

    def test_refund_paid_order(self, api) -> None:
        _seed_subscription(api)
        order = _place_paid(api)

        body = api.client.post(
            f"{BASE}/{order['id']}/refund",
            json={"refund_id": "re_1", "reason": "Colis abîmé"},
            headers=CREATOR,
        ).json()

        assert body["status"] == "REFUNDED"
        assert body["stripe_refund_id"] == "re_1"

    def test_refund_pending_order_is_refused(self, api) -> None:
        _seed_subscription(api)
        order = _place(api)

        response = api.client.post(
            f"{BASE}/{order['id']}/refund", json={"refund_id": "re_1"}, headers=CREATOR
        )

        assert response.json()["detail"] == "La commande doit être payée pour être remboursée"


class TestConcurrentUpdates:
    def test_stale_order_gives_conflict(self, api, monkeypatch) -> None:
        _seed_subscription(api)
        order = _place_paid(api)
        stale = api.orders.find_by_id(order["id"])
        fresh = api.orders.find_by_id(order["id"])
        fresh.updated_at = fresh.updated_at + timedelta(seconds=1)
        api.orders.save(fresh)
        monkeypatch.setattr(api.orders, "find_by_id", lambda order_id: stale)

        response = api.client.post(
            f"{BASE}/{order['id']}/ship",
            json={"tracking_number": "6A123", "carrier": "Colissimo"},
            headers=CREATOR,
        )

        assert response.status_code == 409
        assert response.json() == {
            "error": "Conflict",
            "detail": f"Order {order['id']} was modified concurrently; reload and retry",
        }
