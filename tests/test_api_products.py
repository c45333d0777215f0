"""
Tests for the products API endpoints.

The catalog lives in the in-memory repositories; Cloudinary is the
mocked ImageUploadService of the ``api`` fixture and the publish
allowance comes from the in-memory subscription of ``creator-1``.
"""

from app.domain.subscriptions.entities import Subscription
from app.shared.domain import Result


# ── Helpers ──────────────────────────────────────────────────────────

CREATOR = {"X-User-Id": "creator-1", "X-User-Role": "CREATOR"}
OTHER_CREATOR = {"X-User-Id": "creator-2", "X-User-Role": "CREATOR"}
BASE = "/api/v1/products"
JPEG = ("vase.jpg", b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg")


def _seed_subscription(api, products_used: int = 0) -> Subscription:
    subscription = Subscription.create("creator-1", "creator-1").value
    subscription.products_used = products_used
    api.subscriptions.save(subscription)
    return subscription


def _product(api, name: str = "Vase en grès", price: float = 29.9) -> dict:
    response = api.client.post(BASE, json={"name": name, "price": price}, headers=CREATOR)
    assert response.status_code == 201
    return response.json()


def _variant(api, product_id: str, name: str = "Bleu", stock: int = 3) -> dict:
    response = api.client.post(
        f"{BASE}/{product_id}/variants", json={"name": name, "stock": stock}, headers=CREATOR
    )
    assert response.status_code == 201
    return response.json()


def _image(api, product_id: str, filename: str = "vase.jpg") -> dict:
    response = api.client.post(
        f"{BASE}/{product_id}/images",
        files={"file": (filename, JPEG[1], JPEG[2])},
        data={"alt": "Vue de face"},
        headers=CREATOR,
    )
    assert response.status_code == 201
    return response.json()


# ═════════════════════════════════════════════════════════════════════
# Products
# ═════════════════════════════════════════════════════════════════════


class TestProductEndpoints:
    def test_create_converts_euros_to_cents(self, api) -> None:
        body = _product(api)
        assert body["price"] == 2990
        assert body["formatted_price"] == "29,90 €"
        assert body["status"] == "DRAFT"

    def test_create_with_zero_price(self, api) -> None:
        response = api.client.post(BASE, json={"name": "Bol", "price": 0}, headers=CREATOR)
        assert response.status_code == 400
        assert response.json()["detail"] == "Le montant doit être supérieur à 0"

    def test_create_with_infinite_price(self, api) -> None:
        response = api.client.post(
            BASE,
            content='{"name": "Bol", "price": Infinity}',
            headers={**CREATOR, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Le montant doit être un nombre"

    def test_create_with_oversized_price(self, api) -> None:
        response = api.client.post(BASE, json={"name": "Bol", "price": 1e12}, headers=CREATOR)
        assert response.status_code == 400
        assert response.json()["detail"] == "Le montant est trop élevé"

    def test_list_and_search(self, api) -> None:
        _product(api, name="Vase en grès")
        _product(api, name="Bol à thé")

        body = api.client.get(BASE, params={"search": "vase"}, headers=CREATOR).json()

        assert body["total"] == 1
        assert body["products"][0]["name"] == "Vase en grès"

    def test_update(self, api) -> None:
        product = _product(api)

        body = api.client.patch(
            f"{BASE}/{product['id']}", json={"price": 35, "name": "Grand vase"}, headers=CREATOR
        ).json()

        assert body["price"] == 3500
        assert body["name"] == "Grand vase"

    def test_other_creator_cannot_update(self, api) -> None:
        product = _product(api)

        response = api.client.patch(
            f"{BASE}/{product['id']}", json={"name": "Volé"}, headers=OTHER_CREATOR
        )

        assert response.json()["detail"] == "Vous n'êtes pas autorisé à modifier ce produit"


class TestPublication:
    def test_publish_uses_a_slot(self, api) -> None:
        _seed_subscription(api)
        product = _product(api)

        body = api.client.post(f"{BASE}/{product['id']}/publish", headers=CREATOR).json()

        assert body["product"]["status"] == "PUBLISHED"
        assert body["limit_warning"] is None
        assert api.subscriptions.find_by_creator_id("creator-1").products_used == 1

    def test_last_slot_carries_a_warning(self, api) -> None:
        _seed_subscription(api, products_used=4)
        product = _product(api)

        body = api.client.post(f"{BASE}/{product['id']}/publish", headers=CREATOR).json()

        assert body["limit_warning"] == (
            "Attention : c'est votre dernier produit disponible avec le plan FREE."
        )

    def test_publish_refused_at_limit(self, api) -> None:
        _seed_subscription(api, products_used=5)
        product = _product(api)

        response = api.client.post(f"{BASE}/{product['id']}/publish", headers=CREATOR)

        assert response.status_code == 400
        assert api.products.find_by_id(product["id"]).is_published is False

    def test_unpublish_frees_the_slot(self, api) -> None:
        _seed_subscription(api)
        product = _product(api)
        api.client.post(f"{BASE}/{product['id']}/publish", headers=CREATOR)

        body = api.client.post(f"{BASE}/{product['id']}/unpublish", headers=CREATOR).json()

        assert body["status"] == "DRAFT"
        assert api.subscriptions.find_by_creator_id("creator-1").products_used == 0

    def test_delete_published_product(self, api) -> None:
        _seed_subscription(api)
        product = _product(api)
        api.client.post(f"{BASE}/{product['id']}/publish", headers=CREATOR)
        image = _image(api, product["id"])

        response = api.client.delete(f"{BASE}/{product['id']}", headers=CREATOR)

        assert response.status_code == 204
        assert api.products.find_by_id(product["id"]) is None
        assert api.subscriptions.find_by_creator_id("creator-1").products_used == 0
        api.uploads.delete.assert_called_once_with(image["url"])


# ═════════════════════════════════════════════════════════════════════
# Variants and SKUs
# ═════════════════════════════════════════════════════════════════════


class TestVariantEndpoints:
    def test_create_and_list(self, api) -> None:
        product = _product(api)
        _variant(api, product["id"], "Bleu", stock=3)
        _variant(api, product["id"], "Rouge", stock=0)

        body = api.client.get(f"{BASE}/{product['id']}/variants", headers=CREATOR).json()

        availability = {v["name"]: v["is_available"] for v in body}
        assert availability == {"Bleu": True, "Rouge": False}

    def test_update_stock(self, api) -> None:
        product = _product(api)
        variant = _variant(api, product["id"])

        body = api.client.patch(
            f"{BASE}/{product['id']}/variants/{variant['id']}",
            json={"stock": 12, "price_override": 32.5},
            headers=CREATOR,
        ).json()

        assert body["stock"] == 12
        assert body["price_override"] == 3250

    def test_negative_stock(self, api) -> None:
        product = _product(api)
        variant = _variant(api, product["id"])

        response = api.client.patch(
            f"{BASE}/{product['id']}/variants/{variant['id']}",
            json={"stock": -1},
            headers=CREATOR,
        )

        assert response.json()["detail"] == "Le stock ne peut pas être négatif"

    def test_stock_beyond_integer_column(self, api) -> None:
        product = _product(api)

        response = api.client.post(
            f"{BASE}/{product['id']}/variants",
            json={"name": "Vert", "stock": 3_000_000_000},
            headers=CREATOR,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Le stock est trop élevé"

    def test_last_variant_cannot_be_deleted(self, api) -> None:
        product = _product(api)
        first = _variant(api, product["id"], "Bleu")
        second = _variant(api, product["id"], "Rouge")

        deleted = api.client.delete(
            f"{BASE}/{product['id']}/variants/{first['id']}", headers=CREATOR
        )
        refused = api.client.delete(
            f"{BASE}/{product['id']}/variants/{second['id']}", headers=CREATOR
        )

        assert deleted.status_code == 204
        assert refused.status_code == 400
        assert refused.json()["detail"] == (
            "Impossible de supprimer la dernière variante du produit"
        )

    def test_upsert_sku_updates_in_place(self, api) -> None:
        product = _product(api)
        variant = _variant(api, product["id"])
        key = {"variant_id": variant["id"], "size": "M"}

        created = api.client.put(
            f"{BASE}/{product['id']}/skus", json={**key, "stock": 4}, headers=CREATOR
        ).json()
        updated = api.client.put(
            f"{BASE}/{product['id']}/skus", json={**key, "stock": 9}, headers=CREATOR
        ).json()

        assert updated["id"] == created["id"]
        assert updated["stock"] == 9
        assert len(api.skus.find_by_product_id(product["id"])) == 1

    def test_sku_of_foreign_variant(self, api) -> None:
        product = _product(api)
        other = _product(api, name="Bol")
        variant = _variant(api, other["id"])

        response = api.client.put(
            f"{BASE}/{product['id']}/skus",
            json={"variant_id": variant["id"], "stock": 1},
            headers=CREATOR,
        )

        assert response.json()["detail"] == "Variante non trouvée"


class TestVariantImages:
    def test_upload_and_remove(self, api) -> None:
        product = _product(api)
        variant = _variant(api, product["id"])

        added = api.client.post(
            f"{BASE}/{product['id']}/variants/{variant['id']}/images",
            files={"file": JPEG},
            headers=CREATOR,
        )
        url = added.json()["url"]
        removed = api.client.delete(
            f"{BASE}/{product['id']}/variants/{variant['id']}/images",
            params={"url": url},
            headers=CREATOR,
        )

        assert added.status_code == 201
        assert added.json()["images"] == [url]
        assert removed.json()["images"] == []
        api.uploads.delete.assert_called_once_with(url)

    def test_unsupported_format(self, api) -> None:
        product = _product(api)
        variant = _variant(api, product["id"])

        response = api.client.post(
            f"{BASE}/{product['id']}/variants/{variant['id']}/images",
            files={"file": ("notes.pdf", b"%PDF-1.7", "application/pdf")},
            headers=CREATOR,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Format d'image non supporté"
        api.uploads.upload.assert_not_called()


# ═════════════════════════════════════════════════════════════════════
# Product images
# ═════════════════════════════════════════════════════════════════════


class TestProductImages:
    def test_first_upload_is_main(self, api) -> None:
        product = _product(api)

        first = _image(api, product["id"], "a.jpg")
        second = _image(api, product["id"], "b.jpg")

        assert (first["position"], first["is_main"]) == (0, True)
        assert (second["position"], second["is_main"]) == (1, False)
        assert first["alt"] == "Vue de face"

    def test_upload_failure(self, api) -> None:
        product = _product(api)
        api.uploads.upload.side_effect = None
        api.uploads.upload.return_value = Result.fail("Erreur lors de l'upload de l'image")

        response = api.client.post(
            f"{BASE}/{product['id']}/images", files={"file": JPEG}, headers=CREATOR
        )

        assert response.status_code == 400
        assert api.images.count_by_product_id(product["id"]) == 0

    def test_reorder(self, api) -> None:
        product = _product(api)
        a = _image(api, product["id"], "a.jpg")
        b = _image(api, product["id"], "b.jpg")

        body = api.client.put(
            f"{BASE}/{product['id']}/images/order",
            json={"image_ids": [b["id"], a["id"]]},
            headers=CREATOR,
        ).json()

        by_id = {i["id"]: i for i in body}
        assert by_id[b["id"]]["is_main"] is True
        assert by_id[a["id"]]["position"] == 1

    def test_delete_image(self, api) -> None:
        product = _product(api)
        image = _image(api, product["id"])

        response = api.client.delete(
            f"{BASE}/{product['id']}/images/{image['id']}", headers=CREATOR
        )

        assert response.status_code == 204
        assert api.images.find_by_id(image["id"]) is None
        api.uploads.delete.assert_called_once_with(image["url"])


# ═════════════════════════════════════════════════════════════════════
# Projects
# ═════════════════════════════════════════════════════════════════════

PROJECTS = "/api/v1/projects"
CATALOG = "/api/v1/catalog"


def _project(api, name: str = "Printemps") -> dict:
    response = api.client.post(PROJECTS, json={"name": name}, headers=CREATOR)
    assert response.status_code == 201
    return response.json()


def _publish(api, product_id: str) -> None:
    response = api.client.post(f"{BASE}/{product_id}/publish", headers=CREATOR)
    assert response.status_code == 200


class TestProjectEndpoints:
    def test_create_and_list_with_counts(self, api) -> None:
        project = _project(api)
        api.client.post(
            BASE, json={"name": "Carnet", "price": 12, "project_id": project["id"]}, headers=CREATOR
        )

        body = api.client.get(PROJECTS, headers=CREATOR).json()

        assert body["total"] == 1
        assert body["projects"][0]["product_count"] == 1
        assert project["product_count"] == 0

    def test_blank_name(self, api) -> None:
        response = api.client.post(PROJECTS, json={"name": "  "}, headers=CREATOR)
        assert response.status_code == 400
        assert response.json()["detail"] == "Le nom du projet est requis"

    def test_update_by_other_creator(self, api) -> None:
        project = _project(api)
        response = api.client.patch(
            f"{PROJECTS}/{project['id']}", json={"name": "Volé"}, headers=OTHER_CREATOR
        )
        assert response.json()["detail"] == "Vous n'êtes pas autorisé à modifier ce projet"

    def test_delete_detaches_products(self, api) -> None:
        project = _project(api)
        product = api.client.post(
            BASE, json={"name": "Carnet", "price": 12, "project_id": project["id"]}, headers=CREATOR
        ).json()

        body = api.client.delete(f"{PROJECTS}/{project['id']}", headers=CREATOR).json()

        assert body == {"deleted": True, "orphaned_products": 1}
        assert api.products.find_by_id(product["id"]).project_id is None

    def test_product_in_foreign_project(self, api) -> None:
        project = _project(api)
        response = api.client.post(
            BASE,
            json={"name": "Carnet", "price": 12, "project_id": project["id"]},
            headers=OTHER_CREATOR,
        )
        assert response.json()["detail"] == "Vous n'êtes pas autorisé à modifier ce projet"


# ═════════════════════════════════════════════════════════════════════
# Public catalog
# ═════════════════════════════════════════════════════════════════════


class TestCatalogEndpoints:
    def _storefront(self, api) -> None:
        page = api.client.post(
            "/api/v1/pages", json={"slug": "atelier-lune", "title": "Atelier Lune"}, headers=CREATOR
        ).json()
        api.client.post(f"/api/v1/pages/{page['id']}/publish", headers=CREATOR)

    def test_lists_published_products_by_slug(self, api) -> None:
        _seed_subscription(api)
        self._storefront(api)
        shown = _product(api, name="Vase")
        _product(api, name="Brouillon")
        image = _image(api, shown["id"])
        _publish(api, shown["id"])

        response = api.client.get(f"{CATALOG}/creators/atelier-lune/products")

        body = response.json()
        assert response.status_code == 200
        assert [p["name"] for p in body["products"]] == ["Vase"]
        assert body["products"][0]["main_image_url"] == image["url"]
        assert "creator_id" not in body["products"][0]

    def test_unpublished_storefront_is_empty(self, api) -> None:
        _seed_subscription(api)
        _publish(api, _product(api)["id"])

        body = api.client.get(f"{CATALOG}/creators/atelier-lune/products").json()

        assert body["products"] == []
        assert body["total"] == 0

    def test_product_detail(self, api) -> None:
        _seed_subscription(api)
        product = _product(api)
        _variant(api, product["id"], "Bleu", stock=2)
        _variant(api, product["id"], "Rouge", stock=0)
        draft = api.client.get(f"{CATALOG}/products/{product['id']}")
        _publish(api, product["id"])

        body = api.client.get(f"{CATALOG}/products/{product['id']}").json()

        assert draft.status_code == 400
        assert draft.json()["detail"] == "Produit non trouvé"
        assert [v["name"] for v in body["variants"]] == ["Bleu"]
        assert body["formatted_price"] == "29,90 €"

    def test_products_of_project(self, api) -> None:
        _seed_subscription(api)
        project = _project(api)
        product = api.client.post(
            BASE, json={"name": "Carnet", "price": 12, "project_id": project["id"]}, headers=CREATOR
        ).json()
        _publish(api, product["id"])

        body = api.client.get(f"{CATALOG}/projects/{project['id']}/products").json()
        missing = api.client.get(f"{CATALOG}/projects/missing/products")

        assert body["project"]["name"] == "Printemps"
        assert [p["id"] for p in body["products"]] == [product["id"]]
        assert missing.json()["detail"] == "Projet non trouvé"
