"""
Tests for the products domain layer.

Covers the Money and ImageUrl value objects, the catalog entities and
the projects that group products.
No I/O, no mocks needed.
"""

import math

from app.domain.products.entities import (
    MAX_STOCK,
    Product,
    ProductImage,
    ProductSku,
    ProductStatus,
    ProductVariant,
    Project,
)
from app.domain.products.value_objects import MAX_AMOUNT_CENTS, ImageUrl, ImageUrlType, Money


# ── Helpers ──────────────────────────────────────────────────────────


def _product() -> Product:
    return Product.create("creator-1", "Carnet brodé", Money.create(24.9).value).value


def _variant(**overrides) -> ProductVariant:
    fields = dict(product_id="prod-1", name="Bleu nuit", stock=3)
    fields.update(overrides)
    return ProductVariant.create(**fields).value


# ═════════════════════════════════════════════════════════════════════
# Value objects
# ═════════════════════════════════════════════════════════════════════


class TestMoney:
    def test_create_converts_to_cents(self) -> None:
        money = Money.create(29.99).value
        assert money.amount == 2999
        assert money.currency == "EUR"

    def test_rounds_float_noise(self) -> None:
        assert Money.create(0.1 + 0.2).value.amount == 30

    def test_rejects_zero_and_negative(self) -> None:
        assert Money.create(0).error == "Le montant doit être supérieur à 0"
        assert Money.create(-5).error == "Le montant ne peut pas être négatif"

    def test_rejects_non_numbers(self) -> None:
        assert Money.create("12").error == "Le montant doit être un nombre"
        assert Money.create(True).is_failure
        assert Money.create(float("nan")).is_failure

    def test_rejects_infinity(self) -> None:
        assert Money.create(math.inf).error == "Le montant doit être un nombre"
        assert Money.create(-math.inf).error == "Le montant doit être un nombre"

    def test_rejects_amounts_beyond_integer_column(self) -> None:
        assert Money.create(1e12).error == "Le montant est trop élevé"
        assert Money.create(21_474_836.47).value.amount == MAX_AMOUNT_CENTS

    def test_add_same_currency(self) -> None:
        total = Money.from_cents(1000).add(Money.from_cents(250)).value
        assert total.amount == 1250

    def test_add_different_currency(self) -> None:
        result = Money.from_cents(1000).add(Money.from_cents(250, "USD"))
        assert result.error == "Impossible d'additionner des devises différentes"

    def test_formatted_in_french(self) -> None:
        assert Money.from_cents(123450).formatted == "1 234,50 €"
        assert Money.from_cents(990, "GBP").formatted == "9,90 £"

    def test_display_amount(self) -> None:
        assert Money.from_cents(1999).display_amount == 19.99

    def test_equality_by_value(self) -> None:
        assert Money.from_cents(500) == Money.create(5).value


class TestImageUrl:
    def test_accepts_https_and_local_uploads(self) -> None:
        remote = ImageUrl.create("https://res.cloudinary.com/demo/image/upload/a.jpg").value
        local = ImageUrl.create("/uploads/a.jpg", ImageUrlType.VARIANT).value
        assert remote.is_external
        assert local.is_local
        assert local.type is ImageUrlType.VARIANT

    def test_rejects_plain_http(self) -> None:
        assert ImageUrl.create("http://example.com/a.jpg").is_failure

    def test_required(self) -> None:
        assert ImageUrl.create("  ").error == "L'URL de l'image est requise"


# ═════════════════════════════════════════════════════════════════════
# Product
# ═════════════════════════════════════════════════════════════════════


class TestProduct:
    def test_new_product_is_draft(self) -> None:
        product = _product()
        assert product.is_draft
        assert product.price.amount == 2490
        assert product.published_at is None

    def test_name_rules(self) -> None:
        price = Money.from_cents(100)
        assert Product.create("creator-1", " ", price).error == "Le nom du produit est requis"
        assert Product.create("creator-1", "x" * 201, price).is_failure
        assert Product.create("", "Carnet", price).error == "Creator ID est requis"

    def test_publish_cycle(self) -> None:
        product = _product()
        assert product.publish().is_success
        assert product.is_published
        assert product.published_at is not None
        assert product.publish().error == "Le produit est déjà publié"
        assert product.unpublish().is_success
        assert product.unpublish().error == "Le produit est déjà en brouillon"

    def test_archive(self) -> None:
        product = _product()
        assert product.archive().is_success
        assert product.is_archived
        assert product.archive().error == "Le produit est déjà archivé"
        assert product.unpublish().is_success

    def test_updates(self) -> None:
        product = _product()
        product.update_price(Money.from_cents(3000))
        product.assign_project("project-1")
        assert product.update_name("  Carnet A5 ").is_success
        assert product.name == "Carnet A5"
        assert product.price.amount == 3000
        assert product.project_id == "project-1"

    def test_reconstitute_rejects_unknown_status(self) -> None:
        assert Product.reconstitute(status="DELETED").error == "Statut de produit invalide: DELETED"


# ═════════════════════════════════════════════════════════════════════
# Variants, images and SKUs
# ═════════════════════════════════════════════════════════════════════


class TestProductVariant:
    def test_effective_price(self) -> None:
        base = Money.from_cents(2000)
        assert _variant().effective_price(base) == base
        override = Money.from_cents(2500)
        assert _variant(price_override=override).effective_price(base) == override

    def test_availability(self) -> None:
        assert _variant(stock=1).is_available
        assert not _variant(stock=0).is_available
        variant = _variant(stock=5)
        variant.disable()
        assert not variant.is_available
        assert variant.stock == 0

    def test_negative_stock(self) -> None:
        assert ProductVariant.create("prod-1", "Rouge", stock=-1).is_failure
        assert _variant().update_stock(-2).error == "Le stock ne peut pas être négatif"

    def test_stock_beyond_integer_column(self) -> None:
        assert ProductVariant.create("prod-1", "Rouge", stock=MAX_STOCK + 1).error == (
            "Le stock est trop élevé"
        )
        assert _variant().update_stock(MAX_STOCK).is_success

    def test_name_required(self) -> None:
        assert ProductVariant.create("prod-1", "").error == "Le nom de la variante est requis"

    def test_images_are_unique(self) -> None:
        variant = _variant()
        variant.add_image("https://cdn.example.com/a.jpg")
        variant.add_image("https://cdn.example.com/a.jpg")
        assert variant.images == ["https://cdn.example.com/a.jpg"]

    def test_remove_unknown_image(self) -> None:
        assert _variant().remove_image("https://cdn.example.com/x.jpg").error == "Image non trouvée"

    def test_blank_sku_is_cleared(self) -> None:
        variant = _variant(sku="SKU-1")
        variant.update_sku("  ")
        assert variant.sku is None


class TestProductImage:
    def test_position_zero_is_main(self) -> None:
        url = ImageUrl.create("https://cdn.example.com/a.jpg").value
        image = ProductImage.create("prod-1", url, " Couverture ", 0).value
        assert image.is_main
        assert image.alt == "Couverture"

    def test_negative_position(self) -> None:
        url = ImageUrl.create("https://cdn.example.com/a.jpg").value
        assert ProductImage.create("prod-1", url, position=-1).is_failure


class TestProductSku:
    def test_blank_size_and_variant_are_none(self) -> None:
        sku = ProductSku.create("prod-1", 4, variant_id="", size="  ").value
        assert sku.variant_id is None
        assert sku.size is None

    def test_update_stock(self) -> None:
        sku = ProductSku.create("prod-1", 4, size="M").value
        assert sku.update_stock(10).is_success
        assert sku.stock == 10
        assert sku.update_stock(-1).is_failure

    def test_status_from_value(self) -> None:
        assert ProductStatus.from_value("ARCHIVED").value is ProductStatus.ARCHIVED


class TestProject:
    def test_create_trims_name(self) -> None:
        project = Project.create("creator-1", "  Collection printemps ").value
        assert project.name == "Collection printemps"
        assert project.is_owned_by("creator-1")
        assert not project.is_owned_by("creator-2")

    def test_create_requires_creator_and_name(self) -> None:
        assert Project.create("", "Printemps").error == "Creator ID est requis"
        assert Project.create("creator-1", "   ").error == "Le nom du projet est requis"

    def test_name_length(self) -> None:
        assert Project.create("creator-1", "x" * 100).is_success
        result = Project.create("creator-1", "x" * 101)
        assert result.error == "Le nom ne peut pas dépasser 100 caractères"

    def test_failed_rename_keeps_name(self) -> None:
        project = Project.create("creator-1", "Printemps").value
        assert project.update_name("").is_failure
        assert project.name == "Printemps"
        assert project.update_name(" Été ").is_success
        assert project.name == "Été"

    def test_cover_image_must_be_hosted(self) -> None:
        result = Project.create("creator-1", "Printemps", cover_image="ftp://x/cover.jpg")
        assert result.error.startswith("URL d'image invalide")

        project = Project.create("creator-1", "Printemps", cover_image="/uploads/c.jpg").value
        assert project.update_cover_image("  ").is_success
        assert project.cover_image is None
