"""
Domain entities for the products bounded context.

A Product is owned by a creator and moves between DRAFT, PUBLISHED and
ARCHIVED. Variants, images and SKUs reference their product by id and
are persisted independently of it. A Project groups products into a
collection; deleting it detaches its products.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from app.domain.products.value_objects import ImageUrl, ImageUrlType, Money
from app.shared.domain import Entity, Result, generate_id, utcnow

PRODUCT_NAME_MAX_LENGTH = 200
VARIANT_NAME_MAX_LENGTH = 100
PROJECT_NAME_MAX_LENGTH = 100
MAX_STOCK = 2_147_483_647


class ProductStatus(Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"

    @classmethod
    def from_value(cls, value: str) -> Result["ProductStatus"]:
        try:
            return Result.ok(cls(value))
        except ValueError:
            return Result.fail(f"Statut de produit invalide: {value}")


def _validate_product_name(name: Optional[str]) -> Result[str]:
    if name is None or not name.strip():
        return Result.fail("Le nom du produit est requis")
    if len(name.strip()) > PRODUCT_NAME_MAX_LENGTH:
        return Result.fail(
            f"Le nom ne peut pas dépasser {PRODUCT_NAME_MAX_LENGTH} caractères"
        )
    return Result.ok(name.strip())


def _validate_cover_image(cover_image: Optional[str]) -> Result[Optional[str]]:
    if cover_image is None or not cover_image.strip():
        return Result.ok(None)
    return ImageUrl.create(cover_image, ImageUrlType.PROJECT).map(lambda image: image.url)


def _validate_variant_name(name: Optional[str]) -> Result[str]:
    if name is None or not name.strip():
        return Result.fail("Le nom de la variante est requis")
    if len(name.strip()) > VARIANT_NAME_MAX_LENGTH:
        return Result.fail(
            f"Le nom ne peut pas dépasser {VARIANT_NAME_MAX_LENGTH} caractères"
        )
    return Result.ok(name.strip())


def _validate_project_name(name: Optional[str]) -> Result[str]:
    if name is None or not name.strip():
        return Result.fail("Le nom du projet est requis")
    if len(name.strip()) > PROJECT_NAME_MAX_LENGTH:
        return Result.fail(
            f"Le nom ne peut pas dépasser {PROJECT_NAME_MAX_LENGTH} caractères"
        )
    return Result.ok(name.strip())


def _validate_stock(stock: int) -> Result[None]:
    if stock < 0:
        return Result.fail("Le stock ne peut pas être négatif")
    if stock > MAX_STOCK:
        return Result.fail("Le stock est trop élevé")
    return Result.ok()


@dataclass(eq=False)
class Product(Entity):
    """A catalog product. ``price`` is the base price of every variant."""

    creator_id: str
    name: str
    price: Money
    status: ProductStatus
    project_id: Optional[str] = None
    description: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        creator_id: str,
        name: str,
        price: Money,
        description: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> Result["Product"]:
        if not creator_id or not creator_id.strip():
            return Result.fail("Creator ID est requis")
        name_result = _validate_product_name(name)
        if name_result.is_failure:
            return Result.fail(name_result.error)

        now = utcnow()
        return Result.ok(
            cls(
                id=generate_id(),
                creator_id=creator_id.strip(),
                name=name_result.value,
                price=price,
                status=ProductStatus.DRAFT,
                project_id=project_id,
                description=description,
                created_at=now,
                updated_at=now,
            )
        )

    @classmethod
    def reconstitute(cls, *, status: str, **fields: Any) -> Result["Product"]:
        status_result = ProductStatus.from_value(status)
        if status_result.is_failure:
            return Result.fail(status_result.error)
        return Result.ok(cls(status=status_result.value, **fields))

    @property
    def is_draft(self) -> bool:
        return self.status is ProductStatus.DRAFT

    @property
    def is_published(self) -> bool:
        return self.status is ProductStatus.PUBLISHED

    @property
    def is_archived(self) -> bool:
        return self.status is ProductStatus.ARCHIVED

    def is_owned_by(self, creator_id: str) -> bool:
        return self.creator_id == creator_id

    def publish(self) -> Result[None]:
        if self.is_published:
            return Result.fail("Le produit est déjà publié")
        self.status = ProductStatus.PUBLISHED
        self.published_at = utcnow()
        self._touch()
        return Result.ok()

    def unpublish(self) -> Result[None]:
        if self.is_draft:
            return Result.fail("Le produit est déjà en brouillon")
        self.status = ProductStatus.DRAFT
        self._touch()
        return Result.ok()

    def archive(self) -> Result[None]:
        if self.is_archived:
            return Result.fail("Le produit est déjà archivé")
        self.status = ProductStatus.ARCHIVED
        self._touch()
        return Result.ok()

    def update_name(self, name: str) -> Result[None]:
        name_result = _validate_product_name(name)
        if name_result.is_failure:
            return Result.fail(name_result.error)
        self.name = name_result.value
        self._touch()
        return Result.ok()

    def update_description(self, description: Optional[str]) -> None:
        self.description = description
        self._touch()

    def update_price(self, price: Money) -> None:
        self.price = price
        self._touch()

    def assign_project(self, project_id: Optional[str]) -> None:
        self.project_id = project_id
        self._touch()

    def _touch(self) -> None:
        self.updated_at = utcnow()


@dataclass(eq=False)
class ProductVariant(Entity):
    """A sellable variation of a product (colour, model...)."""

    product_id: str
    name: str
    stock: int
    sku: Optional[str] = None
    price_override: Optional[Money] = None
    color: Optional[str] = None
    color_code: Optional[str] = None
    images: list[str] = field(default_factory=list)
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        product_id: str,
        name: str,
        stock: int = 0,
        sku: Optional[str] = None,
        price_override: Optional[Money] = None,
        color: Optional[str] = None,
        color_code: Optional[str] = None,
    ) -> Result["ProductVariant"]:
        if not product_id or not product_id.strip():
            return Result.fail("Product ID est requis")
        name_result = _validate_variant_name(name)
        if name_result.is_failure:
            return Result.fail(name_result.error)
        stock_check = _validate_stock(stock)
        if stock_check.is_failure:
            return Result.fail(stock_check.error)

        now = utcnow()
        return Result.ok(
            cls(
                id=generate_id(),
                product_id=product_id.strip(),
                name=name_result.value,
                stock=stock,
                sku=sku,
                price_override=price_override,
                color=color,
                color_code=color_code,
                created_at=now,
                updated_at=now,
            )
        )

    @property
    def is_available(self) -> bool:
        return self.is_active and self.stock > 0

    @property
    def has_price_override(self) -> bool:
        return self.price_override is not None

    def effective_price(self, product_price: Money) -> Money:
        return self.price_override or product_price

    def update_stock(self, stock: int) -> Result[None]:
        stock_check = _validate_stock(stock)
        if stock_check.is_failure:
            return Result.fail(stock_check.error)
        self.stock = stock
        self._touch()
        return Result.ok()

    def update_name(self, name: str) -> Result[None]:
        name_result = _validate_variant_name(name)
        if name_result.is_failure:
            return Result.fail(name_result.error)
        self.name = name_result.value
        self._touch()
        return Result.ok()

    def update_price_override(self, price: Money) -> None:
        self.price_override = price
        self._touch()

    def remove_price_override(self) -> None:
        self.price_override = None
        self._touch()

    def update_color(self, color: Optional[str], color_code: Optional[str]) -> None:
        self.color = color
        self.color_code = color_code
        self._touch()

    def update_sku(self, sku: Optional[str]) -> None:
        self.sku = sku.strip() if sku and sku.strip() else None
        self._touch()

    def add_image(self, url: str) -> None:
        if url not in self.images:
            self.images.append(url)
            self._touch()

    def remove_image(self, url: str) -> Result[None]:
        if url not in self.images:
            return Result.fail("Image non trouvée")
        self.images.remove(url)
        self._touch()
        return Result.ok()

    def disable(self) -> None:
        """Take the variant off sale; it keeps its row for past orders."""
        self.is_active = False
        self.stock = 0
        self._touch()

    def _touch(self) -> None:
        self.updated_at = utcnow()


@dataclass(eq=False)
class ProductImage(Entity):
    """A gallery image of a product. Position 0 is the main image."""

    product_id: str
    url: ImageUrl
    alt: str
    position: int
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls, product_id: str, url: ImageUrl, alt: str = "", position: int = 0
    ) -> Result["ProductImage"]:
        if not product_id or not product_id.strip():
            return Result.fail("Product ID est requis")
        if position < 0:
            return Result.fail("La position doit être positive")
        return Result.ok(
            cls(
                id=generate_id(),
                product_id=product_id,
                url=url,
                alt=(alt or "").strip(),
                position=position,
            )
        )

    @property
    def is_main(self) -> bool:
        return self.position == 0

    def update_position(self, position: int) -> Result[None]:
        if position < 0:
            return Result.fail("La position doit être positive")
        self.position = position
        return Result.ok()

    def update_alt(self, alt: str) -> None:
        self.alt = (alt or "").strip()


@dataclass(eq=False)
class ProductSku(Entity):
    """Stock of one (product, variant, size) combination."""

    product_id: str
    stock: int
    variant_id: Optional[str] = None
    size: Optional[str] = None
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        product_id: str,
        stock: int,
        variant_id: Optional[str] = None,
        size: Optional[str] = None,
    ) -> Result["ProductSku"]:
        if not product_id or not product_id.strip():
            return Result.fail("Product ID est requis")
        stock_check = _validate_stock(stock)
        if stock_check.is_failure:
            return Result.fail(stock_check.error)
        return Result.ok(
            cls(
                id=generate_id(),
                product_id=product_id,
                stock=stock,
                variant_id=variant_id or None,
                size=size.strip() if size and size.strip() else None,
            )
        )

    def update_stock(self, stock: int) -> Result[None]:
        stock_check = _validate_stock(stock)
        if stock_check.is_failure:
            return Result.fail(stock_check.error)
        self.stock = stock
        self.updated_at = utcnow()
        return Result.ok()


@dataclass(eq=False)
class Project(Entity):
    """A creator's collection of products. Products point at it by id."""

    creator_id: str
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        creator_id: str,
        name: str,
        description: Optional[str] = None,
        cover_image: Optional[str] = None,
    ) -> Result["Project"]:
        if not creator_id or not creator_id.strip():
            return Result.fail("Creator ID est requis")
        name_result = _validate_project_name(name)
        if name_result.is_failure:
            return Result.fail(name_result.error)
        cover_result = _validate_cover_image(cover_image)
        if cover_result.is_failure:
            return Result.fail(cover_result.error)

        now = utcnow()
        return Result.ok(
            cls(
                id=generate_id(),
                creator_id=creator_id.strip(),
                name=name_result.value,
                description=description,
                cover_image=cover_result.value,
                created_at=now,
                updated_at=now,
            )
        )

    @classmethod
    def reconstitute(cls, **fields: Any) -> Result["Project"]:
        return Result.ok(cls(**fields))

    def is_owned_by(self, creator_id: str) -> bool:
        return self.creator_id == creator_id

    def update_name(self, name: str) -> Result[None]:
        name_result = _validate_project_name(name)
        if name_result.is_failure:
            return Result.fail(name_result.error)
        self.name = name_result.value
        self.updated_at = utcnow()
        return Result.ok()

    def update_description(self, description: Optional[str]) -> None:
        self.description = description
        self.updated_at = utcnow()

    def update_cover_image(self, cover_image: Optional[str]) -> Result[None]:
        """Replace the cover; a blank value removes it."""
        cover_result = _validate_cover_image(cover_image)
        if cover_result.is_failure:
            return Result.fail(cover_result.error)
        self.cover_image = cover_result.value
        self.updated_at = utcnow()
        return Result.ok()
