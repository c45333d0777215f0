"""
Domain entities for the orders bounded context.

The Order aggregate owns its line items and guards every status change.
Amounts are integer cents. Entities contain no framework imports and no IO.

Status transitions:
    PENDING  → PAID       (mark_as_paid)
    PAID     → SHIPPED    (ship)
    SHIPPED  → DELIVERED  (mark_as_delivered)
    PENDING  → CANCELLED  (cancel)
    PAID     → CANCELLED  (cancel)
    PAID     → REFUNDED   (refund)
"""

import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from app.shared.domain import Entity, Result, ValueObject, generate_id, utcnow

_BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class OrderStatus(Enum):
    """Lifecycle status of an order."""

    PENDING = "PENDING"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"

    @classmethod
    def from_value(cls, value: str) -> Result["OrderStatus"]:
        try:
            return Result.ok(cls(value))
        except ValueError:
            return Result.fail(f"Statut de commande invalide: {value}")

    @property
    def can_be_cancelled(self) -> bool:
        return self in (OrderStatus.PENDING, OrderStatus.PAID)

    @property
    def is_final(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED)


@dataclass(frozen=True)
class ShippingAddress(ValueObject):
    """Delivery address of an order."""

    street: str
    city: str
    postal_code: str
    country: str

    @classmethod
    def create(
        cls, street: str, city: str, postal_code: str, country: str
    ) -> Result["ShippingAddress"]:
        if not street or not street.strip():
            return Result.fail("L'adresse de livraison est requise")
        if not city or not city.strip():
            return Result.fail("La ville est requise")
        if not postal_code or not postal_code.strip():
            return Result.fail("Le code postal est requis")
        if not country or not country.strip():
            return Result.fail("Le pays est requis")
        return Result.ok(
            cls(
                street=street.strip(),
                city=city.strip(),
                postal_code=postal_code.strip(),
                country=country.strip(),
            )
        )


@dataclass(eq=False)
class OrderItem(Entity):
    """A line of an order. ``price`` is the unit price in cents."""

    product_id: str
    product_name: str
    price: int
    quantity: int
    variant_id: Optional[str] = None
    variant_info: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def create(
        cls,
        product_id: str,
        product_name: str,
        price: int,
        quantity: int,
        variant_id: Optional[str] = None,
        variant_info: Optional[str] = None,
        image: Optional[str] = None,
        id: Optional[str] = None,
    ) -> Result["OrderItem"]:
        """Validate and build a line item.

        ``id`` is only passed when rehydrating from storage.
        """
        if not product_id or not product_id.strip():
            return Result.fail("Product ID est requis")
        if not product_name or not product_name.strip():
            return Result.fail("Le nom du produit est requis")
        if price < 0:
            return Result.fail("Le prix ne peut pas être négatif")
        if quantity <= 0:
            return Result.fail("La quantité doit être supérieure à 0")

        return Result.ok(
            cls(
                id=id or generate_id(),
                product_id=product_id,
                product_name=product_name.strip(),
                price=price,
                quantity=quantity,
                variant_id=variant_id,
                variant_info=variant_info,
                image=image,
            )
        )

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


def generate_order_number() -> str:
    """Return a human-friendly order number like ``ORD-LZ3K9Q1A-4F2C``."""
    millis = int(time.time() * 1000)
    encoded = ""
    while millis:
        millis, remainder = divmod(millis, 36)
        encoded = _BASE36_DIGITS[remainder] + encoded
    return f"ORD-{encoded or '0'}-{secrets.token_hex(2).upper()}"


@dataclass(eq=False)
class Order(Entity):
    """Order aggregate root.

    ``persisted_version`` holds the ``updated_at`` value the order had when
    it was loaded; repositories compare it with the stored row to detect
    concurrent writes. It is None for an order that was never saved.
    """

    order_number: str
    creator_id: str
    customer_id: str
    customer_name: str
    customer_email: str
    items: list[OrderItem]
    shipping_address: ShippingAddress
    status: OrderStatus
    total_amount: int
    stripe_payment_intent_id: Optional[str] = None
    stripe_refund_id: Optional[str] = None
    tracking_number: Optional[str] = None
    carrier: Optional[str] = None
    cancellation_reason: Optional[str] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    shipping_mode: Optional[str] = None
    relay_point_id: Optional[str] = None
    relay_point_name: Optional[str] = None
    shipping_cost: Optional[int] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    persisted_version: Optional[datetime] = field(default=None, repr=False)

    # ── Factories ────────────────────────────────────────────────────

    @classmethod
    def create(
        cls,
        *,
        creator_id: str,
        customer_id: str,
        customer_name: str,
        customer_email: str,
        items: list[OrderItem],
        shipping_address: Optional[ShippingAddress],
        shipping_mode: Optional[str] = None,
        relay_point_id: Optional[str] = None,
        relay_point_name: Optional[str] = None,
        shipping_cost: Optional[int] = None,
    ) -> Result["Order"]:
        """Validate and create a PENDING order.

        Returns:
            Result wrapping the order, or the first validation failure.
        """
        if not creator_id or not creator_id.strip():
            return Result.fail("Creator ID est requis")
        if not customer_id or not customer_id.strip():
            return Result.fail("Customer ID est requis")
        if not customer_name or not customer_name.strip():
            return Result.fail("Le nom du client est requis")
        if not customer_email or not customer_email.strip():
            return Result.fail("L'email du client est requis")
        if not items:
            return Result.fail("La commande doit contenir des articles")
        if shipping_address is None or not shipping_address.street.strip():
            return Result.fail("L'adresse de livraison est requise")

        now = utcnow()
        return Result.ok(
            cls(
                id=generate_id(),
                order_number=generate_order_number(),
                creator_id=creator_id,
                customer_id=customer_id,
                customer_name=customer_name.strip(),
                customer_email=customer_email.strip(),
                items=list(items),
                shipping_address=shipping_address,
                status=OrderStatus.PENDING,
                total_amount=sum(item.subtotal for item in items),
                shipping_mode=shipping_mode,
                relay_point_id=relay_point_id,
                relay_point_name=relay_point_name,
                shipping_cost=shipping_cost,
                created_at=now,
                updated_at=now,
            )
        )

    @classmethod
    def reconstitute(cls, *, status: str, **fields) -> Result["Order"]:
        """Rehydrate an order from storage, validating the stored status.

        The loaded ``updated_at`` becomes the ``persisted_version``.
        """
        status_result = OrderStatus.from_value(status)
        if status_result.is_failure:
            return Result.fail(status_result.error)
        order = cls(status=status_result.value, **fields)
        order.persisted_version = order.updated_at
        return Result.ok(order)

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_paid(self) -> bool:
        return self.status is OrderStatus.PAID

    def is_owned_by(self, creator_id: str) -> bool:
        return self.creator_id == creator_id

    # ── Transitions ──────────────────────────────────────────────────

    def mark_as_paid(self, payment_intent_id: Optional[str] = None) -> Result[None]:
        if self.status is not OrderStatus.PENDING:
            return Result.fail("Commande déjà payée ou dans un état incompatible")
        self.status = OrderStatus.PAID
        if payment_intent_id:
            self.stripe_payment_intent_id = payment_intent_id
        self._touch()
        return Result.ok()

    def ship(self, tracking_number: str, carrier: str) -> Result[None]:
        if self.status is not OrderStatus.PAID:
            return Result.fail("La commande doit être payée avant expédition")
        if not tracking_number or not tracking_number.strip():
            return Result.fail("Le numéro de suivi est requis")
        if not carrier or not carrier.strip():
            return Result.fail("Le transporteur est requis")
        self.status = OrderStatus.SHIPPED
        self.tracking_number = tracking_number.strip()
        self.carrier = carrier.strip()
        self.shipped_at = utcnow()
        self._touch()
        return Result.ok()

    def mark_as_delivered(self) -> Result[None]:
        if self.status is not OrderStatus.SHIPPED:
            return Result.fail("La commande doit être expédiée avant livraison")
        self.status = OrderStatus.DELIVERED
        self.delivered_at = utcnow()
        self._touch()
        return Result.ok()

    def cancel(self, reason: str) -> Result[None]:
        if not reason or not reason.strip():
            return Result.fail("La raison d'annulation est requise")
        if self.status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            return Result.fail(
                "La commande ne peut pas être annulée car elle a été expédiée"
            )
        if not self.status.can_be_cancelled:
            return Result.fail("La commande ne peut pas être annulée dans son état actuel")
        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = reason.strip()
        self._touch()
        return Result.ok()

    def refund(self, refund_id: str, reason: Optional[str] = None) -> Result[None]:
        if self.status is not OrderStatus.PAID:
            return Result.fail("La commande doit être payée pour être remboursée")
        if not refund_id or not refund_id.strip():
            return Result.fail("L'identifiant de remboursement est requis")
        self.status = OrderStatus.REFUNDED
        self.stripe_refund_id = refund_id.strip()
        if reason and reason.strip():
            self.cancellation_reason = reason.strip()
        self._touch()
        return Result.ok()

    def _touch(self) -> None:
        self.updated_at = utcnow()
