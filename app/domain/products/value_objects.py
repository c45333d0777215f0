"""
Value objects for the products bounded context.

Money keeps amounts as integer cents so that sums never drift;
ImageUrl restricts image locations to HTTPS hosts or local uploads.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.shared.domain import Result, ValueObject

DEFAULT_CURRENCY = "EUR"
# Amounts are stored in INTEGER columns.
MAX_AMOUNT_CENTS = 2_147_483_647
_CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


@dataclass(frozen=True)
class Money(ValueObject):
    """An amount in cents with its ISO currency code."""

    amount: int
    currency: str = DEFAULT_CURRENCY

    @classmethod
    def create(cls, euros: Any, currency: str = DEFAULT_CURRENCY) -> Result["Money"]:
        """Build a strictly positive amount from a decimal value in major units."""
        if isinstance(euros, bool) or not isinstance(euros, (int, float)):
            return Result.fail("Le montant doit être un nombre")
        if isinstance(euros, float) and not math.isfinite(euros):
            return Result.fail("Le montant doit être un nombre")
        if euros < 0:
            return Result.fail("Le montant ne peut pas être négatif")
        if euros == 0:
            return Result.fail("Le montant doit être supérieur à 0")
        cents = round(euros * 100)
        if cents > MAX_AMOUNT_CENTS:
            return Result.fail("Le montant est trop élevé")
        return Result.ok(cls(amount=cents, currency=currency))

    @classmethod
    def from_cents(cls, cents: int, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(amount=int(cents), currency=currency)

    def add(self, other: "Money") -> Result["Money"]:
        if other.currency != self.currency:
            return Result.fail("Impossible d'additionner des devises différentes")
        return Result.ok(Money(amount=self.amount + other.amount, currency=self.currency))

    @property
    def display_amount(self) -> float:
        return self.amount / 100

    @property
    def formatted(self) -> str:
        """French display, e.g. ``1 234,50 €``."""
        whole = f"{abs(self.amount) / 100:,.2f}"
        whole = whole.replace(",", " ").replace(".", ",")
        sign = "-" if self.amount < 0 else ""
        symbol = _CURRENCY_SYMBOLS.get(self.currency, self.currency)
        return f"{sign}{whole} {symbol}"


class ImageUrlType(Enum):
    PRODUCT = "product"
    VARIANT = "variant"
    PROJECT = "project"


@dataclass(frozen=True)
class ImageUrl(ValueObject):
    url: str
    type: ImageUrlType = ImageUrlType.PRODUCT

    @classmethod
    def create(cls, url: str, type: ImageUrlType = ImageUrlType.PRODUCT) -> Result["ImageUrl"]:
        if not url or not url.strip():
            return Result.fail("L'URL de l'image est requise")
        value = url.strip()
        if not (value.startswith("https://") or value.startswith("/uploads/")):
            return Result.fail(
                "URL d'image invalide: elle doit commencer par https:// ou /uploads/"
            )
        return Result.ok(cls(url=value, type=type))

    @property
    def is_external(self) -> bool:
        return self.url.startswith("https://")

    @property
    def is_local(self) -> bool:
        return self.url.startswith("/uploads/")
