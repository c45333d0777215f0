"""
Port interfaces (ABCs) for the orders bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from app.domain.orders.entities import Order, OrderStatus
from app.shared.domain import Result


@dataclass(frozen=True)
class OrderFilters:
    """Optional filters for order listings.

    Attributes:
        status: Keep only orders in this status.
        search: Case-insensitive match on order number, customer name or email.
        customer_id: Keep only orders placed by this customer.
    """

    status: Optional[OrderStatus] = None
    search: Optional[str] = None
    customer_id: Optional[str] = None


@dataclass(frozen=True)
class Pagination:
    skip: int = 0
    take: int = 20


class OrderRepository(ABC):
    """Port for persisting and querying orders."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist an order and replace its line items.

        Raises:
            ConcurrentModificationError: If the stored order changed since
                ``order`` was loaded.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, order_id: str) -> Optional[Order]:
        raise NotImplementedError

    @abstractmethod
    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        raise NotImplementedError

    @abstractmethod
    def find_by_creator_id(
        self,
        creator_id: str,
        filters: Optional[OrderFilters] = None,
        pagination: Optional[Pagination] = None,
    ) -> tuple[list[Order], int]:
        """Return one page of a creator's orders (newest first) and the total."""
        raise NotImplementedError

    @abstractmethod
    def find_by_customer_id(
        self, customer_id: str, pagination: Optional[Pagination] = None
    ) -> tuple[list[Order], int]:
        """Return one page of a customer's orders (newest first) and the total."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, order_id: str) -> None:
        raise NotImplementedError


class SalesQuotaService(ABC):
    """Port for the creator's monthly sales allowance."""

    @abstractmethod
    def check_can_sell(self, creator_id: str) -> Result[None]:
        """Fail with a user-facing message when the creator cannot sell."""
        raise NotImplementedError

    @abstractmethod
    def record_sale(self, creator_id: str) -> Result[None]:
        raise NotImplementedError
