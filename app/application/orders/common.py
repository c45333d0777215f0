"""
Helpers shared by the order use cases.

- Loading an order on behalf of its creator
- Pagination arguments validation
"""

import math

from app.application.orders.dtos import MAX_PAGE_SIZE
from app.domain.orders.entities import Order
from app.domain.orders.ports import OrderRepository, Pagination
from app.shared.domain import Result

ORDER_NOT_FOUND = "Commande non trouvée"
NOT_ALLOWED_TO_MODIFY = "Vous n'êtes pas autorisé à modifier cette commande"
NOT_ALLOWED_TO_VIEW = "Vous n'êtes pas autorisé à voir cette commande"


def load_creator_order(
    order_repo: OrderRepository, order_id: str, creator_id: str
) -> Result[Order]:
    """Fetch an order and check that ``creator_id`` sells it."""
    if not order_id or not order_id.strip():
        return Result.fail("Order ID est requis")
    order = order_repo.find_by_id(order_id)
    if order is None:
        return Result.fail(ORDER_NOT_FOUND)
    if not order.is_owned_by(creator_id):
        return Result.fail(NOT_ALLOWED_TO_MODIFY)
    return Result.ok(order)


def validate_pagination(page: int, limit: int) -> Result[Pagination]:
    """Turn page/limit arguments into a skip/take window."""
    if page < 1:
        return Result.fail("La page doit être supérieure ou égale à 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        return Result.fail(f"La limite doit être comprise entre 1 et {MAX_PAGE_SIZE}")
    return Result.ok(Pagination(skip=(page - 1) * limit, take=limit))


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0
