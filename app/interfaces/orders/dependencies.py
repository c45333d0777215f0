"""
Dependency injection for the orders bounded context.

The sales allowance is answered by the subscriptions context through
SubscriptionQuotaAdapter. Tests override ``get_order_repository`` and
``get_sales_quota_service``.
"""

from fastapi import Depends

from app.application.orders.cancel_order import CancelOrderUseCase
from app.application.orders.create_order import CreateOrderUseCase
from app.application.orders.get_order_detail import GetOrderDetailUseCase
from app.application.orders.list_customer_orders import ListCustomerOrdersUseCase
from app.application.orders.list_orders import ListOrdersUseCase
from app.application.orders.mark_delivered import MarkDeliveredUseCase
from app.application.orders.mark_order_paid import MarkOrderPaidUseCase
from app.application.orders.refund_order import RefundOrderUseCase
from app.application.orders.ship_order import ShipOrderUseCase
from app.domain.orders.ports import OrderRepository, SalesQuotaService
from app.domain.subscriptions.ports import SubscriptionRepository
from app.infrastructure.database import get_engine
from app.infrastructure.orders.order_repository import OrderRepositoryAdapter
from app.infrastructure.subscriptions.quota_adapters import SubscriptionQuotaAdapter
from app.interfaces.subscriptions.dependencies import get_subscription_repository


def get_order_repository() -> OrderRepository:
    return OrderRepositoryAdapter(get_engine())


def get_sales_quota_service(
    subscription_repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> SalesQuotaService:
    return SubscriptionQuotaAdapter(subscription_repo)


def get_create_order_use_case(
    repo: OrderRepository = Depends(get_order_repository),
    quota: SalesQuotaService = Depends(get_sales_quota_service),
) -> CreateOrderUseCase:
    return CreateOrderUseCase(order_repo=repo, sales_quota=quota)


def get_mark_order_paid_use_case(
    repo: OrderRepository = Depends(get_order_repository),
    quota: SalesQuotaService = Depends(get_sales_quota_service),
) -> MarkOrderPaidUseCase:
    return MarkOrderPaidUseCase(order_repo=repo, sales_quota=quota)


def get_list_orders_use_case(
    repo: OrderRepository = Depends(get_order_repository),
) -> ListOrdersUseCase:
    return ListOrdersUseCase(order_repo=repo)


def get_list_customer_orders_use_case(
    repo: OrderRepository = Depends(get_order_repository),
) -> ListCustomerOrdersUseCase:
    return ListCustomerOrdersUseCase(order_repo=repo)


def get_order_detail_use_case(
    repo: OrderRepository = Depends(get_order_repository),
) -> GetOrderDetailUseCase:
    return GetOrderDetailUseCase(order_repo=repo)


def get_ship_order_use_case(
    repo: OrderRepository = Depends(get_order_repository),
) -> ShipOrderUseCase:
    return ShipOrderUseCase(order_repo=repo)


def get_mark_delivered_use_case(
    repo: OrderRepository = Depends(get_order_repository),
) -> MarkDeliveredUseCase:
    return MarkDeliveredUseCase(order_repo=repo)


def get_cancel_order_use_case(
    repo: OrderRepository = Depends(get_order_repository),
) -> CancelOrderUseCase:
    return CancelOrderUseCase(order_repo=repo)


def get_refund_order_use_case(
    repo: OrderRepository = Depends(get_order_repository),
) -> RefundOrderUseCase:
    return RefundOrderUseCase(order_repo=repo)
