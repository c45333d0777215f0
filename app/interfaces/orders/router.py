"""
FastAPI router for the orders bounded context.

All routes delegate to use cases. No business logic here.
A concurrent update of the same order surfaces as 409 through the
centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.application.orders.cancel_order import CancelOrderUseCase
from app.application.orders.create_order import CreateOrderUseCase
from app.application.orders.dtos import (
    DEFAULT_PAGE_SIZE,
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
from app.interfaces.auth import CurrentUser, get_current_user, require_admin, require_creator
from app.interfaces.common import unwrap
from app.interfaces.orders.dependencies import (
    get_cancel_order_use_case,
    get_create_order_use_case,
    get_list_customer_orders_use_case,
    get_list_orders_use_case,
    get_mark_delivered_use_case,
    get_mark_order_paid_use_case,
    get_order_detail_use_case,
    get_refund_order_use_case,
    get_ship_order_use_case,
)
from app.interfaces.orders.schemas import (
    CancelOrderRequest,
    CreateOrderRequest,
    MarkPaidRequest,
    OrderDetailResponse,
    OrderPageResponse,
    RefundOrderRequest,
    ShipOrderRequest,
)
from app.interfaces.schemas import ErrorResponse

router = APIRouter(prefix="/orders", tags=["orders"])

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=OrderDetailResponse,
    status_code=201,
    responses=_ERRORS,
    summary="Place an order",
    description="Create a PENDING order with one creator, within the creator's sales allowance.",
)
def create_order(
    request: CreateOrderRequest,
    user: CurrentUser = Depends(get_current_user),
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
) -> OrderDetailResponse:
    command = CreateOrderCommand(
        creator_id=request.creator_id,
        customer_id=user.id,
        customer_name=request.customer_name,
        customer_email=request.customer_email,
        items=[OrderItemInput(**item.model_dump()) for item in request.items],
        shipping_address=ShippingAddressInput(**request.shipping_address.model_dump()),
        shipping_mode=request.shipping_mode,
        relay_point_id=request.relay_point_id,
        relay_point_name=request.relay_point_name,
        shipping_cost=request.shipping_cost,
    )
    return OrderDetailResponse.model_validate(unwrap(use_case.execute(command)))


@router.get(
    "",
    response_model=OrderPageResponse,
    responses=_ERRORS,
    summary="List my sales",
)
def list_orders(
    status: Optional[str] = Query(None, description="Order status filter"),
    search: Optional[str] = Query(None, description="Order number, customer name or email"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    user: CurrentUser = Depends(require_creator),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
) -> OrderPageResponse:
    query = ListOrdersQuery(
        creator_id=user.id, status=status, search=search, page=page, limit=limit
    )
    return OrderPageResponse.model_validate(unwrap(use_case.execute(query)))


@router.get(
    "/mine",
    response_model=OrderPageResponse,
    responses=_ERRORS,
    summary="List my purchases",
)
def list_my_orders(
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    user: CurrentUser = Depends(get_current_user),
    use_case: ListCustomerOrdersUseCase = Depends(get_list_customer_orders_use_case),
) -> OrderPageResponse:
    query = ListCustomerOrdersQuery(customer_id=user.id, page=page, limit=limit)
    return OrderPageResponse.model_validate(unwrap(use_case.execute(query)))


@router.get(
    "/{order_id}",
    response_model=OrderDetailResponse,
    responses=_ERRORS,
    summary="Get an order",
    description="Visible to the order's creator and to its customer.",
)
def get_order(
    order_id: str,
    user: CurrentUser = Depends(get_current_user),
    use_case: GetOrderDetailUseCase = Depends(get_order_detail_use_case),
) -> OrderDetailResponse:
    query = GetOrderDetailQuery(order_id=order_id, creator_id=user.id, customer_id=user.id)
    return OrderDetailResponse.model_validate(unwrap(use_case.execute(query)))


@router.post(
    "/{order_id}/pay",
    response_model=OrderDetailResponse,
    responses={**_ERRORS, 403: {"model": ErrorResponse}},
    summary="Record a payment (admin)",
)
def mark_order_paid(
    order_id: str,
    request: MarkPaidRequest,
    _admin: CurrentUser = Depends(require_admin),
    use_case: MarkOrderPaidUseCase = Depends(get_mark_order_paid_use_case),
) -> OrderDetailResponse:
    command = MarkOrderPaidCommand(
        order_id=order_id, payment_intent_id=request.payment_intent_id
    )
    return OrderDetailResponse.model_validate(unwrap(use_case.execute(command)))


@router.post(
    "/{order_id}/ship",
    response_model=OrderDetailResponse,
    responses=_ERRORS,
    summary="Ship an order",
)
def ship_order(
    order_id: str,
    request: ShipOrderRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: ShipOrderUseCase = Depends(get_ship_order_use_case),
) -> OrderDetailResponse:
    command = ShipOrderCommand(
        order_id=order_id,
        creator_id=user.id,
        tracking_number=request.tracking_number,
        carrier=request.carrier,
    )
    return OrderDetailResponse.model_validate(unwrap(use_case.execute(command)))


@router.post(
    "/{order_id}/deliver",
    response_model=OrderDetailResponse,
    responses=_ERRORS,
    summary="Mark an order as delivered",
)
def mark_delivered(
    order_id: str,
    user: CurrentUser = Depends(require_creator),
    use_case: MarkDeliveredUseCase = Depends(get_mark_delivered_use_case),
) -> OrderDetailResponse:
    command = MarkDeliveredCommand(order_id=order_id, creator_id=user.id)
    return OrderDetailResponse.model_validate(unwrap(use_case.execute(command)))


@router.post(
    "/{order_id}/cancel",
    response_model=OrderDetailResponse,
    responses=_ERRORS,
    summary="Cancel an order",
)
def cancel_order(
    order_id: str,
    request: CancelOrderRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: CancelOrderUseCase = Depends(get_cancel_order_use_case),
) -> OrderDetailResponse:
    command = CancelOrderCommand(order_id=order_id, creator_id=user.id, reason=request.reason)
    return OrderDetailResponse.model_validate(unwrap(use_case.execute(command)))


@router.post(
    "/{order_id}/refund",
    response_model=OrderDetailResponse,
    responses=_ERRORS,
    summary="Refund a paid order",
)
def refund_order(
    order_id: str,
    request: RefundOrderRequest,
    user: CurrentUser = Depends(require_creator),
    use_case: RefundOrderUseCase = Depends(get_refund_order_use_case),
) -> OrderDetailResponse:
    command = RefundOrderCommand(
        order_id=order_id,
        creator_id=user.id,
        refund_id=request.refund_id,
        reason=request.reason,
    )
    return OrderDetailResponse.model_validate(unwrap(use_case.execute(command)))
