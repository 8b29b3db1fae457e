from typing import List

from fastapi import APIRouter, Depends, status

from app.api.deps import get_context, get_current_user, require_admin
from app.context import AppContext
from app.dtos import OrderCreateRequest, OrderResponse, PaymentResultDTO
from app.services.order_service import OrderService
from storefront_common.models import User

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=OrderResponse,
    response_model_by_alias=False,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    payload: OrderCreateRequest,
    user: User = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
):
    return OrderService(ctx).create_order(payload, user)


@router.get(
    "/mine",
    response_model=List[OrderResponse],
    response_model_by_alias=False,
)
def list_my_orders(
    user: User = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
):
    return OrderService(ctx).list_mine(user)


@router.get(
    "",
    response_model=List[OrderResponse],
    response_model_by_alias=False,
)
def list_orders(
    _: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return OrderService(ctx).list_all()


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    response_model_by_alias=False,
)
def get_order(
    order_id: str,
    user: User = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
):
    return OrderService(ctx).get_order(order_id, user)


@router.put(
    "/{order_id}/pay",
    response_model=OrderResponse,
    response_model_by_alias=False,
)
def pay_order(
    order_id: str,
    payment: PaymentResultDTO,
    user: User = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
):
    return OrderService(ctx).mark_paid(order_id, payment, user)


@router.put(
    "/{order_id}/deliver",
    response_model=OrderResponse,
    response_model_by_alias=False,
)
def deliver_order(
    order_id: str,
    _: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return OrderService(ctx).mark_delivered(order_id)
