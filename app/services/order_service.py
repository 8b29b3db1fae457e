"""Order service.

Line-item prices are looked up from the product records; totals are derived
server-side and never taken from the client.
"""

import logging
from typing import List

from app.context import AppContext
from app.dtos import OrderCreateRequest, OrderResponse, PaymentResultDTO
from storefront_common.exceptions import ForbiddenError, NotFoundError, ValidationError
from storefront_common.models import (
    Order,
    OrderItem,
    PaymentResult,
    ShippingAddress,
    User,
    utcnow,
)

logger = logging.getLogger(__name__)

TAX_RATE = 0.15
FREE_SHIPPING_THRESHOLD = 100.0
FLAT_SHIPPING_PRICE = 10.0


def calculate_prices(items: List[OrderItem]) -> dict:
    items_price = round(sum(item.price * item.qty for item in items), 2)
    shipping_price = 0.0 if items_price > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_PRICE
    tax_price = round(TAX_RATE * items_price, 2)
    return {
        "items_price": items_price,
        "shipping_price": shipping_price,
        "tax_price": tax_price,
        "total_price": round(items_price + shipping_price + tax_price, 2),
    }


class OrderService:
    def __init__(self, ctx: AppContext):
        self.orders = ctx.orders
        self.products = ctx.products

    def create_order(self, payload: OrderCreateRequest, user: User) -> OrderResponse:
        if not payload.order_items:
            raise ValidationError("No order items")

        items: List[OrderItem] = []
        for requested in payload.order_items:
            product = self.products.find_by_id(requested.product)
            if product is None:
                raise NotFoundError(f"Product {requested.product} not found")
            items.append(
                OrderItem(
                    name=product.name,
                    qty=requested.qty,
                    image=product.image,
                    price=product.price,
                    product=product.id,
                )
            )

        order = Order(
            user=user.id,
            order_items=items,
            shipping_address=ShippingAddress(**payload.shipping_address.model_dump()),
            payment_method=payload.payment_method,
            **calculate_prices(items),
        )
        order.updated_at = order.created_at
        created = self.orders.insert_one(order)
        logger.info(
            "Created order",
            extra={"order_id": str(created.id), "user_id": str(user.id)},
        )
        return OrderResponse.from_entity(created)

    def list_mine(self, user: User) -> List[OrderResponse]:
        return [OrderResponse.from_entity(o) for o in self.orders.find_by_user(user.id)]

    def list_all(self) -> List[OrderResponse]:
        return [OrderResponse.from_entity(o) for o in self.orders.list_all()]

    def get_order(self, order_id: str, user: User) -> OrderResponse:
        return OrderResponse.from_entity(self._get_visible(order_id, user))

    def mark_paid(
        self, order_id: str, payment: PaymentResultDTO, user: User
    ) -> OrderResponse:
        self._get_visible(order_id, user)
        now = utcnow()
        order = self.orders.update(
            order_id,
            {
                "is_paid": True,
                "paid_at": now,
                "payment_result": PaymentResult(**payment.model_dump()).model_dump(),
                "updated_at": now,
            },
        )
        if order is None:
            raise NotFoundError("Order not found")
        return OrderResponse.from_entity(order)

    def mark_delivered(self, order_id: str) -> OrderResponse:
        now = utcnow()
        order = self.orders.update(
            order_id, {"is_delivered": True, "delivered_at": now, "updated_at": now}
        )
        if order is None:
            raise NotFoundError("Order not found")
        return OrderResponse.from_entity(order)

    def _get_visible(self, order_id: str, user: User) -> Order:
        order = self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        if order.user != user.id and not user.is_admin:
            raise ForbiddenError("Not authorized to view this order")
        return order
