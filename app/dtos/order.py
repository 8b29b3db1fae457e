"""Order DTOs"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront_common.models.base import PyObjectIdStr

from .base import BaseResponse


class ShippingAddressDTO(BaseModel):
    address: str
    city: str
    postal_code: str
    country: str


class PaymentResultDTO(BaseModel):
    id: str
    status: str
    update_time: Optional[str] = None
    email_address: Optional[str] = None


class OrderItemRequest(BaseModel):
    product: PyObjectIdStr
    qty: int = Field(..., ge=1)


class OrderItemResponse(BaseModel):
    name: str
    qty: int
    image: str = ""
    price: float
    product: PyObjectIdStr


class OrderCreateRequest(BaseModel):
    order_items: List[OrderItemRequest]
    shipping_address: ShippingAddressDTO
    payment_method: str = Field(..., min_length=1)


class OrderResponse(BaseResponse):
    user: PyObjectIdStr
    order_items: List[OrderItemResponse]
    shipping_address: ShippingAddressDTO
    payment_method: str
    payment_result: Optional[PaymentResultDTO] = None
    items_price: float
    tax_price: float
    shipping_price: float
    total_price: float
    is_paid: bool
    paid_at: Optional[datetime] = None
    is_delivered: bool
    delivered_at: Optional[datetime] = None
