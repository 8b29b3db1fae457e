"""Order entity - a user's checkout with line items and fulfilment state"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .base import BaseEntity, MongoModel, PyObjectId


class OrderItem(MongoModel):
    name: str
    qty: int = Field(..., ge=1)
    image: str = ""
    price: float = Field(..., ge=0)
    product: PyObjectId


class ShippingAddress(BaseModel):
    address: str
    city: str
    postal_code: str
    country: str


class PaymentResult(BaseModel):
    id: str
    status: str
    update_time: Optional[str] = None
    email_address: Optional[str] = None


class Order(BaseEntity):
    user: PyObjectId
    order_items: List[OrderItem]
    shipping_address: ShippingAddress
    payment_method: str
    payment_result: Optional[PaymentResult] = None
    items_price: float = 0.0
    tax_price: float = 0.0
    shipping_price: float = 0.0
    total_price: float = 0.0
    is_paid: bool = False
    paid_at: Optional[datetime] = None
    is_delivered: bool = False
    delivered_at: Optional[datetime] = None
