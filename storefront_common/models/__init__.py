"""Database entity models - represents the actual structure stored in MongoDB"""

from .base import BaseEntity, MongoModel, PyObjectId, PyObjectIdStr, utcnow
from .user import User
from .product import Product
from .order import Order, OrderItem, PaymentResult, ShippingAddress

__all__ = [
    "BaseEntity",
    "MongoModel",
    "PyObjectId",
    "PyObjectIdStr",
    "utcnow",
    "User",
    "Product",
    "Order",
    "OrderItem",
    "PaymentResult",
    "ShippingAddress",
]
