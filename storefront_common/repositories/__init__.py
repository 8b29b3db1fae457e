from .base import BaseRepository, CollectionName
from .user_repository import UserRepository, normalize_email
from .product_repository import ProductRepository
from .order_repository import OrderRepository

__all__ = [
    "BaseRepository",
    "CollectionName",
    "UserRepository",
    "normalize_email",
    "ProductRepository",
    "OrderRepository",
]
