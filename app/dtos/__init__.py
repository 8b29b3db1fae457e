"""Data Transfer Objects (DTOs) for API requests and responses"""

from .base import BaseResponse
from .health import HealthResponse
from .order import (
    OrderCreateRequest,
    OrderItemRequest,
    OrderItemResponse,
    OrderResponse,
    PaymentResultDTO,
    ShippingAddressDTO,
)
from .product import ProductCreateRequest, ProductResponse, ProductUpdateRequest
from .user import (
    AdminUserUpdateRequest,
    ProfileUpdateRequest,
    UserAuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)

__all__ = [
    # Base
    "BaseResponse",
    "HealthResponse",
    # Order
    "OrderCreateRequest",
    "OrderItemRequest",
    "OrderItemResponse",
    "OrderResponse",
    "PaymentResultDTO",
    "ShippingAddressDTO",
    # Product
    "ProductCreateRequest",
    "ProductResponse",
    "ProductUpdateRequest",
    # User
    "AdminUserUpdateRequest",
    "ProfileUpdateRequest",
    "UserAuthResponse",
    "UserLoginRequest",
    "UserRegisterRequest",
    "UserResponse",
]
