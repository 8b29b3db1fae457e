"""Product DTOs"""

from typing import Optional

from pydantic import BaseModel, Field

from storefront_common.models.base import PyObjectIdStr

from .base import BaseResponse


class ProductResponse(BaseResponse):
    user: Optional[PyObjectIdStr] = None
    name: str
    image: str = ""
    brand: str = ""
    category: str = ""
    description: str = ""
    price: float
    count_in_stock: int
    rating: float = 0.0
    num_reviews: int = 0


class ProductCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    image: str = ""
    brand: str = ""
    category: str = ""
    description: str = ""
    price: float = Field(0.0, ge=0)
    count_in_stock: int = Field(0, ge=0)


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    count_in_stock: Optional[int] = Field(None, ge=0)
