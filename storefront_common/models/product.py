"""Product entity - a catalogue item managed by admins"""

from typing import Optional

from pydantic import Field

from .base import BaseEntity, PyObjectId


class Product(BaseEntity):
    user: Optional[PyObjectId] = None
    name: str = Field(..., min_length=1)
    image: str = ""
    brand: str = ""
    category: str = ""
    description: str = ""
    price: float = Field(0.0, ge=0)
    count_in_stock: int = Field(0, ge=0)
    rating: float = 0.0
    num_reviews: int = 0
