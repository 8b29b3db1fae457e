"""Repository for catalogue products."""

import re
from typing import List, Optional

from pymongo.database import Database

from storefront_common.models.product import Product
from storefront_common.repositories.base import BaseRepository, CollectionName


class ProductRepository(BaseRepository[Product]):
    def __init__(self, db: Database):
        super().__init__(db, CollectionName.PRODUCTS, Product)

    def search(self, keyword: Optional[str] = None) -> List[Product]:
        query = {}
        if keyword:
            query["name"] = {"$regex": re.escape(keyword), "$options": "i"}
        return self.find_many(query, sort=[("created_at", -1)])


__all__ = ["ProductRepository"]
