"""Repository for customer orders."""

from typing import List, Union

from bson import ObjectId
from pymongo.database import Database

from storefront_common.models.order import Order
from storefront_common.repositories.base import BaseRepository, CollectionName


class OrderRepository(BaseRepository[Order]):
    def __init__(self, db: Database):
        super().__init__(db, CollectionName.ORDERS, Order)
        self.collection.create_index("user")

    def find_by_user(self, user_id: Union[str, ObjectId]) -> List[Order]:
        identifier = self._to_object_id(user_id)
        if identifier is None:
            return []
        return self.find_many({"user": identifier}, sort=[("created_at", -1)])

    def list_all(self) -> List[Order]:
        return self.find_many({}, sort=[("created_at", -1)])


__all__ = ["OrderRepository"]
