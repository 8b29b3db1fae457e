import unittest

from bson import ObjectId
from pydantic import ValidationError

from storefront_common.models import Order, OrderItem, ShippingAddress


class TestOrderModel(unittest.TestCase):
    def setUp(self):
        self.product_id = ObjectId()
        self.user_id = ObjectId()

    def _order(self, **overrides):
        values = {
            "user": str(self.user_id),
            "order_items": [
                {"name": "Phone", "qty": 2, "price": 10.0, "product": str(self.product_id)}
            ],
            "shipping_address": {
                "address": "1 Main St",
                "city": "Springfield",
                "postal_code": "12345",
                "country": "US",
            },
            "payment_method": "PayPal",
        }
        values.update(overrides)
        return Order(**values)

    def test_embedded_item_keeps_object_id(self):
        order = self._order()
        item = order.order_items[0]
        self.assertIsInstance(item, OrderItem)
        self.assertEqual(item.product, self.product_id)
        self.assertEqual(order.user, self.user_id)
        self.assertIsInstance(order.shipping_address, ShippingAddress)

    def test_python_dump_is_mongo_ready_and_json_dump_is_text(self):
        order = self._order()
        stored = order.model_dump(by_alias=True, exclude_none=True)
        self.assertIsInstance(stored["order_items"][0]["product"], ObjectId)
        self.assertNotIn("_id", stored)

        as_json = order.model_dump(mode="json")
        self.assertEqual(as_json["order_items"][0]["product"], str(self.product_id))
        self.assertEqual(as_json["user"], str(self.user_id))

    def test_item_rejects_bad_product_id(self):
        with self.assertRaises(ValidationError):
            OrderItem(name="Phone", qty=1, price=1.0, product="not-an-id")

    def test_item_requires_positive_quantity(self):
        with self.assertRaises(ValidationError):
            OrderItem(name="Phone", qty=0, price=1.0, product=self.product_id)

    def test_loads_from_stored_document(self):
        doc = self._order().model_dump(by_alias=True)
        doc["_id"] = ObjectId()
        loaded = Order.model_validate(doc)
        self.assertEqual(loaded.id, doc["_id"])
        self.assertEqual(loaded.order_items[0].product, self.product_id)
