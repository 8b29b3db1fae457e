"""Product catalogue service"""

from typing import List, Optional

from app.context import AppContext
from app.dtos import ProductCreateRequest, ProductResponse, ProductUpdateRequest
from storefront_common.exceptions import NotFoundError
from storefront_common.models import Product, User, utcnow


class ProductService:
    def __init__(self, ctx: AppContext):
        self.products = ctx.products

    def list_products(self, keyword: Optional[str] = None) -> List[ProductResponse]:
        return [ProductResponse.from_entity(p) for p in self.products.search(keyword)]

    def get_product(self, product_id: str) -> ProductResponse:
        return ProductResponse.from_entity(self._get(product_id))

    def create_product(self, payload: ProductCreateRequest, user: User) -> ProductResponse:
        product = Product(user=user.id, **payload.model_dump())
        product.updated_at = product.created_at
        return ProductResponse.from_entity(self.products.insert_one(product))

    def update_product(self, product_id: str, payload: ProductUpdateRequest) -> ProductResponse:
        self._get(product_id)
        changes = payload.model_dump(exclude_none=True)
        changes["updated_at"] = utcnow()
        product = self.products.update(product_id, changes)
        if product is None:
            raise NotFoundError("Product not found")
        return ProductResponse.from_entity(product)

    def delete_product(self, product_id: str) -> None:
        if not self.products.delete(product_id):
            raise NotFoundError("Product not found")

    def _get(self, product_id: str) -> Product:
        product = self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product
