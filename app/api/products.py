from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_context, require_admin
from app.context import AppContext
from app.dtos import ProductCreateRequest, ProductResponse, ProductUpdateRequest
from app.services.product_service import ProductService
from storefront_common.models import User

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=List[ProductResponse],
    response_model_by_alias=False,
)
def list_products(
    keyword: Optional[str] = Query(None, description="Case-insensitive name filter"),
    ctx: AppContext = Depends(get_context),
):
    return ProductService(ctx).list_products(keyword)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    response_model_by_alias=False,
)
def get_product(product_id: str, ctx: AppContext = Depends(get_context)):
    return ProductService(ctx).get_product(product_id)


@router.post(
    "",
    response_model=ProductResponse,
    response_model_by_alias=False,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreateRequest,
    admin: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return ProductService(ctx).create_product(payload, admin)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    response_model_by_alias=False,
)
def update_product(
    product_id: str,
    payload: ProductUpdateRequest,
    _: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return ProductService(ctx).update_product(product_id, payload)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    _: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    ProductService(ctx).delete_product(product_id)
