"""Product CRUD API"""
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response, status

from catalog_api.api.errors import to_http_exception
from catalog_api.core.dependencies import ProductServiceDep
from catalog_api.core.exceptions import CatalogError
from catalog_api.core.logging import get_logger
from catalog_api.schemas.product import (
    ProductCount,
    ProductCreate,
    ProductExists,
    ProductResponse,
    ProductUpdate,
)

logger = get_logger(__name__)


products_router = APIRouter(
    prefix="/products",
    responses={
        404: {"description": "Product not found"},
    },
)


@products_router.get("", response_model=List[ProductResponse], summary="List all products")
async def list_products(product_service: ProductServiceDep):
    return await product_service.list_products()


@products_router.get("/active", response_model=List[ProductResponse], summary="List active products")
async def list_active_products(product_service: ProductServiceDep):
    return await product_service.list_active_products()


@products_router.get(
    "/category/{category_id}",
    response_model=List[ProductResponse],
    summary="List products in a category",
)
async def list_products_by_category(category_id: UUID, product_service: ProductServiceDep):
    return await product_service.list_by_category(category_id)


@products_router.get("/low-stock", response_model=List[ProductResponse], summary="List low-stock products")
async def list_low_stock_products(
    product_service: ProductServiceDep,
    threshold: Optional[int] = Query(None, ge=0, description="Stock threshold (default 10)"),
):
    """Active products whose stock quantity is at or below the threshold"""
    logger.info(f"Getting products with low stock (threshold: {threshold})")
    return await product_service.list_low_stock(threshold)


@products_router.get("/search", response_model=List[ProductResponse], summary="Search products")
async def search_products(
    product_service: ProductServiceDep,
    q: str = Query(..., min_length=1, max_length=200, description="Text to find in name or description"),
):
    if not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query cannot be empty",
        )
    return await product_service.search_products(q)


@products_router.get(
    "/price-range",
    response_model=List[ProductResponse],
    summary="List products within a price range",
)
async def list_products_by_price_range(
    product_service: ProductServiceDep,
    min_price: Decimal = Query(..., alias="min", ge=0),
    max_price: Decimal = Query(..., alias="max", ge=0),
):
    try:
        return await product_service.list_by_price_range(min_price, max_price)
    except CatalogError as e:
        raise to_http_exception(e)


@products_router.get("/count", response_model=ProductCount, summary="Count products")
async def count_products(product_service: ProductServiceDep):
    return ProductCount(count=await product_service.count_products())


@products_router.get("/{product_id}", response_model=ProductResponse, summary="Get a product")
async def get_product(product_id: UUID, product_service: ProductServiceDep):
    product = await product_service.get_product(product_id)
    if not product:
        logger.warning(f"Product with ID {product_id} not found")
        raise HTTPException(status_code=404, detail=f"Product with ID {product_id} not found")
    return product


@products_router.get("/{product_id}/exists", response_model=ProductExists, summary="Check a product exists")
async def product_exists(product_id: UUID, product_service: ProductServiceDep):
    return ProductExists(id=product_id, exists=await product_service.product_exists(product_id))


@products_router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(data: ProductCreate, product_service: ProductServiceDep):
    try:
        return await product_service.create_product(data)
    except CatalogError as e:
        raise to_http_exception(e)


async def _update(product_id: UUID, data: ProductUpdate, product_service) -> ProductResponse:
    try:
        product = await product_service.update_product(product_id, data)
    except CatalogError as e:
        raise to_http_exception(e)

    if not product:
        logger.warning(f"Product with ID {product_id} not found for update")
        raise HTTPException(status_code=404, detail=f"Product with ID {product_id} not found")
    return product


@products_router.put("/{product_id}", response_model=ProductResponse, summary="Update a product")
async def update_product(product_id: UUID, data: ProductUpdate, product_service: ProductServiceDep):
    """Update the supplied fields of a product"""
    return await _update(product_id, data, product_service)


@products_router.patch("/{product_id}", response_model=ProductResponse, summary="Partially update a product")
async def patch_product(product_id: UUID, data: ProductUpdate, product_service: ProductServiceDep):
    # PUT already applies only the supplied fields
    return await _update(product_id, data, product_service)


@products_router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a product",
)
async def delete_product(product_id: UUID, product_service: ProductServiceDep):
    """Soft-delete a product"""
    deleted = await product_service.delete_product(product_id)
    if not deleted:
        logger.warning(f"Product with ID {product_id} not found for deletion")
        raise HTTPException(status_code=404, detail=f"Product with ID {product_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
