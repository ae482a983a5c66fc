"""Category tree API"""
from typing import List, Union
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from catalog_api.api.errors import conflict_on_integrity_error, to_http_exception
from catalog_api.core.dependencies import CategoryServiceDep
from catalog_api.core.exceptions import CatalogError
from catalog_api.core.logging import get_logger
from catalog_api.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryTree,
    CategoryUpdate,
)
from catalog_api.schemas.product import ProductResponse

logger = get_logger(__name__)


categories_router = APIRouter(
    prefix="/categories",
    responses={
        404: {"description": "Category not found"},
        409: {"description": "Business rule violation"},
    },
)


@categories_router.get(
    "",
    response_model=None,
    summary="List categories",
)
async def list_categories(
    category_service: CategoryServiceDep,
    include_children: bool = Query(False, description="Populate each category's subtree"),
    active_only: bool = Query(True, description="Only return active categories"),
) -> Union[List[CategoryTree], List[CategoryResponse]]:
    """
    List live categories ordered by display order, then name.

    - **include_children**: nest child categories recursively
    - **active_only**: skip categories whose active flag is off
    """
    if include_children:
        return await category_service.get_categories_with_children(active_only=active_only)
    return await category_service.list_categories(active_only=active_only)


@categories_router.get("/root", response_model=List[CategoryResponse], summary="List root categories")
async def get_root_categories(category_service: CategoryServiceDep):
    return await category_service.get_root_categories()


@categories_router.get("/slug/{slug}", response_model=CategoryResponse, summary="Get a category by slug")
async def get_category_by_slug(slug: str, category_service: CategoryServiceDep):
    category = await category_service.get_by_slug(slug)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@categories_router.get("/{category_id}", response_model=CategoryResponse, summary="Get a category")
async def get_category(category_id: UUID, category_service: CategoryServiceDep):
    category = await category_service.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@categories_router.get(
    "/{category_id}/children",
    response_model=List[CategoryResponse],
    summary="List direct child categories",
)
async def get_child_categories(category_id: UUID, category_service: CategoryServiceDep):
    return await category_service.get_child_categories(category_id)


@categories_router.get(
    "/{category_id}/products",
    response_model=List[ProductResponse],
    summary="List products in a category",
)
async def get_category_products(category_id: UUID, category_service: CategoryServiceDep):
    return await category_service.get_category_products(category_id)


@categories_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(data: CategoryCreate, category_service: CategoryServiceDep):
    """
    Create a category. The slug is generated from the name (or the supplied
    slug) and suffixed with -1, -2, ... when already taken.
    """
    try:
        return await category_service.create_category(data)
    except CatalogError as e:
        raise to_http_exception(e)
    except IntegrityError:
        logger.warning(f"Slug conflict while creating category '{data.name}'")
        raise conflict_on_integrity_error()


@categories_router.put("/{category_id}", response_model=CategoryResponse, summary="Update a category")
async def update_category(
    category_id: UUID, data: CategoryUpdate, category_service: CategoryServiceDep
):
    """
    Update the supplied fields of a category. Sending `parent_id: null`
    moves the category to the root.
    """
    try:
        category = await category_service.update_category(category_id, data)
    except CatalogError as e:
        raise to_http_exception(e)
    except IntegrityError:
        logger.warning(f"Slug conflict while updating category {category_id}")
        raise conflict_on_integrity_error()

    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@categories_router.delete("/{category_id}", summary="Delete a category")
async def delete_category(category_id: UUID, category_service: CategoryServiceDep):
    """Soft-delete a category that has no child categories and no products"""
    try:
        deleted = await category_service.delete_category(category_id)
    except CatalogError as e:
        raise to_http_exception(e)

    if not deleted:
        raise HTTPException(status_code=404, detail="Category not found")
    return {"message": "Category deleted successfully"}
