from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.db.base import SessionLocal, get_db_session
from catalog_api.services.category_service import CategoryService
from catalog_api.services.product_service import ProductService


@asynccontextmanager
async def session_scope():
    """Create a database session with proper cleanup (for CLI and scripts)"""
    async with SessionLocal() as db_session:
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise


def get_category_service(db: AsyncSession = Depends(get_db_session)) -> CategoryService:
    """Get category service bound to the request's DB session"""
    return CategoryService(db)


def get_product_service(db: AsyncSession = Depends(get_db_session)) -> ProductService:
    """Get product service bound to the request's DB session"""
    return ProductService(db)


# Type aliases for dependency injection
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
