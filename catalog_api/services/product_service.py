# catalog_api/services/product_service.py
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from catalog_api.core.config import settings
from catalog_api.core.exceptions import InvalidOperationError, NotFoundError
from catalog_api.core.logging import get_logger
from catalog_api.db.models.product import Product
from catalog_api.db.repositories.category_repository import CategoryRepository
from catalog_api.db.repositories.product_repository import ProductRepository
from catalog_api.db.unit_of_work import UnitOfWork
from catalog_api.schemas.product import ProductCreate, ProductInDB, ProductUpdate
from catalog_api.services.merge import apply_changes

logger = get_logger(__name__)

NULLABLE_FIELDS = {"category_id", "min_stock_level", "image_url"}


class ProductService:
    """Service for product-related business logic"""

    def __init__(self, db_session):
        self.product_repo = ProductRepository(db_session)
        self.category_repo = CategoryRepository(db_session)
        self.unit_of_work = UnitOfWork(db_session)

    async def get_product(self, product_id: UUID) -> Optional[ProductInDB]:
        """Get product by ID"""
        product = await self.product_repo.get_by_id(product_id)
        if not product:
            return None
        return ProductInDB.model_validate(product)

    async def list_products(self) -> List[ProductInDB]:
        products = await self.product_repo.get_all()
        return [ProductInDB.model_validate(product) for product in products]

    async def list_active_products(self) -> List[ProductInDB]:
        products = await self.product_repo.get_active()
        return [ProductInDB.model_validate(product) for product in products]

    async def list_by_category(self, category_id: UUID) -> List[ProductInDB]:
        products = await self.product_repo.get_by_category_id(category_id)
        return [ProductInDB.model_validate(product) for product in products]

    async def list_low_stock(self, threshold: Optional[int] = None) -> List[ProductInDB]:
        """Active products with stock at or below threshold (default 10)"""
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        products = await self.product_repo.get_low_stock(threshold)
        return [ProductInDB.model_validate(product) for product in products]

    async def search_products(self, term: str) -> List[ProductInDB]:
        """Case-insensitive search on name and description"""
        products = await self.product_repo.search(term.strip())
        return [ProductInDB.model_validate(product) for product in products]

    async def list_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[ProductInDB]:
        if min_price > max_price:
            raise InvalidOperationError("Minimum price cannot exceed maximum price.")
        products = await self.product_repo.get_by_price_range(min_price, max_price)
        return [ProductInDB.model_validate(product) for product in products]

    async def product_exists(self, product_id: UUID) -> bool:
        return await self.product_repo.exists(product_id)

    async def count_products(self) -> int:
        return await self.product_repo.count()

    async def create_product(self, product_data: ProductCreate) -> ProductInDB:
        """Create a new product"""
        async with self.unit_of_work:
            if product_data.category_id is not None:
                await self._require_category(product_data.category_id)

            product = Product(**product_data.model_dump())
            await self.product_repo.add(product)
            await self.unit_of_work.save_changes()

        logger.info(f"Created product '{product.name}' with ID {product.id}")
        return ProductInDB.model_validate(product)

    async def update_product(
        self, product_id: UUID, product_data: ProductUpdate
    ) -> Optional[ProductInDB]:
        """Update only the supplied fields. Returns None if the product does not exist."""
        async with self.unit_of_work:
            product = await self.product_repo.get_by_id(product_id)
            if not product:
                return None

            changes = product_data.model_dump(exclude_unset=True)
            if changes.get("category_id") is not None:
                await self._require_category(changes["category_id"])

            applied = apply_changes(product, changes, nullable=NULLABLE_FIELDS)
            await self.product_repo.update(product)
            await self.unit_of_work.save_changes()

        logger.info(f"Updated product {product_id}: {sorted(applied)}")
        return ProductInDB.model_validate(product)

    async def delete_product(self, product_id: UUID) -> bool:
        """Soft-delete a product. Returns False if it does not exist."""
        async with self.unit_of_work:
            product = await self.product_repo.get_by_id(product_id)
            if not product:
                return False

            await self.product_repo.delete(product)
            await self.unit_of_work.save_changes()

        logger.info(f"Deleted product {product_id}")
        return True

    async def _require_category(self, category_id: UUID) -> None:
        if await self.category_repo.get_by_id(category_id) is None:
            raise NotFoundError(f"Category {category_id} not found.")
