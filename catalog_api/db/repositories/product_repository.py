# catalog_api/db/repositories/product_repository.py
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.db.models.product import Product


class ProductRepository:
    """Repository for Product rows; every read is scoped to non-deleted rows"""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    def _live(self):
        return select(Product).where(Product.is_deleted.is_(False))

    async def _all(self, query) -> List[Product]:
        result = await self.db_session.execute(query.order_by(Product.name))
        return list(result.scalars().all())

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        """Get product by ID"""
        result = await self.db_session.execute(
            self._live().where(Product.id == product_id)
        )
        return result.scalars().first()

    async def get_all(self) -> List[Product]:
        """List all live products"""
        return await self._all(self._live())

    async def get_active(self) -> List[Product]:
        """List products flagged active"""
        return await self._all(self._live().where(Product.is_active.is_(True)))

    async def get_by_category_id(self, category_id: UUID) -> List[Product]:
        """List products referencing a category"""
        return await self._all(self._live().where(Product.category_id == category_id))

    async def get_low_stock(self, threshold: int) -> List[Product]:
        """Active products whose stock is at or below the threshold"""
        return await self._all(
            self._live().where(
                Product.stock_quantity <= threshold, Product.is_active.is_(True)
            )
        )

    async def search(self, term: str) -> List[Product]:
        """Search products by name or description"""
        # % and _ in the term match literally
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        return await self._all(
            self._live().where(
                or_(
                    Product.name.ilike(pattern, escape="\\"),
                    Product.description.ilike(pattern, escape="\\"),
                )
            )
        )

    async def get_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[Product]:
        """Products priced within [min_price, max_price]"""
        return await self._all(
            self._live().where(Product.price >= min_price, Product.price <= max_price)
        )

    async def has_products_in_category(self, category_id: UUID) -> bool:
        """Whether any live product references the category"""
        query = select(
            exists().where(
                Product.category_id == category_id, Product.is_deleted.is_(False)
            )
        )
        return bool(await self.db_session.scalar(query))

    async def exists(self, product_id: UUID) -> bool:
        query = select(
            exists().where(Product.id == product_id, Product.is_deleted.is_(False))
        )
        return bool(await self.db_session.scalar(query))

    async def count(self) -> int:
        query = select(func.count(Product.id)).where(Product.is_deleted.is_(False))
        return int(await self.db_session.scalar(query) or 0)

    async def add(self, product: Product) -> Product:
        """Stage a new product; committed by the unit of work"""
        self.db_session.add(product)
        await self.db_session.flush()
        return product

    async def update(self, product: Product) -> Product:
        self.db_session.add(product)
        await self.db_session.flush()
        return product

    async def delete(self, product: Product) -> None:
        """Soft-delete a product"""
        product.is_deleted = True
        await self.db_session.flush()
