# catalog_api/db/repositories/category_repository.py
from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.db.models.category import Category


class CategoryRepository:
    """Repository for Category rows; every read is scoped to non-deleted rows"""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    def _live(self):
        return select(Category).where(Category.is_deleted.is_(False))

    def _ordered(self, query):
        return query.order_by(Category.display_order, Category.name)

    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        """Get category by ID"""
        result = await self.db_session.execute(
            self._live().where(Category.id == category_id)
        )
        return result.scalars().first()

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        """Get category by slug"""
        result = await self.db_session.execute(
            self._live().where(Category.slug == slug)
        )
        return result.scalars().first()

    async def get_all(self, active_only: bool = False) -> List[Category]:
        """List categories ordered by display order, then name"""
        query = self._live()
        if active_only:
            query = query.where(Category.is_active.is_(True))
        result = await self.db_session.execute(self._ordered(query))
        return list(result.scalars().all())

    async def get_root(self) -> List[Category]:
        """Get root categories (no parent)"""
        result = await self.db_session.execute(
            self._ordered(self._live().where(Category.parent_id.is_(None)))
        )
        return list(result.scalars().all())

    async def get_by_parent_id(self, parent_id: UUID) -> List[Category]:
        """Get direct children of a category"""
        result = await self.db_session.execute(
            self._ordered(self._live().where(Category.parent_id == parent_id))
        )
        return list(result.scalars().all())

    async def has_children(self, category_id: UUID) -> bool:
        """Whether any live category has this category as its parent"""
        query = select(
            exists().where(
                Category.parent_id == category_id, Category.is_deleted.is_(False)
            )
        )
        return bool(await self.db_session.scalar(query))

    async def slug_exists(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        """Check whether a live category already uses this slug"""
        conditions = [Category.slug == slug, Category.is_deleted.is_(False)]
        if exclude_id is not None:
            conditions.append(Category.id != exclude_id)
        return bool(await self.db_session.scalar(select(exists().where(*conditions))))

    async def add(self, category: Category) -> Category:
        """Stage a new category; committed by the unit of work"""
        self.db_session.add(category)
        await self.db_session.flush()
        return category

    async def update(self, category: Category) -> Category:
        """Stage changes made to a loaded category"""
        self.db_session.add(category)
        await self.db_session.flush()
        return category

    async def delete(self, category: Category) -> None:
        """Soft-delete a category"""
        category.is_deleted = True
        await self.db_session.flush()
