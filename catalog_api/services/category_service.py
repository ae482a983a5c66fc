# catalog_api/services/category_service.py
from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from catalog_api.core.exceptions import (
    CycleDetectedError,
    InvalidOperationError,
    NotFoundError,
)
from catalog_api.core.logging import get_logger
from catalog_api.db.models.category import Category
from catalog_api.db.repositories.category_repository import CategoryRepository
from catalog_api.db.repositories.product_repository import ProductRepository
from catalog_api.db.unit_of_work import UnitOfWork
from catalog_api.schemas.category import (
    CategoryCreate,
    CategoryInDB,
    CategoryTree,
    CategoryUpdate,
)
from catalog_api.schemas.product import ProductInDB
from catalog_api.services.hierarchy import CycleDetector
from catalog_api.services.merge import apply_changes
from catalog_api.services.slugs import SlugGenerator

logger = get_logger(__name__)

# Fields a client may clear by sending an explicit null
NULLABLE_FIELDS = {"description", "parent_id", "meta_data"}


class CategoryService:
    """Service for the category tree: slugs, reparenting and safe deletion"""

    def __init__(self, db_session):
        self.category_repo = CategoryRepository(db_session)
        self.product_repo = ProductRepository(db_session)
        self.unit_of_work = UnitOfWork(db_session)
        self.slugs = SlugGenerator(self.category_repo)
        self.cycles = CycleDetector(self.category_repo)

    async def get_category(self, category_id: UUID) -> Optional[CategoryInDB]:
        """Get category by ID"""
        category = await self.category_repo.get_by_id(category_id)
        if not category:
            return None
        return CategoryInDB.model_validate(category)

    async def get_by_slug(self, slug: str) -> Optional[CategoryInDB]:
        """Get category by slug"""
        category = await self.category_repo.get_by_slug(slug)
        if not category:
            return None
        return CategoryInDB.model_validate(category)

    async def list_categories(self, active_only: bool = False) -> List[CategoryInDB]:
        """List live categories ordered by display order, then name"""
        categories = await self.category_repo.get_all(active_only=active_only)
        return [CategoryInDB.model_validate(category) for category in categories]

    async def get_root_categories(self) -> List[CategoryInDB]:
        categories = await self.category_repo.get_root()
        return [CategoryInDB.model_validate(category) for category in categories]

    async def get_child_categories(self, parent_id: UUID) -> List[CategoryInDB]:
        categories = await self.category_repo.get_by_parent_id(parent_id)
        return [CategoryInDB.model_validate(category) for category in categories]

    async def get_categories_with_children(
        self, active_only: bool = False
    ) -> List[CategoryTree]:
        """
        Every live category with its subtree populated.

        Built from a single read of all live categories, indexed by parent id.
        """
        categories = await self.category_repo.get_all(active_only=active_only)
        children_by_parent: Dict[UUID, List[Category]] = defaultdict(list)
        for category in categories:
            if category.parent_id is not None:
                children_by_parent[category.parent_id].append(category)

        built: Dict[UUID, CategoryTree] = {}

        def build(category: Category, path: frozenset) -> CategoryTree:
            if category.id in built:
                return built[category.id]
            node = CategoryTree.model_validate(category)
            node.children = [
                build(child, path | {category.id})
                for child in children_by_parent.get(category.id, [])
                if child.id not in path
            ]
            built[category.id] = node
            return node

        return [build(category, frozenset()) for category in categories]

    async def get_category_products(self, category_id: UUID) -> List[ProductInDB]:
        """Live products assigned to a category"""
        products = await self.product_repo.get_by_category_id(category_id)
        return [ProductInDB.model_validate(product) for product in products]

    async def create_category(self, category_data: CategoryCreate) -> CategoryInDB:
        """Create a new category with a unique slug"""
        async with self.unit_of_work:
            category = Category(
                id=uuid4(),
                name=category_data.name,
                description=category_data.description,
                parent_id=category_data.parent_id,
                display_order=category_data.display_order,
                is_active=category_data.is_active,
                meta_data=category_data.meta_data,
            )
            category.slug = await self.slugs.unique_slug_for(
                category_data.slug or category_data.name
            )

            if category_data.parent_id is not None:
                await self._validate_parent(category.id, category_data.parent_id)

            await self.category_repo.add(category)
            await self.unit_of_work.save_changes()

        logger.info(f"Created category '{category.name}' ({category.slug}) with ID {category.id}")
        return CategoryInDB.model_validate(category)

    async def update_category(
        self, category_id: UUID, category_data: CategoryUpdate
    ) -> Optional[CategoryInDB]:
        """
        Apply a partial update. Returns None if the category does not exist.

        Renaming (case-insensitively different name) regenerates the slug
        unless the update carries an explicit slug.
        """
        async with self.unit_of_work:
            category = await self.category_repo.get_by_id(category_id)
            if not category:
                return None

            changes = category_data.model_dump(exclude_unset=True)
            requested_slug = changes.pop("slug", None)

            new_parent_id = changes.get("parent_id")
            if new_parent_id is not None:
                if new_parent_id == category_id:
                    raise InvalidOperationError("Category cannot be its own parent.")
                await self._validate_parent(category_id, new_parent_id)

            new_slug = None
            new_name = changes.get("name")
            if requested_slug:
                new_slug = await self.slugs.unique_slug_for(requested_slug, exclude_id=category_id)
            elif new_name and new_name.lower() != category.name.lower():
                new_slug = await self.slugs.unique_slug_for(new_name, exclude_id=category_id)

            apply_changes(category, changes, nullable=NULLABLE_FIELDS)
            if new_slug is not None:
                category.slug = new_slug

            await self.category_repo.update(category)
            await self.unit_of_work.save_changes()

        logger.info(f"Updated category {category_id}: {sorted(changes)}")
        return CategoryInDB.model_validate(category)

    async def delete_category(self, category_id: UUID) -> bool:
        """
        Soft-delete a category. Returns False if it does not exist.

        Refused while live child categories or live products reference it.
        """
        async with self.unit_of_work:
            category = await self.category_repo.get_by_id(category_id)
            if not category:
                return False

            if await self.category_repo.has_children(category_id):
                logger.warning(f"Refusing to delete category {category_id}: has child categories")
                raise InvalidOperationError("Cannot delete category that has child categories.")

            if await self.product_repo.has_products_in_category(category_id):
                logger.warning(f"Refusing to delete category {category_id}: contains products")
                raise InvalidOperationError("Cannot delete category that contains products.")

            await self.category_repo.delete(category)
            await self.unit_of_work.save_changes()

        logger.info(f"Deleted category {category_id} ({category.slug})")
        return True

    async def _validate_parent(self, category_id: UUID, parent_id: UUID) -> None:
        parent = await self.category_repo.get_by_id(parent_id)
        if parent is None:
            raise NotFoundError(f"Parent category {parent_id} not found.")

        if await self.cycles.would_cycle(category_id, parent_id):
            raise CycleDetectedError("Cannot create circular reference in category hierarchy.")
