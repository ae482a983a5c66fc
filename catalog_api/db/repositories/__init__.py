from catalog_api.db.repositories.category_repository import CategoryRepository
from catalog_api.db.repositories.product_repository import ProductRepository

__all__ = [
    "CategoryRepository",
    "ProductRepository",
]
