from catalog_api.db.models.category import Category
from catalog_api.db.models.product import Product

__all__ = ["Category", "Product"]
