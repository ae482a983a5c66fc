from .routes.categories import categories_router
from .routes.products import products_router
from .routes.health import health_router

# Versioned CRUD routers, mounted under settings.API_PREFIX
api_routers = [
    ("categories", categories_router),
    ("products", products_router),
]

__all__ = ["api_routers", "health_router"]
