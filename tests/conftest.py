# tests/conftest.py
import os
from decimal import Decimal
from pathlib import Path

import httpx
import pytest
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Load test environment variables before the app reads its settings
load_dotenv(Path(__file__).parent.parent / ".env.test", override=True)

from catalog_api.api.web_app import app
from catalog_api.db.base import get_db_session, init_models
from catalog_api.schemas.category import CategoryCreate
from catalog_api.schemas.product import ProductCreate
from catalog_api.services.category_service import CategoryService
from catalog_api.services.product_service import ProductService

# Each test gets its own in-memory database
TEST_DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

if ":memory:" not in TEST_DATABASE_URL:
    raise RuntimeError(f"Tests must run against an in-memory database! Value: {TEST_DATABASE_URL}")


@pytest.fixture(scope="function")
async def db_engine():
    """Create a test database engine with the schema in place."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
def category_service(db_session):
    """Create a category service for testing."""
    return CategoryService(db_session)


@pytest.fixture(scope="function")
def product_service(db_session):
    """Create a product service for testing."""
    return ProductService(db_session)


@pytest.fixture(scope="function")
async def client(session_factory):
    """HTTP client for the app with the database dependency overridden."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    # Clear the override after the test
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def category_tree(category_service):
    """
    Sample tree:

        Electronics
        ├── Computers
        │   └── Laptops
        └── Peripherals
        Furniture
    """
    electronics = await category_service.create_category(
        CategoryCreate(name="Electronics", description="Electronic devices", display_order=1)
    )
    computers = await category_service.create_category(
        CategoryCreate(name="Computers", parent_id=electronics.id, display_order=1)
    )
    laptops = await category_service.create_category(
        CategoryCreate(name="Laptops", parent_id=computers.id)
    )
    peripherals = await category_service.create_category(
        CategoryCreate(name="Peripherals", parent_id=electronics.id, display_order=2)
    )
    furniture = await category_service.create_category(
        CategoryCreate(name="Furniture", display_order=2)
    )
    return {
        "electronics": electronics,
        "computers": computers,
        "laptops": laptops,
        "peripherals": peripherals,
        "furniture": furniture,
    }


@pytest.fixture(scope="function")
def product_data():
    """Factory for valid product payloads."""

    def make(**overrides):
        data = {
            "name": "Wireless Mouse",
            "description": "Ergonomic 2.4GHz wireless mouse",
            "price": Decimal("29.99"),
            "stock_quantity": 25,
        }
        data.update(overrides)
        return ProductCreate(**data)

    return make
