from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from catalog_api.core.config import settings


def build_engine(database_url: str = None, **kwargs):
    """Create an async SQLAlchemy engine for the given (or configured) URL"""
    url = database_url or settings.DATABASE_URL
    options = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options["pool_size"] = settings.DB_POOL_SIZE
        options["max_overflow"] = settings.DB_MAX_OVERFLOW
    options.update(kwargs)
    return create_async_engine(url, **options)


# Create SQLAlchemy engine
engine = build_engine()

# Create session factory
SessionLocal = async_sessionmaker(
    bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
)

# Create declarative base for models
Base = declarative_base()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting DB session.
    """
    async with SessionLocal() as db:
        yield db


async def init_models(bind=None):
    """Create all tables registered on Base.metadata"""
    # Import models so they're registered with Base.metadata
    import catalog_api.db.models  # noqa: F401

    async with (bind if bind is not None else engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
