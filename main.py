import asyncio

import click
import uvicorn

from catalog_api.core.config import settings
from catalog_api.core.logging import get_logger

logger = get_logger(__name__)

# Sample tree: (name, description, parent name, display order)
SEED_CATEGORIES = [
    ("Electronics", "Electronic devices and accessories", None, 1),
    ("Computers", "Laptops, desktops, and computer accessories", "Electronics", 1),
    ("Peripherals", "Computer peripherals and accessories", "Electronics", 2),
    ("Furniture", "Office and home furniture", None, 2),
]


@click.group()
def cli():
    """Catalog API management commands"""


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, help="Port to listen on")
@click.option("--workers", default=1, show_default=True, help="Worker processes (production only)")
@click.option("--production", is_flag=True, help="Disable auto-reload and run the given workers")
def serve(host, port, workers, production):
    """Run the catalog HTTP API"""
    if production and settings.is_sqlite and workers > 1:
        logger.warning("SQLite does not handle concurrent writers well; consider a single worker")

    logger.info(f"Serving catalog API on {host}:{port} ({'production' if production else 'development'})")
    uvicorn.run(
        "catalog_api.api.web_app:app",
        host=host,
        port=port,
        reload=not production,
        workers=workers if production else 1,
        log_level=settings.LOG_LEVEL.lower(),
    )


@cli.command("init-db")
def init_db():
    """Create database tables"""
    from catalog_api.db.base import init_models

    asyncio.run(init_models())
    click.echo(f"Tables created on {settings.DATABASE_URL}")


@cli.command()
@click.option("--revision", default="head", help="Target revision")
def migrate(revision):
    """Apply Alembic migrations"""
    from pathlib import Path

    import alembic.command
    import alembic.config

    alembic_cfg = alembic.config.Config(str(Path(__file__).parent / "alembic.ini"))
    alembic.command.upgrade(alembic_cfg, revision)
    click.echo(f"Database upgraded to {revision}")


async def _seed():
    from catalog_api.core.dependencies import session_scope
    from catalog_api.db.base import init_models
    from catalog_api.schemas.category import CategoryCreate
    from catalog_api.services.category_service import CategoryService

    await init_models()
    created = {}
    async with session_scope() as db_session:
        service = CategoryService(db_session)
        for name, description, parent_name, display_order in SEED_CATEGORIES:
            existing = await service.get_by_slug(name.lower())
            if existing:
                created[name] = existing
                continue
            created[name] = await service.create_category(
                CategoryCreate(
                    name=name,
                    description=description,
                    parent_id=created[parent_name].id if parent_name else None,
                    display_order=display_order,
                )
            )
    return created


@cli.command()
def seed():
    """Insert the sample category tree"""
    try:
        created = asyncio.run(_seed())
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        raise click.ClickException(str(e))

    for name, category in created.items():
        click.echo(f"  - {name} ({category.slug})")


if __name__ == "__main__":
    cli()
