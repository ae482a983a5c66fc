# tests/services/test_slugs.py
import pytest

from catalog_api.core.exceptions import ValidationFailureError
from catalog_api.db.models.category import Category
from catalog_api.db.repositories.category_repository import CategoryRepository
from catalog_api.services.slugs import MAX_SLUG_LENGTH, SlugGenerator, generate_slug


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Wireless Mouse!", "wireless-mouse"),
        ("  ---  ", ""),
        ("", ""),
        (None, ""),
        ("Home & Garden", "home-garden"),
        ("  Office   Chairs  ", "office-chairs"),
        ("4K -- TVs", "4k-tvs"),
        ("--Leading and trailing--", "leading-and-trailing"),
        ("Café Crème", "caf-crme"),
        ("already-a-slug", "already-a-slug"),
    ],
)
def test_generate_slug(name, expected):
    assert generate_slug(name) == expected


async def test_ensure_unique_appends_first_free_suffix(db_session):
    repo = CategoryRepository(db_session)
    for slug in ("books", "books-1", "books-2"):
        await repo.add(Category(name=slug, slug=slug))
    await db_session.commit()

    generator = SlugGenerator(repo)

    assert await generator.ensure_unique("books") == "books-3"
    assert await generator.ensure_unique("magazines") == "magazines"


async def test_ensure_unique_ignores_excluded_category(db_session):
    repo = CategoryRepository(db_session)
    own = await repo.add(Category(name="Books", slug="books"))
    await db_session.commit()

    generator = SlugGenerator(repo)

    assert await generator.ensure_unique("books", exclude_id=own.id) == "books"
    assert await generator.ensure_unique("books") == "books-1"


async def test_ensure_unique_ignores_soft_deleted_categories(db_session):
    repo = CategoryRepository(db_session)
    gone = await repo.add(Category(name="Books", slug="books"))
    await repo.delete(gone)
    await db_session.commit()

    assert await SlugGenerator(repo).ensure_unique("books") == "books"


async def test_unique_slug_for_rejects_names_without_slug_characters(db_session):
    generator = SlugGenerator(CategoryRepository(db_session))

    with pytest.raises(ValidationFailureError):
        await generator.unique_slug_for("!!! ???")


async def test_suffixed_slug_stays_within_column_length(db_session):
    repo = CategoryRepository(db_session)
    long_slug = "a" * MAX_SLUG_LENGTH
    await repo.add(Category(name="Long", slug=long_slug))
    await db_session.commit()

    slug = await SlugGenerator(repo).ensure_unique(long_slug)

    assert slug == "a" * (MAX_SLUG_LENGTH - 2) + "-1"
    assert len(slug) == MAX_SLUG_LENGTH
