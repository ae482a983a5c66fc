# catalog_api/services/slugs.py
import re
from typing import Optional
from uuid import UUID

from catalog_api.core.exceptions import ValidationFailureError
from catalog_api.core.logging import get_logger

logger = get_logger(__name__)

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")

# Matches the String(100) slug column
MAX_SLUG_LENGTH = 100


def generate_slug(name: Optional[str]) -> str:
    """
    Turn a display name into a URL-safe slug.

    Args:
        name: The display name (e.g., "Wireless Mouse!")

    Returns:
        Lowercase, hyphen-separated slug (e.g., "wireless-mouse"). Input with
        no letters or digits yields an empty string.
    """
    if not name or not name.strip():
        return ""

    slug = name.lower().strip()
    slug = _INVALID_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


class SlugGenerator:
    """Allocates slugs that are unique among live categories"""

    def __init__(self, category_repo):
        self.category_repo = category_repo

    async def ensure_unique(self, base_slug: str, exclude_id: Optional[UUID] = None) -> str:
        """
        Return base_slug, or base_slug with the first free numeric suffix
        ("-1", "-2", ...). exclude_id lets a category keep its own slug.

        The base is shortened when needed so a suffixed slug still fits in
        MAX_SLUG_LENGTH characters.
        """
        base_slug = base_slug[:MAX_SLUG_LENGTH].rstrip("-")
        slug = base_slug
        counter = 1
        while await self.category_repo.slug_exists(slug, exclude_id):
            suffix = f"-{counter}"
            slug = base_slug[: MAX_SLUG_LENGTH - len(suffix)].rstrip("-") + suffix
            counter += 1

        if slug != base_slug:
            logger.debug(f"Slug '{base_slug}' taken, using '{slug}'")
        return slug

    async def unique_slug_for(self, source: str, exclude_id: Optional[UUID] = None) -> str:
        """Generate a slug from a name (or requested slug) and make it unique"""
        base_slug = generate_slug(source)
        if not base_slug:
            raise ValidationFailureError(
                f"'{source}' does not contain any characters usable in a slug"
            )
        return await self.ensure_unique(base_slug, exclude_id)
