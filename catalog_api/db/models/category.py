# catalog_api/db/models/category.py
from datetime import datetime, timezone
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Uuid,
    false,
)
from catalog_api.db.base import Base


def utcnow():
    return datetime.now(timezone.utc)


class Category(Base):
    """
    Category node in the product category tree.

    The tree is kept as parent id references only; children are resolved by
    querying on parent_id, never through an ORM relationship.
    """

    __tablename__ = "categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(String(500))
    slug = Column(String(100), nullable=False, index=True)
    parent_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    display_order = Column(Integer, nullable=False, default=0, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    # "metadata" is reserved on declarative classes
    meta_data = Column("metadata", JSON, comment="Free-form metadata (SEO, etc.)")

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        # Slugs are unique among live categories only; a soft-deleted
        # category releases its slug.
        Index(
            "uq_categories_live_slug",
            "slug",
            unique=True,
            postgresql_where=(is_deleted == false()),
            sqlite_where=(is_deleted == false()),
        ),
    )

    def __repr__(self):
        return f"<Category(id={self.id}, slug='{self.slug}')>"
