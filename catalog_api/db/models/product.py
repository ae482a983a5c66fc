# catalog_api/db/models/product.py
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Uuid,
)
from catalog_api.db.base import Base
from catalog_api.db.models.category import utcnow


class Product(Base):
    """
    Product listed in the catalog. A product belongs to at most one category;
    uncategorized products have no category_id.
    """

    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False, index=True)
    description = Column(String(1000), nullable=False)
    price = Column(Numeric(18, 2), nullable=False)
    category_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    stock_quantity = Column(Integer, nullable=False, default=0, index=True)
    min_stock_level = Column(Integer, comment="Reorder threshold for this product")
    image_url = Column(String(500))
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}')>"
