# catalog_api/schemas/product.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from urllib.parse import urlparse
from uuid import UUID
from datetime import datetime
from decimal import Decimal


def _validate_image_url(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("Image URL must be a valid absolute URL")
    return value


class ProductBase(BaseModel):
    """Base Pydantic model for Product data"""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: str = Field(..., min_length=1, max_length=1000, description="Product description")
    price: Decimal = Field(..., gt=0, lt=1_000_000, decimal_places=2, description="Unit price")
    category_id: Optional[UUID] = Field(None, description="Category this product belongs to")
    stock_quantity: int = Field(0, ge=0, description="Units in stock")
    min_stock_level: Optional[int] = Field(None, ge=0, description="Reorder threshold")
    image_url: Optional[str] = Field(None, max_length=500, description="Absolute URL of the product image")
    is_active: bool = True


class ProductCreate(ProductBase):
    """Schema for creating a new Product"""

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v):
        return _validate_image_url(v)


class ProductUpdate(BaseModel):
    """Schema for updating a Product (all fields optional)"""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    price: Optional[Decimal] = Field(None, gt=0, lt=1_000_000, decimal_places=2)
    category_id: Optional[UUID] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v):
        return _validate_image_url(v)


class ProductInDB(ProductBase):
    """Schema for Product as stored in DB (includes DB fields)"""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductResponse(ProductInDB):
    """Schema for API responses"""

    pass


class ProductCount(BaseModel):
    count: int


class ProductExists(BaseModel):
    id: UUID
    exists: bool
