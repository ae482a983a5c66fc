# catalog_api/schemas/category.py
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
from uuid import UUID
from datetime import datetime

from catalog_api.services.slugs import generate_slug


def _require_slug_characters(value: Optional[str]) -> Optional[str]:
    if value is not None and not generate_slug(value):
        raise ValueError("must contain at least one letter or digit")
    return value


class CategoryBase(BaseModel):
    """Base Pydantic model for Category data"""

    name: str = Field(..., min_length=2, max_length=100, description="Display name of the category")
    description: Optional[str] = Field(None, max_length=500, description="Optional description of the category")
    parent_id: Optional[UUID] = Field(None, description="Parent category ID for hierarchical categories")
    display_order: int = Field(0, ge=0, description="Sort position among siblings")
    is_active: bool = Field(True, description="Whether the category is active")
    meta_data: Optional[Dict[str, Any]] = Field(None, description="Free-form metadata (SEO, etc.)")


class CategoryCreate(CategoryBase):
    """Schema for creating a new Category"""

    slug: Optional[str] = Field(
        None, max_length=100, description="Slug source; generated from the name if omitted"
    )

    @field_validator("name", "slug")
    @classmethod
    def validate_slug_source(cls, v):
        return _require_slug_characters(v)


class CategoryUpdate(BaseModel):
    """Schema for updating a Category (all fields optional)"""

    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    slug: Optional[str] = Field(None, max_length=100)
    parent_id: Optional[UUID] = None
    display_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    meta_data: Optional[Dict[str, Any]] = None

    @field_validator("name", "slug")
    @classmethod
    def validate_slug_source(cls, v):
        return _require_slug_characters(v)


class CategoryInDB(CategoryBase):
    """Schema for Category as stored in DB (includes DB fields)"""

    id: UUID
    slug: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryResponse(CategoryInDB):
    """Schema for API responses"""

    pass


class CategoryTree(CategoryInDB):
    """A category with its live children populated recursively"""

    children: List["CategoryTree"] = Field(default_factory=list)


CategoryTree.model_rebuild()
