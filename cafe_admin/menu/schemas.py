"""Pydantic schemas for menu categories, items and allergens."""

from datetime import datetime

from pydantic import BaseModel, Field

# Largest value a 32-bit INTEGER column holds
MAX_DISPLAY_ORDER = 2**31 - 1


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100)
    name_es: str | None = Field(None, max_length=100)
    description: str | None = None
    description_es: str | None = None
    display_order: int = Field(0, ge=0, le=MAX_DISPLAY_ORDER)
    is_active: bool = True


class CategoryUpdate(BaseModel):
    """Schema for updating a category."""

    name: str | None = Field(None, min_length=1, max_length=100)
    name_es: str | None = Field(None, max_length=100)
    description: str | None = None
    description_es: str | None = None
    display_order: int | None = Field(None, ge=0, le=MAX_DISPLAY_ORDER)
    is_active: bool | None = None


class CategoryResponse(BaseModel):
    """Schema for category response."""

    id: str
    name: str
    name_es: str | None = None
    description: str | None = None
    description_es: str | None = None
    display_order: int = 0
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class AllergenCreate(BaseModel):
    """Schema for creating an allergen."""

    name: str = Field(..., min_length=1, max_length=100)
    name_es: str | None = Field(None, max_length=100)
    icon: str | None = Field(None, max_length=50)


class AllergenResponse(BaseModel):
    """Schema for allergen response."""

    id: str
    name: str
    name_es: str | None = None
    icon: str | None = None

    model_config = {"from_attributes": True}


class MenuItemCreate(BaseModel):
    """Schema for creating a menu item.

    Attributes:
        category_id: Category the item belongs to.
        price: Non-negative price.
        allergen_ids: Allergens to link. None leaves existing links untouched
            on update.
    """

    category_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=150)
    name_es: str | None = Field(None, max_length=150)
    description: str | None = None
    description_es: str | None = None
    price: float = Field(0, ge=0)
    image_url: str | None = Field(None, max_length=500)
    is_available: bool = True
    is_featured: bool = False
    display_order: int = Field(0, ge=0, le=MAX_DISPLAY_ORDER)
    allergen_ids: list[str] | None = None


class MenuItemUpdate(BaseModel):
    """Schema for updating a menu item."""

    category_id: str | None = Field(None, min_length=1)
    name: str | None = Field(None, min_length=1, max_length=150)
    name_es: str | None = Field(None, max_length=150)
    description: str | None = None
    description_es: str | None = None
    price: float | None = Field(None, ge=0)
    image_url: str | None = Field(None, max_length=500)
    is_available: bool | None = None
    is_featured: bool | None = None
    display_order: int | None = Field(None, ge=0, le=MAX_DISPLAY_ORDER)
    allergen_ids: list[str] | None = None


class MenuItemResponse(BaseModel):
    """Schema for menu item response."""

    id: str
    category_id: str
    name: str
    name_es: str | None = None
    description: str | None = None
    description_es: str | None = None
    price: float = 0
    image_url: str | None = None
    is_available: bool = True
    is_featured: bool = False
    display_order: int = 0
    allergens: list[AllergenResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
