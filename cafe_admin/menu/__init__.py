"""Menu module for categories, menu items and allergens."""

from cafe_admin.menu.schemas import (
    AllergenCreate,
    AllergenResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
)
from cafe_admin.menu.service import MenuService, MenuServiceError

__all__ = [
    "MenuService",
    "MenuServiceError",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemResponse",
    "AllergenCreate",
    "AllergenResponse",
]
