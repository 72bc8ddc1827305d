"""Database module."""

from cafe_admin.db.database import SessionLocal, engine, get_db, init_db
from cafe_admin.db.models import Allergen, Base, Category, MenuItem, MenuItemAllergen

__all__ = [
    "SessionLocal",
    "engine",
    "get_db",
    "init_db",
    "Base",
    "Category",
    "MenuItem",
    "Allergen",
    "MenuItemAllergen",
]
