"""Menu service layer.

``MenuService`` is the SQLAlchemy-backed store behind the admin endpoints and
the spreadsheet importer.
"""

import functools
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from cafe_admin.db.models import Allergen, Category, MenuItem
from cafe_admin.imports.store import StoreUnavailableError
from cafe_admin.menu.schemas import (
    AllergenCreate,
    CategoryCreate,
    CategoryUpdate,
    MenuItemCreate,
    MenuItemUpdate,
)

logger = logging.getLogger(__name__)


class MenuServiceError(Exception):
    """Raised when a menu write is rejected (unknown id, integrity error)."""


def store_write(method):
    """Translate a lost database connection anywhere in a write.

    Lookups that run before the commit raise ``OperationalError`` too; the
    importer only stops a batch on ``StoreUnavailableError``.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OperationalError as e:
            self.db.rollback()
            logger.error(f"Database unavailable in {method.__name__}: {e}")
            raise StoreUnavailableError(str(e.orig)) from e

    return wrapper


class MenuService:
    """Service class for menu operations."""

    def __init__(self, db: Session):
        """Initialize menu service.

        Args:
            db: Database session.
        """
        self.db = db

    def _commit(self) -> None:
        """Commit the session, translating database failures.

        The session is rolled back on every failure so the next write starts
        from a clean transaction.

        Raises:
            StoreUnavailableError: If the database cannot be reached.
            MenuServiceError: If the write is rejected.
        """
        try:
            self.db.commit()
        except OperationalError as e:
            self.db.rollback()
            logger.error(f"Database unavailable: {e}")
            raise StoreUnavailableError(str(e.orig)) from e
        except IntegrityError as e:
            self.db.rollback()
            raise MenuServiceError(f"Integrity error: {e.orig}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise MenuServiceError(f"Database error: {e}") from e
        except Exception as e:
            # Driver errors raised while binding parameters (e.g. OverflowError)
            self.db.rollback()
            raise MenuServiceError(str(e) or e.__class__.__name__) from e

    # --- Categories ---

    def list_categories(self) -> list[Category]:
        """List categories in menu order.

        Returns:
            list[Category]: All categories.
        """
        return self.db.query(Category).order_by(Category.display_order, Category.name).all()

    def get_category(self, category_id: str) -> Category | None:
        """Get a category by ID.

        Args:
            category_id: Category UUID.

        Returns:
            Category | None: The category or None.
        """
        return self.db.query(Category).filter(Category.id == category_id).first()

    def find_category_by_name(self, name: str) -> Category | None:
        """Find a category by case-insensitive name."""
        return (
            self.db.query(Category).filter(func.lower(Category.name) == name.lower()).first()
        )

    @store_write
    def create_category(self, data: CategoryCreate) -> Category:
        """Create a category.

        Args:
            data: Category data.

        Returns:
            Category: Created category.
        """
        category = Category(**data.model_dump())
        self.db.add(category)
        self._commit()
        self.db.refresh(category)
        return category

    @store_write
    def update_category(self, category_id: str, data: CategoryCreate | CategoryUpdate) -> Category:
        """Update a category with the fields set on ``data``.

        Args:
            category_id: Category UUID.
            data: Fields to change. Only explicitly set fields are applied.

        Returns:
            Category: Updated category.

        Raises:
            MenuServiceError: If the category does not exist.
        """
        category = self.get_category(category_id)
        if not category:
            raise MenuServiceError(f"Category not found: {category_id}")

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(category, field, value)

        self._commit()
        self.db.refresh(category)
        return category

    def delete_category(self, category_id: str) -> None:
        """Delete a category that has no menu items.

        Raises:
            MenuServiceError: If the category is missing or still has items.
        """
        category = self.get_category(category_id)
        if not category:
            raise MenuServiceError(f"Category not found: {category_id}")
        if category.items:
            raise MenuServiceError(
                f"Category '{category.name}' still has {len(category.items)} menu item(s)"
            )
        self.db.delete(category)
        self._commit()

    # --- Menu items ---

    def list_menu_items(self, category_id: str | None = None) -> list[MenuItem]:
        """List menu items, optionally for one category.

        Args:
            category_id: Restrict to this category.

        Returns:
            list[MenuItem]: Items with allergens loaded.
        """
        query = self.db.query(MenuItem).options(selectinload(MenuItem.allergens))
        if category_id:
            query = query.filter(MenuItem.category_id == category_id)
        return query.order_by(MenuItem.display_order, MenuItem.name).all()

    def get_menu_item(self, item_id: str) -> MenuItem | None:
        """Get a menu item by ID."""
        return self.db.query(MenuItem).filter(MenuItem.id == item_id).first()

    def _resolve_allergens(self, allergen_ids: list[str]) -> list[Allergen]:
        allergens = self.db.query(Allergen).filter(Allergen.id.in_(allergen_ids)).all()
        missing = set(allergen_ids) - {a.id for a in allergens}
        if missing:
            raise MenuServiceError(f"Allergen not found: {', '.join(sorted(missing))}")
        return allergens

    @store_write
    def create_menu_item(self, data: MenuItemCreate) -> MenuItem:
        """Create a menu item.

        Args:
            data: Menu item data.

        Returns:
            MenuItem: Created item.

        Raises:
            MenuServiceError: If the category or an allergen does not exist.
        """
        if not self.get_category(data.category_id):
            raise MenuServiceError(f"Category not found: {data.category_id}")

        values = data.model_dump(exclude={"allergen_ids"})
        item = MenuItem(**values)
        if data.allergen_ids:
            item.allergens = self._resolve_allergens(data.allergen_ids)

        self.db.add(item)
        self._commit()
        self.db.refresh(item)
        return item

    @store_write
    def update_menu_item(self, item_id: str, data: MenuItemCreate | MenuItemUpdate) -> MenuItem:
        """Update a menu item with the fields set on ``data``.

        Args:
            item_id: Menu item UUID.
            data: Fields to change. Only explicitly set fields are applied.

        Returns:
            MenuItem: Updated item.

        Raises:
            MenuServiceError: If the item, its new category or an allergen
                does not exist.
        """
        item = self.get_menu_item(item_id)
        if not item:
            raise MenuServiceError(f"Menu item not found: {item_id}")

        changes = data.model_dump(exclude_unset=True)
        allergen_ids = changes.pop("allergen_ids", None)

        new_category_id = changes.get("category_id")
        if new_category_id and new_category_id != item.category_id:
            if not self.get_category(new_category_id):
                raise MenuServiceError(f"Category not found: {new_category_id}")

        for field, value in changes.items():
            setattr(item, field, value)
        if allergen_ids is not None:
            item.allergens = self._resolve_allergens(allergen_ids)

        self._commit()
        self.db.refresh(item)
        return item

    def delete_menu_item(self, item_id: str) -> None:
        """Delete a menu item.

        Raises:
            MenuServiceError: If the item does not exist.
        """
        item = self.get_menu_item(item_id)
        if not item:
            raise MenuServiceError(f"Menu item not found: {item_id}")
        self.db.delete(item)
        self._commit()

    # --- Allergens ---

    def list_allergens(self) -> list[Allergen]:
        """List allergens by name."""
        return self.db.query(Allergen).order_by(Allergen.name).all()

    def create_allergen(self, data: AllergenCreate) -> Allergen:
        """Create an allergen."""
        allergen = Allergen(**data.model_dump())
        self.db.add(allergen)
        self._commit()
        self.db.refresh(allergen)
        return allergen
