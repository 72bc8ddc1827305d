"""Store interface consumed by the menu import engine."""

from typing import Any, Protocol

from cafe_admin.menu.schemas import CategoryCreate, MenuItemCreate


class StoreUnavailableError(Exception):
    """Raised by a store that cannot be reached at all.

    Unlike ordinary store failures this is not attributed to a single row;
    the import batch stops and reports the remaining rows as failed.
    """


class EntityStore(Protocol):
    """Persistence operations the importer writes through.

    Every method returns the stored record (anything with an ``id``) or
    raises. Failures are reported against the row being processed, except
    :class:`StoreUnavailableError`.
    """

    def create_category(self, data: CategoryCreate) -> Any: ...

    def update_category(self, category_id: str, data: CategoryCreate) -> Any: ...

    def create_menu_item(self, data: MenuItemCreate) -> Any: ...

    def update_menu_item(self, item_id: str, data: MenuItemCreate) -> Any: ...
