"""Resolve category references typed into menu item sheets."""

from typing import Any

from cafe_admin.imports.errors import MissingRequiredField, ReferenceNotFound


class CategoryResolver:
    """Look up categories by ID or by name in either locale.

    The category snapshot is indexed once and never modified.

    Args:
        categories: Snapshot of existing categories (objects with ``id``,
            ``name`` and ``name_es``).
    """

    def __init__(self, categories: list[Any]):
        self._ids = {category.id for category in categories}
        self._by_name: dict[str, str] = {}
        self._by_name_es: dict[str, str] = {}
        for category in categories:
            # First category wins when names collide
            self._by_name.setdefault(category.name.lower(), category.id)
            if category.name_es:
                self._by_name_es.setdefault(category.name_es.lower(), category.id)

    def find_by_name(self, name: str) -> str | None:
        """Find a category ID by case-insensitive ``name`` or ``name_es``."""
        key = name.strip().lower()
        return self._by_name.get(key) or self._by_name_es.get(key)

    def resolve(self, fields: dict[str, str]) -> str:
        """Resolve the category for one row.

        A known ``category_id`` wins; otherwise ``category_name`` is matched.

        Args:
            fields: Normalized field map.

        Returns:
            str: Category ID.

        Raises:
            ReferenceNotFound: If the reference matches no category.
            MissingRequiredField: If the row has no category reference.
        """
        category_id = fields.get("category_id", "")
        category_name = fields.get("category_name", "")

        if category_id and category_id in self._ids:
            return category_id

        if category_name:
            found = self.find_by_name(category_name)
            if found is None:
                raise ReferenceNotFound(category_name)
            return found

        if category_id:
            raise ReferenceNotFound(category_id)

        raise MissingRequiredField("category_id or category_name")
