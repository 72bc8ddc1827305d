"""Decide create vs update for imported rows and write through the store."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from cafe_admin.imports.errors import StoreOperationFailed
from cafe_admin.imports.schemas import RowAction
from cafe_admin.imports.store import EntityStore, StoreUnavailableError
from cafe_admin.menu.schemas import CategoryCreate, MenuItemCreate


@dataclass
class ReconcilePlan:
    """Where a draft will be written.

    Attributes:
        draft: Validated draft for the store.
        target_id: Existing record to update, None to create.
        partition_key: Identity of the record the row writes to. Rows that
            share a key must be written in file order.
    """

    draft: BaseModel
    target_id: str | None
    partition_key: tuple


class Reconciler:
    """Match drafts against a snapshot taken once at batch start.

    Matching precedence: an explicit ``id`` present in the snapshot, then the
    natural key. Writes made during the batch are not visible to later
    matches.
    """

    def __init__(self, store: EntityStore, existing: list[Any]):
        self.store = store
        self._by_id = {entity.id: entity for entity in existing}
        self._by_key: dict[tuple, str] = {}
        for entity in existing:
            self._by_key.setdefault(self.entity_key(entity), entity.id)

    def entity_key(self, entity: Any) -> tuple:
        raise NotImplementedError

    def draft_key(self, draft: BaseModel) -> tuple:
        raise NotImplementedError

    def _create(self, draft: BaseModel) -> Any:
        raise NotImplementedError

    def _update(self, target_id: str, draft: BaseModel) -> Any:
        raise NotImplementedError

    def match(self, row_id: str, draft: BaseModel) -> str | None:
        """Return the ID of the existing record a row refers to, if any."""
        if row_id and row_id in self._by_id:
            return row_id
        return self._by_key.get(self.draft_key(draft))

    def plan(self, fields: dict[str, str], draft: BaseModel) -> ReconcilePlan:
        """Decide whether a row creates or updates.

        Args:
            fields: Normalized field map (for the optional ``id`` column).
            draft: Mapped draft.

        Returns:
            ReconcilePlan: The decision.
        """
        target_id = self.match(fields.get("id", ""), draft)
        if target_id is not None:
            partition_key = ("id", target_id)
        else:
            partition_key = ("new", *self.draft_key(draft))
        return ReconcilePlan(draft=draft, target_id=target_id, partition_key=partition_key)

    def apply(self, plan: ReconcilePlan) -> tuple[RowAction, str | None]:
        """Write a planned draft through the store.

        Returns:
            tuple: (action, ID of the stored record).

        Raises:
            StoreOperationFailed: If the store rejects the write.
            StoreUnavailableError: If the store cannot be reached.
        """
        try:
            if plan.target_id is not None:
                stored = self._update(plan.target_id, plan.draft)
                action = RowAction.UPDATED
            else:
                stored = self._create(plan.draft)
                action = RowAction.CREATED
        except StoreUnavailableError:
            raise
        except Exception as e:
            raise StoreOperationFailed(str(e) or e.__class__.__name__) from e

        return action, getattr(stored, "id", plan.target_id)


class CategoryReconciler(Reconciler):
    """Categories match by ``id`` or case-insensitive ``name``."""

    def entity_key(self, entity: Any) -> tuple:
        return (entity.name.lower(),)

    def draft_key(self, draft: CategoryCreate) -> tuple:
        return (draft.name.lower(),)

    def _create(self, draft: CategoryCreate) -> Any:
        return self.store.create_category(draft)

    def _update(self, target_id: str, draft: CategoryCreate) -> Any:
        return self.store.update_category(target_id, draft)


class MenuItemReconciler(Reconciler):
    """Menu items match by ``id`` or by category plus case-insensitive name."""

    def entity_key(self, entity: Any) -> tuple:
        return (entity.category_id, entity.name.lower())

    def draft_key(self, draft: MenuItemCreate) -> tuple:
        return (draft.category_id, draft.name.lower())

    def _create(self, draft: MenuItemCreate) -> Any:
        return self.store.create_menu_item(draft)

    def _update(self, target_id: str, draft: MenuItemCreate) -> Any:
        return self.store.update_menu_item(target_id, draft)
