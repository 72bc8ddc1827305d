"""Menu import orchestration.

A batch walks the rows of one spreadsheet in file order: map the cells to a
draft, resolve references, match against the pre-batch snapshot and write
through the store. A failing row is recorded and the batch moves on; only an
error outside the row boundary (the store going away) stops it early.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from cafe_admin.imports.codec import decode_csv
from cafe_admin.imports.errors import BatchAborted, ImportRowError
from cafe_admin.imports.parsers import build_field_map, map_category_row, map_menu_item_row
from cafe_admin.imports.reconciler import (
    CategoryReconciler,
    MenuItemReconciler,
    ReconcilePlan,
    Reconciler,
)
from cafe_admin.imports.resolvers import CategoryResolver
from cafe_admin.imports.schemas import BatchState, ImportResult, ImportRow, RowAction
from cafe_admin.imports.store import EntityStore

logger = logging.getLogger(__name__)

# Row 1 is the header and rows are 1-based
FIRST_DATA_ROW = 2

RowPlanner = Callable[[dict[str, str], int], ReconcilePlan]


class ImportBatch:
    """One run of the import pipeline over a decoded sheet.

    Args:
        kind: Entity kind for log messages ("categories", "menu items").
        header: Header row.
        data_rows: Data rows in file order.
        planner: Maps a field map and 1-based position to a plan; raises
            ``ImportRowError`` for bad rows.
        reconciler: Applies plans through the store.
        max_workers: Above 1, rows writing to different records are applied
            concurrently. The store must then be thread-safe.
    """

    def __init__(
        self,
        kind: str,
        header: list[str],
        data_rows: list[list[str]],
        planner: RowPlanner,
        reconciler: Reconciler,
        max_workers: int = 1,
    ):
        self.kind = kind
        self.planner = planner
        self.reconciler = reconciler
        self.max_workers = max(1, max_workers)
        self.state = BatchState.IDLE
        self.rows = [
            ImportRow(row_number=index + FIRST_DATA_ROW, fields=build_field_map(header, cells))
            for index, cells in enumerate(data_rows)
        ]
        self.result = ImportResult()

    def run(self) -> ImportResult:
        """Process every row and return the summary.

        Returns:
            ImportResult: Counts and row errors.

        Raises:
            RuntimeError: If the batch has already run.
        """
        if self.state != BatchState.IDLE:
            raise RuntimeError(f"Import batch is {self.state.value}")

        self.state = BatchState.RUNNING
        logger.info(f"Importing {len(self.rows)} {self.kind} (workers={self.max_workers})")

        aborted = None
        try:
            if self.max_workers > 1:
                self._run_concurrent()
            else:
                self._run_sequential()
        except BatchAborted as e:
            aborted = e
            logger.error(
                f"Import of {self.kind} aborted after {e.processed} row(s): {e.reason}"
            )

        self._tally(aborted)
        self.state = BatchState.COMPLETED
        logger.info(
            f"Imported {self.kind}: {self.result.success_count} succeeded "
            f"({self.result.created_count} created, {self.result.updated_count} updated), "
            f"{self.result.failed_count} failed"
        )
        return self.result

    def _fail(self, row: ImportRow, error: ImportRowError) -> None:
        row.action = RowAction.FAILED
        row.error = error.message
        logger.warning(f"Row {row.row_number}: {error.message}")

    def _apply(self, row: ImportRow, plan: ReconcilePlan) -> None:
        try:
            action, entity_id = self.reconciler.apply(plan)
        except ImportRowError as e:
            self._fail(row, e)
            return
        row.action = action
        row.entity_id = entity_id

    def _processed(self) -> int:
        return sum(1 for row in self.rows if row.action is not None)

    def _run_sequential(self) -> None:
        for position, row in enumerate(self.rows, start=1):
            try:
                try:
                    plan = self.planner(row.fields, position)
                except ImportRowError as e:
                    self._fail(row, e)
                    continue
                self._apply(row, plan)
            except Exception as e:
                logger.exception(f"Unexpected error at row {row.row_number}")
                raise BatchAborted(str(e) or e.__class__.__name__, self._processed()) from e

    def _run_concurrent(self) -> None:
        # Plan in file order so matching sees exactly what the sequential run sees
        partitions: dict[tuple, list[tuple[ImportRow, ReconcilePlan]]] = {}
        for position, row in enumerate(self.rows, start=1):
            try:
                plan = self.planner(row.fields, position)
            except ImportRowError as e:
                self._fail(row, e)
                continue
            except Exception as e:
                logger.exception(f"Unexpected error at row {row.row_number}")
                raise BatchAborted(str(e) or e.__class__.__name__, self._processed()) from e
            partitions.setdefault(plan.partition_key, []).append((row, plan))

        stop = threading.Event()

        def apply_partition(items: list[tuple[ImportRow, ReconcilePlan]]) -> None:
            for row, plan in items:
                if stop.is_set():
                    return
                try:
                    self._apply(row, plan)
                except Exception:
                    stop.set()
                    raise

        failures = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(apply_partition, items) for items in partitions.values()]
            for future in futures:
                try:
                    future.result()
                except Exception as e:
                    failures.append(e)

        if failures:
            error = failures[0]
            logger.error(f"Store failure during concurrent import: {error!r}")
            raise BatchAborted(str(error) or error.__class__.__name__, self._processed()) from error

    def _tally(self, aborted: BatchAborted | None) -> None:
        for row in self.rows:
            if row.action == RowAction.FAILED:
                self.result.record_failure(row.row_number, row.error or "Unknown error")
            elif row.action is not None:
                self.result.record_success(row.action)

        if aborted is not None:
            # Rows never written count as failed under a single batch message
            unprocessed = sum(1 for row in self.rows if row.action is None)
            self.result.failed_count += unprocessed
            self.result.errors.append(f"Import aborted: {aborted.reason}")
            self.result.aborted = True


class MenuImporter:
    """Import categories and menu items from spreadsheets.

    Args:
        store: Where drafts are written.
        max_workers: Worker threads; see :class:`ImportBatch`.
    """

    def __init__(self, store: EntityStore, max_workers: int = 1):
        self.store = store
        self.max_workers = max_workers

    def _run(
        self,
        kind: str,
        rows: list[list[str]],
        planner: RowPlanner,
        reconciler: Reconciler,
    ) -> ImportResult:
        header, data_rows = (rows[0], rows[1:]) if rows else ([], [])
        batch = ImportBatch(kind, header, data_rows, planner, reconciler, self.max_workers)
        return batch.run()

    def import_categories(self, csv_text: str, categories: list[Any]) -> ImportResult:
        """Import categories from CSV text.

        Args:
            csv_text: CSV content with a header row.
            categories: Snapshot of existing categories.

        Returns:
            ImportResult: Import summary.
        """
        return self.import_category_rows(decode_csv(csv_text), categories)

    def import_category_rows(self, rows: list[list[str]], categories: list[Any]) -> ImportResult:
        """Import categories from decoded rows (header first)."""
        reconciler = CategoryReconciler(self.store, categories)

        def plan_row(fields: dict[str, str], position: int) -> ReconcilePlan:
            draft = map_category_row(fields, position)
            return reconciler.plan(fields, draft)

        return self._run("categories", rows, plan_row, reconciler)

    def import_menu_items(
        self,
        csv_text: str,
        categories: list[Any],
        existing_items: list[Any],
    ) -> ImportResult:
        """Import menu items from CSV text.

        Args:
            csv_text: CSV content with a header row.
            categories: Snapshot of categories, for ``category_name`` lookup.
            existing_items: Snapshot of existing menu items.

        Returns:
            ImportResult: Import summary.
        """
        return self.import_menu_item_rows(decode_csv(csv_text), categories, existing_items)

    def import_menu_item_rows(
        self,
        rows: list[list[str]],
        categories: list[Any],
        existing_items: list[Any],
    ) -> ImportResult:
        """Import menu items from decoded rows (header first)."""
        resolver = CategoryResolver(categories)
        reconciler = MenuItemReconciler(self.store, existing_items)

        def plan_row(fields: dict[str, str], position: int) -> ReconcilePlan:
            category_id = resolver.resolve(fields)
            draft = map_menu_item_row(fields, position, category_id)
            return reconciler.plan(fields, draft)

        return self._run("menu items", rows, plan_row, reconciler)
