"""Pydantic schemas for menu import results."""

from enum import Enum

from pydantic import BaseModel, Field


class BatchState(str, Enum):
    """Lifecycle of an import batch."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class RowAction(str, Enum):
    """What happened to an import row."""

    CREATED = "created"
    UPDATED = "updated"
    FAILED = "failed"


class ImportRow(BaseModel):
    """One data row of an import batch and its outcome.

    Attributes:
        row_number: 1-based row in the file (the header is row 1).
        fields: Normalized field map read from the row.
        action: Outcome, None while the row is pending.
        entity_id: ID of the created or updated record.
        error: Failure message for failed rows.
    """

    row_number: int
    fields: dict[str, str] = Field(default_factory=dict)
    action: RowAction | None = None
    entity_id: str | None = None
    error: str | None = None


class ImportResult(BaseModel):
    """Summary of an import batch.

    Attributes:
        success_count: Rows created or updated.
        failed_count: Rows that failed.
        errors: ``"Row {n}: {message}"`` lines in row order.
        created_count: Successful rows that created a record.
        updated_count: Successful rows that updated a record.
        aborted: Whether the batch stopped early on a store outage.
    """

    success_count: int = 0
    failed_count: int = 0
    errors: list[str] = Field(default_factory=list)
    created_count: int = 0
    updated_count: int = 0
    aborted: bool = False

    def record_success(self, action: RowAction) -> None:
        """Count a created or updated row."""
        self.success_count += 1
        if action == RowAction.CREATED:
            self.created_count += 1
        else:
            self.updated_count += 1

    def record_failure(self, row_number: int, message: str) -> None:
        """Count a failed row and keep its message."""
        self.failed_count += 1
        self.errors.append(f"Row {row_number}: {message}")


class ImportKind(str, Enum):
    """Entity kind a spreadsheet holds."""

    CATEGORIES = "categories"
    ITEMS = "items"


class ImportPreview(BaseModel):
    """Decoded spreadsheet shown before anything is written.

    Attributes:
        headers: Header cells as they appear in the file.
        fields: Normalized field keys for the headers.
        row_count: Number of data rows.
        sample_rows: First data rows.
        warnings: Problems that would make the import fail or do nothing.
        can_import: Whether the file has data rows and the required columns.
    """

    headers: list[str] = Field(default_factory=list)
    fields: list[str] = Field(default_factory=list)
    row_count: int = 0
    sample_rows: list[list[str]] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    can_import: bool = False
