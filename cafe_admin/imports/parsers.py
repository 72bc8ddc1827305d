"""Row mapping for menu spreadsheets.

Turns a decoded header row plus one data row into a typed draft
(``CategoryCreate`` / ``MenuItemCreate``) ready for the store.
"""

import math
import re

from pydantic import BaseModel, ValidationError

from cafe_admin.imports.errors import InvalidFieldValue, MissingRequiredField
from cafe_admin.imports.schemas import ImportKind, ImportPreview
from cafe_admin.menu.schemas import CategoryCreate, MenuItemCreate

# Optional free-text columns copied to the draft only when non-blank, so an
# update never clears a value the sheet left empty.
CATEGORY_TEXT_FIELDS = ["name_es", "description", "description_es"]
MENU_ITEM_TEXT_FIELDS = ["name_es", "description", "description_es", "image_url"]

# Data rows returned by a preview
PREVIEW_ROW_LIMIT = 5

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_header(token: str) -> str:
    """Normalize a header cell to a field key.

    Examples:
        "Name" -> "name"
        "Category Name" -> "category_name"
        "  display   order " -> "display_order"

    Args:
        token: Raw header cell.

    Returns:
        str: Lower-case key with whitespace runs replaced by underscores.
    """
    return _WHITESPACE_RE.sub("_", token.strip().lower())


def build_field_map(headers: list[str], row: list[str]) -> dict[str, str]:
    """Zip normalized headers with one row's cells.

    Missing trailing cells map to an empty string; cells beyond the header
    are ignored.

    Args:
        headers: Raw header row.
        row: Data row.

    Returns:
        dict[str, str]: Field key -> trimmed cell value.
    """
    fields = {}
    for index, header in enumerate(headers):
        value = row[index] if index < len(row) else ""
        fields[normalize_header(header)] = (value or "").strip()
    return fields


def parse_int(value: str | None, default: int) -> int:
    """Parse an integer cell, falling back to ``default``.

    Float text is truncated ("3.0" -> 3).
    """
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    return int(number)


def parse_float(value: str | None, default: float) -> float:
    """Parse a decimal cell, falling back to ``default``.

    Non-finite values ("nan", "inf") count as unparsable.
    """
    if not value:
        return default
    try:
        number = float(value)
    except ValueError:
        return default
    return number if math.isfinite(number) else default


def parse_flag_default_true(value: str | None) -> bool:
    """Opt-out flag: true unless the cell says "false"."""
    return (value or "").strip().lower() != "false"


def parse_flag_default_false(value: str | None) -> bool:
    """Opt-in flag: false unless the cell says "true"."""
    return (value or "").strip().lower() == "true"


def _build_draft(model: type[BaseModel], values: dict) -> BaseModel:
    try:
        return model(**values)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else model.__name__
        raise InvalidFieldValue(field, error["msg"]) from e


def map_category_row(fields: dict[str, str], position: int) -> CategoryCreate:
    """Build a category draft from a row's field map.

    Args:
        fields: Normalized field map.
        position: 1-based data row index, the default display order.

    Returns:
        CategoryCreate: Draft for the store.

    Raises:
        MissingRequiredField: If the name is blank.
        InvalidFieldValue: If a value fails validation.
    """
    name = fields.get("name", "")
    if not name:
        raise MissingRequiredField("name")

    values = {
        "name": name,
        "display_order": parse_int(fields.get("display_order"), position),
        "is_active": parse_flag_default_true(fields.get("is_active")),
    }
    for key in CATEGORY_TEXT_FIELDS:
        if fields.get(key):
            values[key] = fields[key]

    return _build_draft(CategoryCreate, values)


def map_menu_item_row(fields: dict[str, str], position: int, category_id: str) -> MenuItemCreate:
    """Build a menu item draft from a row's field map.

    Args:
        fields: Normalized field map.
        position: 1-based data row index, the default display order.
        category_id: Resolved category ID.

    Returns:
        MenuItemCreate: Draft for the store.

    Raises:
        MissingRequiredField: If the name is blank.
        InvalidFieldValue: If a value fails validation (e.g. negative price).
    """
    name = fields.get("name", "")
    if not name:
        raise MissingRequiredField("name")

    values = {
        "category_id": category_id,
        "name": name,
        "price": parse_float(fields.get("price"), 0.0),
        "is_available": parse_flag_default_true(fields.get("is_available")),
        "is_featured": parse_flag_default_false(fields.get("is_featured")),
        "display_order": parse_int(fields.get("display_order"), position),
    }
    for key in MENU_ITEM_TEXT_FIELDS:
        if fields.get(key):
            values[key] = fields[key]

    return _build_draft(MenuItemCreate, values)


def build_preview(rows: list[list[str]], kind: ImportKind) -> ImportPreview:
    """Summarize decoded rows for review before importing.

    Args:
        rows: Decoded rows, header first.
        kind: What the sheet is meant to import.

    Returns:
        ImportPreview: Headers, row count, the first rows and warnings.
    """
    headers = rows[0] if rows else []
    data_rows = rows[1:]
    fields = [normalize_header(header) for header in headers]

    warnings = []
    missing_columns = False
    if "name" not in fields:
        warnings.append("No 'name' column detected - required for import")
        missing_columns = True
    if kind == ImportKind.ITEMS and not {"category_id", "category_name"} & set(fields):
        warnings.append(
            "No 'category_id' or 'category_name' column detected - required for import"
        )
        missing_columns = True
    if not data_rows:
        warnings.append("File is empty or has no data rows")

    return ImportPreview(
        headers=headers,
        fields=fields,
        row_count=len(data_rows),
        sample_rows=data_rows[:PREVIEW_ROW_LIMIT],
        warnings=warnings,
        can_import=bool(data_rows) and not missing_columns,
    )
