"""Imports module for menu spreadsheet import/export."""

from cafe_admin.imports.codec import decode_csv, decode_excel, decode_upload, encode_csv
from cafe_admin.imports.errors import (
    BatchAborted,
    ImportRowError,
    InvalidFieldValue,
    MissingRequiredField,
    ReferenceNotFound,
    StoreOperationFailed,
    UnsupportedFileType,
)
from cafe_admin.imports.exporters import (
    category_template,
    export_categories,
    export_menu_items,
    menu_item_template,
)
from cafe_admin.imports.parsers import build_preview
from cafe_admin.imports.schemas import (
    BatchState,
    ImportKind,
    ImportPreview,
    ImportResult,
    ImportRow,
    RowAction,
)
from cafe_admin.imports.service import ImportBatch, MenuImporter
from cafe_admin.imports.store import EntityStore, StoreUnavailableError

__all__ = [
    "decode_csv",
    "decode_excel",
    "decode_upload",
    "encode_csv",
    "export_categories",
    "export_menu_items",
    "category_template",
    "menu_item_template",
    "ImportBatch",
    "MenuImporter",
    "ImportResult",
    "ImportRow",
    "ImportKind",
    "ImportPreview",
    "build_preview",
    "BatchState",
    "RowAction",
    "EntityStore",
    "StoreUnavailableError",
    # Errors
    "ImportRowError",
    "MissingRequiredField",
    "ReferenceNotFound",
    "InvalidFieldValue",
    "StoreOperationFailed",
    "BatchAborted",
    "UnsupportedFileType",
]
