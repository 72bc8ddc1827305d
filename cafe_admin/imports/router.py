"""Menu import/export API routes."""

import logging
from typing import Annotated
from zipfile import BadZipFile

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.responses import Response

from cafe_admin.config import Settings
from cafe_admin.dependencies import AppSettings, MenuServiceDep
from cafe_admin.imports.codec import decode_upload
from cafe_admin.imports.errors import UnsupportedFileType
from cafe_admin.imports.exporters import (
    category_template,
    export_categories,
    export_menu_items,
    menu_item_template,
)
from cafe_admin.imports.parsers import build_preview
from cafe_admin.imports.schemas import ImportKind, ImportPreview, ImportResult
from cafe_admin.imports.service import MenuImporter

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_upload(file: UploadFile, settings: Settings) -> list[list[str]]:
    """Read and decode an uploaded CSV or Excel file.

    Args:
        file: Uploaded file.
        settings: Application settings (upload size limit).

    Returns:
        list[list[str]]: Decoded rows, header first.

    Raises:
        HTTPException: If the file is too large, unreadable or
            in an unsupported format.
    """
    content = await file.read()
    if len(content) > settings.import_max_file_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {settings.import_max_file_bytes} bytes",
        )

    try:
        rows = decode_upload(file.filename or "", content)
    except UnsupportedFileType as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (ValueError, BadZipFile) as e:
        logger.warning(f"Could not read spreadsheet {file.filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not read spreadsheet",
        )

    return rows


def _csv_response(content: str, filename: str, settings: Settings) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={settings.csv_export_prefix}{filename}"
        },
    )


@router.post("/preview/{kind}", response_model=ImportPreview)
async def preview_import(
    kind: ImportKind,
    file: Annotated[UploadFile, File(description="CSV or Excel file")],
    settings: AppSettings,
) -> ImportPreview:
    """Decode a spreadsheet and show what an import would read.

    Nothing is written. The response lists the headers, the number of data
    rows, the first few rows and any missing required columns.

    Args:
        kind: Whether the sheet holds categories or menu items.
        file: Uploaded CSV or Excel file.
        settings: Application settings.

    Returns:
        ImportPreview: Preview of the decoded file.
    """
    rows = await _read_upload(file, settings)
    preview = build_preview(rows, kind)
    logger.info(
        f"Preview of {kind.value} from {file.filename}: {preview.row_count} row(s), "
        f"can_import={preview.can_import}"
    )
    return preview


@router.post("/import/categories", response_model=ImportResult)
async def import_categories(
    file: Annotated[UploadFile, File(description="CSV or Excel file")],
    service: MenuServiceDep,
    settings: AppSettings,
) -> ImportResult:
    """Create or update categories from a spreadsheet.

    Rows match existing categories by ``id`` or case-insensitive name.
    Failing rows are reported in the result and do not stop the import.

    Args:
        file: Uploaded CSV or Excel file.
        service: Menu service (the store).
        settings: Application settings.

    Returns:
        ImportResult: Import summary.
    """
    rows = await _read_upload(file, settings)
    logger.info(f"Category import from {file.filename}: {max(len(rows) - 1, 0)} row(s)")

    importer = MenuImporter(service)
    return importer.import_category_rows(rows, service.list_categories())


@router.post("/import/items", response_model=ImportResult)
async def import_menu_items(
    file: Annotated[UploadFile, File(description="CSV or Excel file")],
    service: MenuServiceDep,
    settings: AppSettings,
) -> ImportResult:
    """Create or update menu items from a spreadsheet.

    Each row names its category by ``category_id`` or ``category_name``
    (either language). Rows match existing items by ``id`` or by category
    and case-insensitive name.

    Args:
        file: Uploaded CSV or Excel file.
        service: Menu service (the store).
        settings: Application settings.

    Returns:
        ImportResult: Import summary.
    """
    rows = await _read_upload(file, settings)
    logger.info(f"Menu item import from {file.filename}: {max(len(rows) - 1, 0)} row(s)")

    importer = MenuImporter(service)
    return importer.import_menu_item_rows(
        rows,
        service.list_categories(),
        service.list_menu_items(),
    )


@router.get("/export/categories")
async def download_categories(service: MenuServiceDep, settings: AppSettings):
    """Download all categories as CSV."""
    content = export_categories(service.list_categories())
    return _csv_response(content, "categories.csv", settings)


@router.get("/export/items")
async def download_menu_items(service: MenuServiceDep, settings: AppSettings):
    """Download all menu items as CSV."""
    content = export_menu_items(service.list_menu_items(), service.list_categories())
    return _csv_response(content, "menu_items.csv", settings)


@router.get("/template/categories")
async def download_category_template(settings: AppSettings):
    """Download the category import template."""
    return _csv_response(category_template(), "categories_template.csv", settings)


@router.get("/template/items")
async def download_menu_item_template(settings: AppSettings):
    """Download the menu item import template."""
    return _csv_response(menu_item_template(), "menu_items_template.csv", settings)
