"""Delimited text and spreadsheet codec for menu import/export.

Rows are plain lists of strings; nothing here knows about menu entities.
"""

import csv
import io

import pandas as pd

from cafe_admin.imports.errors import UnsupportedFileType

CSV_EXTENSIONS = (".csv",)
EXCEL_EXTENSIONS = (".xlsx",)


def _is_blank_row(row: list[str]) -> bool:
    return not any(cell for cell in row)


def decode_csv(text: str) -> list[list[str]]:
    """Split CSV text into rows of trimmed cells.

    A single "inside quotes" flag drives the scan: a quote toggles it, a
    doubled quote inside a quoted cell is a literal quote, and commas and
    line breaks only separate cells and rows outside quotes. A line break is
    ``\\n``, ``\\r\\n`` or a lone ``\\r``. Unbalanced quoting never raises; it
    just yields best-effort cell boundaries.
    Rows whose cells are all empty are dropped.

    Args:
        text: CSV content.

    Returns:
        list[list[str]]: Decoded rows, header included.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    rows: list[list[str]] = []
    row: list[str] = []
    cell: list[str] = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if char == '"':
            if in_quotes and i + 1 < length and text[i + 1] == '"':
                cell.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            row.append("".join(cell).strip())
            cell = []
        elif char in "\r\n" and not in_quotes:
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
            row.append("".join(cell).strip())
            if not _is_blank_row(row):
                rows.append(row)
            row, cell = [], []
        else:
            cell.append(char)
        i += 1

    row.append("".join(cell).strip())
    if not _is_blank_row(row):
        rows.append(row)
    return rows


def encode_csv(headers: list[str], rows: list[list[str]]) -> str:
    """Serialize a header and rows to CSV text.

    Cells containing a comma, quote or line break are quoted with internal
    quotes doubled. Lines are joined with ``\\n`` without a trailing newline.

    Args:
        headers: Header cells.
        rows: Data rows.

    Returns:
        str: CSV content.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(row)
    return output.getvalue().removesuffix("\n")


def _excel_cell(value) -> str:
    if pd.isna(value):
        return ""
    return str(value).strip()


def decode_excel(content: bytes) -> list[list[str]]:
    """Read the first sheet of an Excel workbook into rows of strings.

    Args:
        content: Workbook bytes.

    Returns:
        list[list[str]]: Decoded rows, header included, blank rows dropped.
    """
    df = pd.read_excel(io.BytesIO(content), header=None, dtype=str, engine="openpyxl")
    rows = []
    for values in df.itertuples(index=False, name=None):
        row = [_excel_cell(value) for value in values]
        if not _is_blank_row(row):
            rows.append(row)
    return rows


def decode_upload(filename: str, content: bytes) -> list[list[str]]:
    """Decode an uploaded CSV or Excel file by its extension.

    Args:
        filename: Original filename.
        content: Raw file bytes.

    Returns:
        list[list[str]]: Decoded rows, header included.

    Raises:
        UnsupportedFileType: If the extension is not CSV or Excel.
    """
    name = filename.lower()
    if name.endswith(CSV_EXTENSIONS):
        return decode_csv(content.decode("utf-8-sig", errors="replace"))
    if name.endswith(EXCEL_EXTENSIONS):
        return decode_excel(content)
    raise UnsupportedFileType("Unsupported file format. Use CSV or Excel (.xlsx)")
