"""Tests for the CSV/Excel codec."""

import io

import pandas as pd
import pytest

from cafe_admin.imports.codec import decode_csv, decode_excel, decode_upload, encode_csv
from cafe_admin.imports.errors import UnsupportedFileType


class TestDecodeCsv:
    """Tests for CSV decoding."""

    def test_decode_basic(self):
        """Test plain rows split on commas and line breaks."""
        rows = decode_csv("name,price\nLatte,3500\nMocha,4000")

        assert rows == [["name", "price"], ["Latte", "3500"], ["Mocha", "4000"]]

    def test_decode_quoted_comma(self):
        """Test a comma inside quotes stays in the cell."""
        assert decode_csv('a,"b,c",d') == [["a", "b,c", "d"]]

    def test_decode_doubled_quotes(self):
        """Test doubled quotes inside a quoted cell become one quote."""
        assert decode_csv('x,"say ""hi""",y') == [["x", 'say "hi"', "y"]]

    def test_decode_trims_cells(self):
        """Test surrounding whitespace is trimmed."""
        assert decode_csv("  Latte ,  3500  ") == [["Latte", "3500"]]

    def test_decode_drops_blank_rows(self):
        """Test blank lines and all-empty rows are dropped."""
        rows = decode_csv("name,price\n\nLatte,3500\n , \n\n")

        assert rows == [["name", "price"], ["Latte", "3500"]]

    def test_decode_crlf(self):
        """Test Windows line endings."""
        rows = decode_csv("name,price\r\nLatte,3500\r\n")

        assert rows == [["name", "price"], ["Latte", "3500"]]

    def test_decode_lone_cr(self):
        """Test old Mac line endings split rows."""
        rows = decode_csv("name,price\rLatte,3500\rMocha,3800")

        assert rows == [["name", "price"], ["Latte", "3500"], ["Mocha", "3800"]]

    def test_decode_cr_inside_quotes(self):
        """Test carriage returns inside quotes stay in the cell."""
        rows = decode_csv('name,description\rLatte,"Milk\r\nfoam"')

        assert rows == [["name", "description"], ["Latte", "Milk\r\nfoam"]]

    def test_decode_strips_bom(self):
        """Test a UTF-8 BOM does not leak into the first header."""
        rows = decode_csv("\ufeffname,price\nLatte,3500")

        assert rows[0] == ["name", "price"]

    def test_decode_quoted_newline(self):
        """Test a line break inside quotes stays in the cell."""
        rows = decode_csv('name,description\nLatte,"Espresso\nwith milk"')

        assert rows == [["name", "description"], ["Latte", "Espresso\nwith milk"]]

    def test_decode_missing_trailing_cells(self):
        """Test short rows are kept as-is."""
        assert decode_csv("a,b,c\n1") == [["a", "b", "c"], ["1"]]

    def test_decode_unbalanced_quote_does_not_raise(self):
        """Test malformed quoting degrades instead of failing."""
        rows = decode_csv('a,"b,c\nd,e')

        assert rows == [["a", "b,c\nd,e"]]

    def test_decode_empty(self):
        """Test empty input."""
        assert decode_csv("") == []
        assert decode_csv("\n\n") == []


class TestEncodeCsv:
    """Tests for CSV encoding."""

    def test_encode_plain(self):
        """Test cells without special characters are not quoted."""
        text = encode_csv(["name", "price"], [["Latte", "3500"]])

        assert text == "name,price\nLatte,3500"

    def test_encode_escapes_special_cells(self):
        """Test commas, quotes and newlines are quoted."""
        text = encode_csv(["a", "b", "c"], [["x,y", 'say "hi"', "line\nbreak"]])

        assert text == 'a,b,c\n"x,y","say ""hi""","line\nbreak"'

    def test_encode_no_trailing_newline(self):
        """Test output has no trailing newline."""
        assert not encode_csv(["a"], [["1"], ["2"]]).endswith("\n")

    def test_encode_header_only(self):
        """Test a header with no rows."""
        assert encode_csv(["id", "name"], []) == "id,name"

    def test_round_trip(self):
        """Test decode reverses encode."""
        headers = ["id", "name", "description", "allergens"]
        rows = [
            ["1", "Latte", 'Our "house" latte, with oat milk', "Milk"],
            ["2", "Croissant", "Flaky\nbuttery", "Gluten;Milk"],
            ["3", "Americano", "", ""],
        ]

        assert decode_csv(encode_csv(headers, rows)) == [headers, *rows]


class TestDecodeUpload:
    """Tests for decoding uploaded files."""

    def test_decode_csv_upload(self):
        """Test CSV bytes with a BOM."""
        rows = decode_upload("menu.csv", b"\xef\xbb\xbfname,price\nLatte,3500")

        assert rows == [["name", "price"], ["Latte", "3500"]]

    def test_decode_csv_upload_uppercase_extension(self):
        """Test the extension check is case-insensitive."""
        rows = decode_upload("MENU.CSV", "name\nCafé".encode())

        assert rows == [["name"], ["Café"]]

    def test_unsupported_extension(self):
        """Test other formats are rejected."""
        with pytest.raises(UnsupportedFileType):
            decode_upload("menu.pdf", b"%PDF")

    def test_decode_excel(self):
        """Test the first sheet of a workbook is read as strings."""
        df = pd.DataFrame(
            [["Latte", "Coffee", "3500"], ["Mocha", "Coffee", None]],
            columns=["name", "category_name", "price"],
        )
        buffer = io.BytesIO()
        df.to_excel(buffer, index=False)

        rows = decode_excel(buffer.getvalue())

        assert rows == [
            ["name", "category_name", "price"],
            ["Latte", "Coffee", "3500"],
            ["Mocha", "Coffee", ""],
        ]

    def test_decode_excel_upload(self):
        """Test .xlsx uploads go through the Excel reader."""
        df = pd.DataFrame([["Coffee", "Café"]], columns=["name", "name_es"])
        buffer = io.BytesIO()
        df.to_excel(buffer, index=False)

        rows = decode_upload("categories.xlsx", buffer.getvalue())

        assert rows == [["name", "name_es"], ["Coffee", "Café"]]
