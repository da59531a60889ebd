# -*- coding: utf-8 -*-
"""
Test import file parsing.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from io import BytesIO

import pytest
from openpyxl import Workbook

from autoadmin.client.importing import (
    NO_RECORDS,
    UNSUPPORTED_FORMAT,
    BaseParser,
    ParserRegistry,
    detect_format,
    parse_file,
    parser_registry,
)
from autoadmin.core.exceptions import ImportFormatError


class TestFormatDetection:
    def test_known_extensions(self) -> None:
        assert detect_format("banks.JSON") == "json"
        assert detect_format("exports/banks.csv") == "csv"
        assert set(parser_registry.formats) == {"json", "csv", "xml", "xlsx"}

    def test_unsupported_extension(self) -> None:
        with pytest.raises(ImportFormatError) as info:
            detect_format("banks.txt")
        assert str(info.value) == UNSUPPORTED_FORMAT

    def test_custom_registry(self) -> None:
        registry = ParserRegistry()

        @registry.register("json")
        class UpperParser(BaseParser):
            def parse(self, content: bytes):
                return [{"name": self.text(content).upper()}]

        assert parse_file("a.json", b"abc", registry) == [{"name": "ABC"}]


class TestParsers:
    def test_json_array_and_single_object(self) -> None:
        assert parse_file("a.json", b'[{"name": "A"}, {"name": "B"}]') == [
            {"name": "A"},
            {"name": "B"},
        ]
        assert parse_file("a.json", b'{"name": "Solo"}') == [{"name": "Solo"}]

    def test_invalid_json(self) -> None:
        with pytest.raises(ImportFormatError, match="^Invalid JSON: "):
            parse_file("a.json", b"{broken")

    def test_csv_with_quotes_and_bom(self) -> None:
        content = '\ufeffname,code\n"Bank, S.A.", BS \n\nShort\n'.encode("utf-8")
        assert parse_file("a.csv", content) == [
            {"name": "Bank, S.A.", "code": "BS"},
            {"name": "Short", "code": ""},
        ]

    def test_csv_needs_a_data_row(self) -> None:
        with pytest.raises(ImportFormatError) as info:
            parse_file("a.csv", b"name,code\n")
        assert str(info.value) == "CSV must have at least a header and one data row"

    def test_xml_items(self) -> None:
        content = (
            b"<items><item><name>Alpha</name><code>AL</code></item>"
            b"<item><name>Beta</name><code/></item></items>"
        )
        assert parse_file("a.xml", content) == [
            {"name": "Alpha", "code": "AL"},
            {"name": "Beta", "code": ""},
        ]

    def test_invalid_xml(self) -> None:
        with pytest.raises(ImportFormatError, match="^Invalid XML: "):
            parse_file("a.xml", b"<items><item>")

    def test_xlsx_rows(self) -> None:
        wb = Workbook()
        ws = wb.active
        ws.append(["name", "code"])
        ws.append(["Alpha", "AL"])
        ws.append([None, None])
        ws.append(["Beta", "BE"])
        buffer = BytesIO()
        wb.save(buffer)
        assert parse_file("a.xlsx", buffer.getvalue()) == [
            {"name": "Alpha", "code": "AL"},
            {"name": "Beta", "code": "BE"},
        ]

    def test_empty_files(self) -> None:
        with pytest.raises(ImportFormatError) as info:
            parse_file("a.json", b"[]")
        assert str(info.value) == NO_RECORDS
        with pytest.raises(ImportFormatError) as info:
            parse_file("a.xml", b"<items/>")
        assert str(info.value) == NO_RECORDS

    def test_records_must_be_objects(self) -> None:
        with pytest.raises(ImportFormatError, match="Every record must be an object"):
            parse_file("a.json", b"[1, 2]")


# The End
