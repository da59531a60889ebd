# -*- coding: utf-8 -*-
"""
importing

Parse uploaded files into records ready for validation and bulk creation.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import csv
import io
import json
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

from openpyxl import load_workbook

from ..core.exceptions import ImportFormatError
from .records import RecordsClient

logger = logging.getLogger(__name__)

UNSUPPORTED_FORMAT = "Unsupported file format. Please use JSON, CSV, XML or XLSX."
NO_RECORDS = "File contains no data records"


class BaseParser:
    """Base parser returning row dictionaries from raw file content."""

    def parse(self, content: bytes) -> list[dict[str, Any]]:
        raise NotImplementedError

    @staticmethod
    def text(content: bytes) -> str:
        return content.decode("utf-8-sig")


class ParserRegistry:
    """Registry mapping file formats to parser classes."""

    def __init__(self) -> None:
        self._parsers: dict[str, type[BaseParser]] = {}

    def register(self, *fmts: str):
        def decorator(cls: type[BaseParser]):
            for fmt in fmts:
                self._parsers[fmt] = cls
            return cls
        return decorator

    @property
    def formats(self) -> tuple[str, ...]:
        return tuple(self._parsers)

    def get(self, fmt: str) -> BaseParser:
        parser_cls = self._parsers.get(fmt.lower())
        if not parser_cls:
            raise ImportFormatError(UNSUPPORTED_FORMAT)
        return parser_cls()


parser_registry = ParserRegistry()


@parser_registry.register("json")
class JsonParser(BaseParser):
    """Read a JSON array; a single object becomes a one-record list."""

    def parse(self, content: bytes) -> list[dict[str, Any]]:
        try:
            data = json.loads(self.text(content))
        except ValueError as exc:
            raise ImportFormatError(f"Invalid JSON: {exc}") from exc
        return data if isinstance(data, list) else [data]


@parser_registry.register("csv")
class CsvParser(BaseParser):
    """Read CSV rows keyed by the header line."""

    def parse(self, content: bytes) -> list[dict[str, Any]]:
        rows = list(csv.reader(io.StringIO(self.text(content).strip())))
        if len(rows) < 2:
            raise ImportFormatError("CSV must have at least a header and one data row")
        headers = [h.strip() for h in rows[0]]
        return [
            {header: (values[index].strip() if index < len(values) else "")
             for index, header in enumerate(headers)}
            for values in rows[1:]
            if any(v.strip() for v in values)
        ]


@parser_registry.register("xml")
class XmlParser(BaseParser):
    """Read ``<item>`` elements; child tags become keys."""

    def parse(self, content: bytes) -> list[dict[str, Any]]:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as exc:
            raise ImportFormatError(f"Invalid XML: {exc}") from exc
        return [
            {child.tag: child.text or "" for child in item}
            for item in root.iter("item")
        ]


@parser_registry.register("xlsx")
class XlsxParser(BaseParser):
    """Read the active worksheet; the first row holds the headers."""

    def parse(self, content: bytes) -> list[dict[str, Any]]:
        wb = load_workbook(io.BytesIO(content), read_only=True)
        try:
            rows = wb.active.iter_rows(values_only=True)
            headers = [str(h) for h in next(rows, ()) if h is not None]
            return [
                dict(zip(headers, values))
                for values in rows
                if any(v not in (None, "") for v in values)
            ]
        finally:
            wb.close()


def detect_format(filename: str) -> str:
    """Return the parser format for ``filename`` based on its extension."""
    fmt = PurePath(filename).suffix.lstrip(".").lower()
    if fmt not in parser_registry.formats:
        raise ImportFormatError(UNSUPPORTED_FORMAT)
    return fmt


def parse_file(
    filename: str, content: bytes, registry: ParserRegistry = parser_registry
) -> list[dict[str, Any]]:
    """Parse ``content`` with the parser matching ``filename``."""
    records = registry.get(detect_format(filename)).parse(content)
    if not records:
        raise ImportFormatError(NO_RECORDS)
    if not all(isinstance(record, dict) for record in records):
        raise ImportFormatError("Every record must be an object")
    return records


@dataclass
class ImportPreview:
    filename: str
    format: str
    records: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return bool(self.records) and not self.errors


class ImportSession:
    """Parse, validate and import one file into a collection."""

    def __init__(self, client: RecordsClient, collection: str) -> None:
        self.client = client
        self.collection = collection

    def preview(self, filename: str, content: bytes) -> ImportPreview:
        try:
            fmt = detect_format(filename)
            records = parse_file(filename, content)
        except ImportFormatError as exc:
            return ImportPreview(filename, PurePath(filename).suffix.lstrip("."), errors=[str(exc)])
        result = self.client.validate(self.collection, records)
        return ImportPreview(filename, fmt, records, list(result.get("errors") or []))

    def commit(self, preview: ImportPreview) -> list[dict[str, Any]]:
        if not preview.valid:
            raise ImportFormatError("; ".join(preview.errors) or NO_RECORDS)
        created = self.client.bulk_create(self.collection, preview.records)
        logger.info(
            "Imported %s of %s records into %s",
            len(created), len(preview.records), self.collection,
        )
        return created


__all__ = [
    "BaseParser",
    "ImportPreview",
    "ImportSession",
    "ParserRegistry",
    "detect_format",
    "parse_file",
    "parser_registry",
]


# The End
