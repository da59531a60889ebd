# -*- coding: utf-8 -*-
"""
export

Render exported records as JSON-ready data or CSV text.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Sequence


class ExportFormat(str, Enum):
    """Supported export formats."""

    json = "json"
    csv = "csv"


@dataclass(frozen=True)
class ExportResult:
    """Outcome of an export: the records and, for CSV, the rendered file."""

    format: ExportFormat
    records: list[dict[str, Any]]
    content: str | None = None
    filename: str | None = None


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return _cell(value.value)
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return _quote(json.dumps(value, default=str))


def render_csv(records: Sequence[dict[str, Any]], columns: Iterable[str] | None = None) -> str:
    """Return ``records`` as CSV text.

    The header is taken from ``columns`` or from the keys of the first record
    and is written unquoted. String values are always quoted with embedded
    quotes doubled. Rows are joined with ``\\n``.
    """
    if not records:
        return ""
    header = list(columns) if columns else list(records[0].keys())
    lines = [",".join(header)]
    for record in records:
        lines.append(",".join(_cell(record.get(key)) for key in header))
    return "\n".join(lines)


__all__ = ["ExportFormat", "ExportResult", "render_csv"]


# The End
