# -*- coding: utf-8 -*-
"""
semantics

Per-concern lookup tables keyed by :class:`SemanticType`.

Each table must cover every semantic type; :func:`exhaustive` checks this at
import time so adding a type without updating a table fails immediately.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping, TypeVar

from .descriptors import SemanticType

T = TypeVar("T")

_CAPITALS = re.compile(r"([A-Z])")


def exhaustive(table: Mapping[SemanticType, T], concern: str) -> Mapping[SemanticType, T]:
    """Return ``table`` after checking that it covers every semantic type."""
    missing = [member.value for member in SemanticType if member not in table]
    if missing:
        raise TypeError(f"{concern} table misses semantic types: {', '.join(missing)}")
    return table


def generate_label(key: str) -> str:
    """Turn ``camelCase`` or ``snake_case`` keys into display labels."""
    spaced = _CAPITALS.sub(r" \1", key).replace("_", " ")
    spaced = " ".join(spaced.split())
    if not spaced:
        return key
    return spaced[0].upper() + spaced[1:]


def capitalize_first(value: str) -> str:
    """Upper-case only the first character of ``value``."""
    return value[:1].upper() + value[1:]


def _number_placeholder(key: str, label: str) -> str:
    lowered = key.lower()
    if "phone" in lowered:
        return "+1234567890"
    if "amount" in lowered or "fee" in lowered:
        return "0.00"
    return "0"


def _enter(key: str, label: str) -> str:
    return f"Enter {label.lower()}"


def _select(key: str, label: str) -> str:
    return f"Select {label.lower()}"


PLACEHOLDERS: Mapping[SemanticType, Callable[[str, str], str]] = exhaustive(
    {
        SemanticType.text: _enter,
        SemanticType.email: lambda key, label: "example@domain.com",
        SemanticType.url: lambda key, label: "https://example.com",
        SemanticType.number: _number_placeholder,
        SemanticType.boolean: _enter,
        SemanticType.date: _enter,
        SemanticType.select: _select,
        SemanticType.array: lambda key, label: f"Enter {label.lower()} and press Enter",
        SemanticType.object: _enter,
        SemanticType.weekdays: _select,
    },
    "placeholder",
)

EMPTY_VALUES: Mapping[SemanticType, Callable[[], Any]] = exhaustive(
    {
        SemanticType.text: str,
        SemanticType.email: str,
        SemanticType.url: str,
        SemanticType.number: lambda: 0,
        SemanticType.boolean: lambda: False,
        SemanticType.date: str,
        SemanticType.select: str,
        SemanticType.array: list,
        SemanticType.object: dict,
        SemanticType.weekdays: dict,
    },
    "empty value",
)

# Flat table cells cannot render structured values.
SORTABLE: Mapping[SemanticType, bool] = exhaustive(
    {
        SemanticType.text: True,
        SemanticType.email: True,
        SemanticType.url: True,
        SemanticType.number: True,
        SemanticType.boolean: True,
        SemanticType.date: True,
        SemanticType.select: True,
        SemanticType.array: False,
        SemanticType.object: False,
        SemanticType.weekdays: True,
    },
    "sortable",
)

FILTER_WIDGETS: Mapping[SemanticType, str] = exhaustive(
    {
        SemanticType.text: "text",
        SemanticType.email: "text",
        SemanticType.url: "text",
        SemanticType.number: "number",
        SemanticType.boolean: "boolean",
        SemanticType.date: "date",
        SemanticType.select: "select",
        SemanticType.array: "text",
        SemanticType.object: "none",
        SemanticType.weekdays: "none",
    },
    "filter widget",
)

WEEKDAYS: tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


def placeholder_for(key: str, semantic_type: SemanticType, label: str | None = None) -> str:
    """Return the default placeholder text for a field."""
    return PLACEHOLDERS[semantic_type](key, label or generate_label(key))


def empty_value(semantic_type: SemanticType) -> Any:
    """Return a fresh empty value appropriate for ``semantic_type``."""
    return EMPTY_VALUES[semantic_type]()


__all__ = [
    "EMPTY_VALUES",
    "FILTER_WIDGETS",
    "PLACEHOLDERS",
    "SORTABLE",
    "WEEKDAYS",
    "capitalize_first",
    "empty_value",
    "exhaustive",
    "generate_label",
    "placeholder_for",
]


# The End
