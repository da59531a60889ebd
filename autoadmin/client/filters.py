# -*- coding: utf-8 -*-
"""
filters

Filter panel state translated into list query parameters.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..schema.descriptors import FieldDescriptor
from ..schema.semantics import FILTER_WIDGETS


def is_filterable(field: FieldDescriptor) -> bool:
    """Return ``True`` when ``field`` gets a filter widget."""
    key = field.key
    if key == "id" or "Id" in key or "_id" in key:
        return False
    return FILTER_WIDGETS[field.semantic_type] != "none"


def is_active(value: Any) -> bool:
    """Return ``True`` when a filter value narrows the result set."""
    if value is None or value == "":
        return False
    if isinstance(value, (list, tuple)):
        return bool(value)
    if isinstance(value, Mapping):
        return any(is_active(item) for item in value.values())
    return True


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FilterState:
    """Values entered in the filter panel of one collection."""

    def __init__(self, fields: Iterable[FieldDescriptor]) -> None:
        self.fields = {f.key: f for f in fields if is_filterable(f)}
        self.values: dict[str, Any] = {}

    def widget(self, key: str) -> str:
        return FILTER_WIDGETS[self.fields[key].semantic_type]

    def set(self, key: str, value: Any) -> None:
        if key not in self.fields:
            raise KeyError(f"Field '{key}' is not filterable")
        self.values[key] = value

    def clear(self, key: str) -> None:
        self.values.pop(key, None)

    def clear_all(self) -> None:
        self.values.clear()

    @property
    def active_filters(self) -> dict[str, Any]:
        return {key: value for key, value in self.values.items() if is_active(value)}

    @property
    def active_count(self) -> int:
        return len(self.active_filters)

    def to_query(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        sort: str | None = None,
        order: str | None = None,
        search: str | None = None,
    ) -> dict[str, Any]:
        """Return query parameters for the list endpoint.

        List values are sent as repeated keys and match any member.
        """
        query: dict[str, Any] = {}
        for name, value in (
            ("page", page),
            ("limit", limit),
            ("sort", sort),
            ("order", order),
            ("search", search),
        ):
            if value not in (None, ""):
                query[name] = str(value)
        for key, value in self.active_filters.items():
            if isinstance(value, Mapping):
                # Range filters have no server-side lookup.
                continue
            if isinstance(value, (list, tuple)):
                query[key] = [_query_value(item) for item in value]
            else:
                query[key] = _query_value(value)
        return query


__all__ = ["FilterState", "is_active", "is_filterable"]


# The End
