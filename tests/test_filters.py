# -*- coding: utf-8 -*-
"""
Test filter panel state and query building.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import pytest

from autoadmin.client.filters import FilterState, is_active, is_filterable
from autoadmin.schema.descriptors import FieldDescriptor, SemanticType


def make_field(key: str, semantic: SemanticType = SemanticType.text) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=key.title(), semantic_type=semantic)


FIELDS = [
    make_field("id", SemanticType.number),
    make_field("name"),
    make_field("bank_id", SemanticType.number),
    make_field("storeId", SemanticType.number),
    make_field("is_active", SemanticType.boolean),
    make_field("type", SemanticType.select),
    make_field("contact", SemanticType.object),
    make_field("availability", SemanticType.weekdays),
    make_field("valid_from", SemanticType.date),
]


class TestFilterState:
    def test_filterable_fields(self) -> None:
        assert [f.key for f in FIELDS if is_filterable(f)] == [
            "name",
            "is_active",
            "type",
            "valid_from",
        ]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, False),
            ("", False),
            ([], False),
            ({"from": "", "to": None}, False),
            ({"from": "2024-01-01", "to": ""}, True),
            (False, True),
            (0, True),
            ("visa", True),
            (["a"], True),
        ],
    )
    def test_active_values(self, value, expected) -> None:
        assert is_active(value) is expected

    def test_widgets(self) -> None:
        state = FilterState(FIELDS)
        assert state.widget("name") == "text"
        assert state.widget("is_active") == "boolean"
        assert state.widget("type") == "select"

    def test_set_and_clear(self) -> None:
        state = FilterState(FIELDS)
        state.set("name", "visa")
        state.set("type", "")
        assert state.active_count == 1
        state.set("is_active", False)
        assert state.active_filters == {"name": "visa", "is_active": False}
        state.clear("name")
        assert state.active_count == 1
        state.clear_all()
        assert state.active_count == 0

    def test_unknown_or_excluded_field(self) -> None:
        state = FilterState(FIELDS)
        with pytest.raises(KeyError):
            state.set("bank_id", 1)

    def test_query(self) -> None:
        state = FilterState(FIELDS)
        state.set("is_active", True)
        state.set("type", ["credit", "debit"])
        state.set("name", "")
        assert state.to_query(page=2, limit=25, sort="name", order="desc", search="") == {
            "page": "2",
            "limit": "25",
            "sort": "name",
            "order": "desc",
            "is_active": "true",
            "type": ["credit", "debit"],
        }


# The End
