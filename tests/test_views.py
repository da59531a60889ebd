# -*- coding: utf-8 -*-
"""
Test table, form and detail field selection.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from autoadmin.client.views import get_detail_fields, get_form_fields, get_table_fields
from autoadmin.schema.descriptors import FieldDescriptor, ModelSchema, SemanticType


def make_field(key: str, semantic: SemanticType = SemanticType.text, **extra) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=key.title(), semantic_type=semantic, **extra)


class TestFieldViews:
    schema: ModelSchema

    @classmethod
    def setup_class(cls) -> None:
        cls.schema = ModelSchema(
            name="offer",
            display_name="Offer",
            primary_key="id",
            timestamps=True,
            fields=[
                make_field("id", SemanticType.number),
                make_field("__v", SemanticType.number),
                make_field("created_at", SemanticType.date, readonly=True),
                make_field("discount", SemanticType.number),
                make_field("description"),
                make_field("status", SemanticType.select),
                make_field("title"),
                make_field("terms", SemanticType.array, array_item_type=SemanticType.text),
                make_field("location", SemanticType.object),
                make_field("store_id", SemanticType.number),
                make_field("updated_at", SemanticType.date, readonly=True),
                make_field("deleted", SemanticType.boolean),
                make_field("secret", hidden=True),
                make_field("name"),
                make_field("availability", SemanticType.weekdays),
            ],
        )

    def keys(self, fields) -> list[str]:
        return [f.key for f in fields]

    def test_table_fields_are_banded(self) -> None:
        assert self.keys(get_table_fields(self.schema)) == [
            "name",
            "title",
            "status",
            "discount",
            "store_id",
            "secret",
            "availability",
            "created_at",
            "updated_at",
        ]

    def test_form_fields(self) -> None:
        assert self.keys(get_form_fields(self.schema)) == [
            "discount",
            "description",
            "status",
            "title",
            "terms",
            "location",
            "name",
            "availability",
        ]

    def test_detail_fields(self) -> None:
        keys = self.keys(get_detail_fields(self.schema))
        assert "id" not in keys
        assert "__v" not in keys
        assert "deleted" not in keys
        assert keys[:2] == ["created_at", "discount"]
        assert {"secret", "store_id", "location"} <= set(keys)

    def test_descriptors_are_passed_through(self) -> None:
        table = get_table_fields(self.schema)
        assert table[0] is self.schema.field("name")


# The End
