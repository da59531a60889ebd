# -*- coding: utf-8 -*-
"""
views

Field lists for tables, forms and detail pages derived from one schema.

Descriptors are returned as-is; the views differ only in membership and
order.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from ..schema.descriptors import FieldDescriptor, ModelSchema, SemanticType

IDENTITY_KEYS = frozenset({"id", "_id"})
REVISION_KEYS = frozenset({"__v"})
SOFT_DELETE_KEYS = frozenset({"deleted", "is_deleted", "isDeleted", "deleted_at", "deletedAt"})
BOOKKEEPING_KEYS = IDENTITY_KEYS | REVISION_KEYS | SOFT_DELETE_KEYS

TIMESTAMP_KEYS = frozenset({"created_at", "updated_at", "createdAt", "updatedAt"})
LONG_TEXT_KEYS = frozenset({"description", "content", "metadata"})

PRIORITY_KEYS: tuple[str, ...] = ("name", "title", "email", "status")
METADATA_KEYS: tuple[str, ...] = (
    "created_at",
    "updated_at",
    "deleted_at",
    "created_by",
    "updated_by",
    "deleted_by",
)

_COMPLEX_TYPES = (SemanticType.object, SemanticType.array)


def get_table_fields(schema: ModelSchema) -> list[FieldDescriptor]:
    """Return flat columns ordered as priority, regular, then metadata fields."""
    candidates = [
        f
        for f in schema.fields
        if f.key not in BOOKKEEPING_KEYS
        and f.key not in LONG_TEXT_KEYS
        and f.semantic_type not in _COMPLEX_TYPES
    ]
    by_key = {f.key: f for f in candidates}
    priority = [by_key[key] for key in PRIORITY_KEYS if key in by_key]
    metadata = [by_key[key] for key in METADATA_KEYS if key in by_key]
    banded = set(PRIORITY_KEYS) | set(METADATA_KEYS)
    regular = [f for f in candidates if f.key not in banded]
    return priority + regular + metadata


def is_reference_key(key: str) -> bool:
    """Return ``True`` for keys naming a raw foreign key column."""
    return key.endswith("_id") or key.endswith("Id")


def get_form_fields(schema: ModelSchema) -> list[FieldDescriptor]:
    """Return the fields an operator edits in a create or update form."""
    return [
        f
        for f in schema.fields
        if f.key not in BOOKKEEPING_KEYS
        and f.key not in TIMESTAMP_KEYS
        and not is_reference_key(f.key)
        and not f.readonly
        and not f.hidden
    ]


def get_detail_fields(schema: ModelSchema) -> list[FieldDescriptor]:
    """Return every field except internal bookkeeping."""
    return [f for f in schema.fields if f.key not in BOOKKEEPING_KEYS]


__all__ = [
    "BOOKKEEPING_KEYS",
    "METADATA_KEYS",
    "PRIORITY_KEYS",
    "get_detail_fields",
    "get_form_fields",
    "get_table_fields",
    "is_reference_key",
]


# The End
