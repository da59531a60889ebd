# -*- coding: utf-8 -*-
"""
sources

Uniform read access to field definitions.

Model columns come from Tortoise metadata; embedded sub-records come from the
pydantic models attached to :class:`~autoadmin.fields.EmbeddedField` and
:class:`~autoadmin.fields.ArrayField`. Both are exposed through
:class:`FieldSource` so introspection can recurse without caring which layer
a field belongs to.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import datetime as dt
import types
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, Literal, Union, get_args, get_origin

import annotated_types
from pydantic import BaseModel
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined
from tortoise import fields, validators as tortoise_validators
from tortoise.models import Model

from ..fields import ArrayField, EmbeddedField

TIMESTAMP_KEYS = frozenset({"created_at", "updated_at", "createdAt", "updatedAt"})


class StorageType(str, Enum):
    """Storage-level categories a field definition may belong to."""

    string = "string"
    number = "number"
    boolean = "boolean"
    date = "date"
    array = "array"
    reference = "reference"
    mixed = "mixed"
    embedded = "embedded"


@dataclass(frozen=True)
class ValidatorSpec:
    """One declared validator: its rule ``kind`` and the limit it enforces."""

    kind: Literal["required", "minlength", "maxlength", "min", "max", "regexp", "enum"]
    limit: Any = None


@dataclass(frozen=True)
class SchemaOptions:
    """Constraints declared directly on the field definition."""

    required: bool = False
    min: Any = None
    max: Any = None
    minlength: int | None = None
    maxlength: int | None = None
    enum: tuple[str, ...] | None = None
    default: Any = None
    description: str | None = None


class FieldSource(ABC):
    """Read-only view over one field definition."""

    name: str

    @property
    @abstractmethod
    def storage_type(self) -> StorageType:
        """Return the storage category of the field."""

    @abstractmethod
    def validators(self) -> list[ValidatorSpec]:
        """Return the declared validators in declaration order."""

    @property
    @abstractmethod
    def options(self) -> SchemaOptions:
        """Return field-level constraints."""

    @property
    def reference(self) -> type[Model] | None:
        """Return the referenced model for relation fields."""
        return None

    @property
    def readonly(self) -> bool:
        """Return ``True`` for fields managed by the store."""
        return self.name in TIMESTAMP_KEYS

    @abstractmethod
    def sub_fields(self) -> list["FieldSource"] | None:
        """Return the embedded sub-structure, directly or through array items."""

    @abstractmethod
    def has_structured_items(self) -> bool:
        """Return ``True`` when an array holds sub-records."""


# === Tortoise columns ===

_NUMBER_FIELDS: tuple[type, ...] = (
    fields.IntField,
    fields.BigIntField,
    fields.SmallIntField,
    fields.FloatField,
    fields.DecimalField,
)
_DATE_FIELDS: tuple[type, ...] = (fields.DateField, fields.DatetimeField)


def _enum_values(enum_type: type[Enum] | None) -> tuple[str, ...] | None:
    if enum_type is None:
        return None
    return tuple(str(member.value) for member in enum_type)


class TortoiseFieldSource(FieldSource):
    """Field source backed by a Tortoise field instance."""

    def __init__(self, name: str, field: fields.Field) -> None:
        self.name = name
        self.field = field

    @classmethod
    def iter_model(cls, model: type[Model]) -> Iterator["TortoiseFieldSource"]:
        """Yield sources for the user-facing columns of ``model``.

        The primary key, reverse relations and the raw ``<relation>_id``
        columns backing foreign keys are skipped.
        """
        meta = model._meta
        fk_columns = {
            getattr(f, "source_field", None) or f"{name}_id"
            for name, f in meta.fields_map.items()
            if isinstance(f, fields.relational.ForeignKeyFieldInstance)
        }
        for name, f in meta.fields_map.items():
            if name == meta.pk_attr or name in fk_columns:
                continue
            if isinstance(f, fields.relational.BackwardFKRelation):
                continue
            yield cls(name, f)

    @property
    def storage_type(self) -> StorageType:
        f = self.field
        if isinstance(f, EmbeddedField):
            return StorageType.embedded
        if isinstance(f, (ArrayField, fields.relational.ManyToManyFieldInstance)):
            return StorageType.array
        if isinstance(f, fields.relational.ForeignKeyFieldInstance):
            return StorageType.reference
        if isinstance(f, fields.JSONField):
            return StorageType.mixed
        if isinstance(f, fields.BooleanField):
            return StorageType.boolean
        if isinstance(f, _NUMBER_FIELDS):
            return StorageType.number
        if isinstance(f, _DATE_FIELDS):
            return StorageType.date
        return StorageType.string

    def validators(self) -> list[ValidatorSpec]:
        out: list[ValidatorSpec] = []
        for v in getattr(self.field, "validators", None) or []:
            if isinstance(v, tortoise_validators.MinLengthValidator):
                out.append(ValidatorSpec("minlength", v.min_length))
            elif isinstance(v, tortoise_validators.MaxLengthValidator):
                out.append(ValidatorSpec("maxlength", v.max_length))
            elif isinstance(v, tortoise_validators.MinValueValidator):
                out.append(ValidatorSpec("min", v.min_value))
            elif isinstance(v, tortoise_validators.MaxValueValidator):
                out.append(ValidatorSpec("max", v.max_value))
            elif isinstance(v, tortoise_validators.RegexValidator):
                out.append(ValidatorSpec("regexp", v.regex.pattern))
        return out

    @property
    def options(self) -> SchemaOptions:
        f = self.field
        raw_default = getattr(f, "default", None)
        default = None if callable(raw_default) else raw_default
        if isinstance(default, Enum):
            default = default.value
        required = (
            not getattr(f, "null", False)
            and raw_default is None
            and not getattr(f, "pk", False)
            and not getattr(f, "generated", False)
            and not getattr(f, "auto_now", False)
            and not getattr(f, "auto_now_add", False)
            and not isinstance(f, fields.relational.ManyToManyFieldInstance)
        )
        return SchemaOptions(
            required=required,
            maxlength=getattr(f, "max_length", None),
            enum=_enum_values(getattr(f, "enum_type", None)),
            default=default,
            description=getattr(f, "description", None) or None,
        )

    @property
    def reference(self) -> type[Model] | None:
        if isinstance(self.field, fields.relational.ForeignKeyFieldInstance):
            related = getattr(self.field, "related_model", None)
            if isinstance(related, type):
                return related
        return None

    @property
    def readonly(self) -> bool:
        f = self.field
        return (
            super().readonly
            or bool(getattr(f, "auto_now", False))
            or bool(getattr(f, "auto_now_add", False))
        )

    def sub_fields(self) -> list[FieldSource] | None:
        f = self.field
        schema: type[BaseModel] | None = None
        if isinstance(f, EmbeddedField):
            schema = f.schema
        elif isinstance(f, ArrayField):
            schema = f.item_schema
        if schema is None:
            return None
        return list(PydanticFieldSource.iter_schema(schema))

    def has_structured_items(self) -> bool:
        return isinstance(self.field, ArrayField) and self.field.item_schema is not None


# === Pydantic sub-records ===

_UNION_TYPES: tuple[Any, ...] = (Union, types.UnionType)


def _unwrap_optional(annotation: Any) -> Any:
    """Strip ``None`` from ``Optional[X]`` style annotations."""
    if get_origin(annotation) in _UNION_TYPES:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


class PydanticFieldSource(FieldSource):
    """Field source backed by a pydantic ``FieldInfo``."""

    def __init__(self, name: str, info: FieldInfo) -> None:
        self.name = name
        self.info = info
        self.annotation = _unwrap_optional(info.annotation)

    @classmethod
    def iter_schema(cls, schema: type[BaseModel]) -> Iterator["PydanticFieldSource"]:
        """Yield sources for every field declared on ``schema``."""
        for name, info in schema.model_fields.items():
            yield cls(info.alias or name, info)

    def _item_annotation(self) -> Any:
        args = get_args(self.annotation)
        return _unwrap_optional(args[0]) if args else Any

    @property
    def storage_type(self) -> StorageType:
        ann = self.annotation
        origin = get_origin(ann)
        if _is_model(ann):
            return StorageType.embedded
        if origin in (list, tuple, set, frozenset) or ann in (list, tuple, set):
            return StorageType.array
        if origin is dict or ann in (dict, Any, object):
            return StorageType.mixed
        if ann is bool:
            return StorageType.boolean
        if ann in (int, float, Decimal):
            return StorageType.number
        if ann in (dt.datetime, dt.date, dt.time):
            return StorageType.date
        return StorageType.string

    def validators(self) -> list[ValidatorSpec]:
        out: list[ValidatorSpec] = []
        for meta in self.info.metadata:
            if isinstance(meta, annotated_types.MinLen):
                out.append(ValidatorSpec("minlength", meta.min_length))
            elif isinstance(meta, annotated_types.MaxLen):
                out.append(ValidatorSpec("maxlength", meta.max_length))
            elif isinstance(meta, annotated_types.Ge):
                out.append(ValidatorSpec("min", meta.ge))
            elif isinstance(meta, annotated_types.Gt):
                out.append(ValidatorSpec("min", meta.gt))
            elif isinstance(meta, annotated_types.Le):
                out.append(ValidatorSpec("max", meta.le))
            elif isinstance(meta, annotated_types.Lt):
                out.append(ValidatorSpec("max", meta.lt))
            elif getattr(meta, "pattern", None):
                out.append(ValidatorSpec("regexp", str(meta.pattern)))
        return out

    def _enum(self) -> tuple[str, ...] | None:
        ann = self.annotation
        if get_origin(ann) is Literal:
            return tuple(str(arg) for arg in get_args(ann))
        if isinstance(ann, type) and issubclass(ann, Enum):
            return _enum_values(ann)
        return None

    @property
    def options(self) -> SchemaOptions:
        default = self.info.default
        if default is PydanticUndefined or callable(default):
            default = None
        if isinstance(default, Enum):
            default = default.value
        return SchemaOptions(
            required=self.info.is_required(),
            enum=self._enum(),
            default=default,
            description=self.info.description,
        )

    def sub_fields(self) -> list[FieldSource] | None:
        if _is_model(self.annotation):
            return list(PydanticFieldSource.iter_schema(self.annotation))
        if self.storage_type is StorageType.array:
            item = self._item_annotation()
            if _is_model(item):
                return list(PydanticFieldSource.iter_schema(item))
        return None

    def has_structured_items(self) -> bool:
        return self.storage_type is StorageType.array and _is_model(self._item_annotation())


__all__ = [
    "FieldSource",
    "PydanticFieldSource",
    "SchemaOptions",
    "StorageType",
    "TIMESTAMP_KEYS",
    "TortoiseFieldSource",
    "ValidatorSpec",
]


# The End
