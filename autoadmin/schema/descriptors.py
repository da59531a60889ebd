# -*- coding: utf-8 -*-
"""
descriptors

Schema descriptors served to dashboard clients.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field as PField, model_validator
from pydantic.alias_generators import to_camel


class SemanticType(str, Enum):
    """Closed set of UI/validation categories a field can map to."""

    text = "text"
    email = "email"
    url = "url"
    number = "number"
    boolean = "boolean"
    date = "date"
    select = "select"
    array = "array"
    object = "object"
    weekdays = "weekdays"


class DescriptorModel(BaseModel):
    """Base class emitting camelCase keys and accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_public(self) -> dict[str, Any]:
        """Return the JSON-ready representation without empty members."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class FieldOption(DescriptorModel):
    """Single selectable option of a ``select`` field."""
    value: str
    label: str


class FieldValidation(DescriptorModel):
    """Validation constraints extracted from a field definition."""
    required: bool | None = None
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    enum: list[str] | None = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class FieldDescriptor(DescriptorModel):
    """Unified description of one field of a collection."""
    key: str
    label: str
    semantic_type: SemanticType
    required: bool = False
    placeholder: str | None = None
    description: str | None = None
    options: list[FieldOption] | None = None
    validation: FieldValidation | None = None
    default_value: Any | None = None
    readonly: bool = False
    hidden: bool = False
    array_item_type: SemanticType | None = None
    nested: Optional[list["FieldDescriptor"]] = None

    @model_validator(mode="after")
    def _check_shape(self) -> "FieldDescriptor":
        """Enforce that the semantic type decides the populated shape."""
        shapes = {
            "options": (self.options, SemanticType.select),
            "arrayItemType": (self.array_item_type, SemanticType.array),
            "nested": (self.nested, SemanticType.object),
        }
        for name, (value, owner) in shapes.items():
            if value is not None and self.semantic_type is not owner:
                raise ValueError(
                    f"{name} is only allowed for {owner.value} fields, "
                    f"not {self.semantic_type.value}"
                )
        return self


class ModelSchema(DescriptorModel):
    """Introspected description of one collection."""
    name: str
    display_name: str
    primary_key: str
    timestamps: bool = False
    fields: list[FieldDescriptor] = PField(default_factory=list)

    def field(self, key: str) -> FieldDescriptor | None:
        for f in self.fields:
            if f.key == key:
                return f
        return None

    @property
    def fields_map(self) -> dict[str, FieldDescriptor]:
        """Return a mapping of field keys to descriptors."""
        return {f.key: f for f in self.fields}


FieldDescriptor.model_rebuild()

# The End
