# -*- coding: utf-8 -*-
"""
fields

Tortoise field types describing structured JSON columns.

An :class:`EmbeddedField` stores a sub-record shaped by a pydantic model, an
:class:`ArrayField` stores a list of scalars or sub-records. A plain
``JSONField`` remains the untyped "any value" column.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from tortoise import fields
from tortoise.exceptions import ValidationError
from tortoise.validators import Validator


def _first_error(exc: PydanticValidationError) -> str:
    """Return a compact message for the first pydantic error."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


class StructureValidator(Validator):
    """Validate JSON column values through a pydantic type adapter."""

    def __init__(self, annotation: Any) -> None:
        self.annotation = annotation
        self._adapter: TypeAdapter | None = None

    def __call__(self, value: Any) -> None:
        if self._adapter is None:
            self._adapter = TypeAdapter(self.annotation)
        try:
            self._adapter.validate_python(value)
        except PydanticValidationError as exc:
            raise ValidationError(_first_error(exc)) from exc


class EmbeddedField(fields.JSONField):
    """JSON column holding one sub-record described by ``schema``."""

    def __init__(self, schema: type[BaseModel], **kwargs: Any) -> None:
        self.schema = schema
        validators = list(kwargs.pop("validators", None) or [])
        validators.append(StructureValidator(schema))
        super().__init__(validators=validators, **kwargs)


class ArrayField(fields.JSONField):
    """JSON column holding a list of ``item`` values."""

    def __init__(self, item: Any = str, **kwargs: Any) -> None:
        self.item = item
        validators = list(kwargs.pop("validators", None) or [])
        validators.append(StructureValidator(list[item]))
        kwargs.setdefault("default", list)
        super().__init__(validators=validators, **kwargs)

    @property
    def item_schema(self) -> type[BaseModel] | None:
        """Return the sub-record model when items are structured."""
        if isinstance(self.item, type) and issubclass(self.item, BaseModel):
            return self.item
        return None


__all__ = ["ArrayField", "EmbeddedField", "StructureValidator"]


# The End
