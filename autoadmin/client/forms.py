# -*- coding: utf-8 -*-
"""
forms

Data shaping for schema driven create and edit forms.

``FormContractBuilder`` turns form field descriptors into a pydantic model
used to validate submissions. ``FormState`` keeps the editable values of one
form, including array items and object text, and produces the payload sent to
the create or update endpoints.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Annotated, Any, Callable, Iterable, Literal, Mapping, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    create_model,
)

from ..core.exceptions import ValidationFailedError
from ..schema.descriptors import FieldDescriptor, SemanticType
from ..schema.semantics import WEEKDAYS, empty_value, exhaustive

_URL = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    _URL.validate_python(value)
    return value


def _length_bounds(field: FieldDescriptor) -> dict[str, Any]:
    rules = field.validation
    if rules is None:
        return {}
    bounds: dict[str, Any] = {}
    if rules.min is not None:
        bounds["min_length"] = int(rules.min)
    if rules.max is not None:
        bounds["max_length"] = int(rules.max)
    if rules.pattern:
        bounds["pattern"] = rules.pattern
    return bounds


def _value_bounds(field: FieldDescriptor) -> dict[str, Any]:
    rules = field.validation
    if rules is None:
        return {}
    bounds: dict[str, Any] = {}
    if rules.min is not None:
        bounds["ge"] = rules.min
    if rules.max is not None:
        bounds["le"] = rules.max
    return bounds


def _text(field: FieldDescriptor) -> Any:
    return Annotated[str, Field(**_length_bounds(field))]


def _email(field: FieldDescriptor) -> Any:
    return EmailStr


def _url(field: FieldDescriptor) -> Any:
    return Annotated[str, AfterValidator(_check_url)]


def _number(field: FieldDescriptor) -> Any:
    bounds = _value_bounds(field)
    return Union[Annotated[int, Field(**bounds)], Annotated[float, Field(**bounds)]]


def _boolean(field: FieldDescriptor) -> Any:
    return bool


def _date(field: FieldDescriptor) -> Any:
    return Union[datetime, date]


def _select(field: FieldDescriptor) -> Any:
    choices = field.validation.enum if field.validation else None
    if choices:
        return Literal[tuple(choices)]
    return Union[int, str]


def _array(field: FieldDescriptor) -> Any:
    if field.array_item_type is SemanticType.object:
        return list[dict[str, Any]]
    return list[str]


def _object(field: FieldDescriptor) -> Any:
    return dict[str, Any]


def _weekdays(field: FieldDescriptor) -> Any:
    return dict[Literal[WEEKDAYS], bool]


ANNOTATIONS: Mapping[SemanticType, Callable[[FieldDescriptor], Any]] = exhaustive(
    {
        SemanticType.text: _text,
        SemanticType.email: _email,
        SemanticType.url: _url,
        SemanticType.number: _number,
        SemanticType.boolean: _boolean,
        SemanticType.date: _date,
        SemanticType.select: _select,
        SemanticType.array: _array,
        SemanticType.object: _object,
        SemanticType.weekdays: _weekdays,
    },
    "form annotation",
)


class FormContractBuilder:
    """Build pydantic models validating form submissions."""

    config = ConfigDict(regex_engine="python-re", extra="ignore")

    def annotation(self, field: FieldDescriptor) -> Any:
        return ANNOTATIONS[field.semantic_type](field)

    def build(self, name: str, fields: Iterable[FieldDescriptor]) -> type[BaseModel]:
        definitions: dict[str, Any] = {}
        for field in fields:
            annotation = self.annotation(field)
            if field.required:
                definitions[field.key] = (annotation, ...)
            else:
                definitions[field.key] = (Optional[annotation], None)
        return create_model(f"{name}Form", __config__=self.config, **definitions)


def default_values(
    fields: Iterable[FieldDescriptor], record: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Return initial form values.

    A record value wins over the declared default, which wins over the empty
    value of the field's semantic type.
    """
    record = record or {}
    values: dict[str, Any] = {}
    for field in fields:
        if record.get(field.key) is not None:
            values[field.key] = record[field.key]
        elif field.default_value is not None:
            values[field.key] = field.default_value
        else:
            values[field.key] = empty_value(field.semantic_type)
    return values


def _parse_mapping(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class FormState:
    """Editable values of one form."""

    def __init__(
        self,
        name: str,
        fields: Iterable[FieldDescriptor],
        record: Mapping[str, Any] | None = None,
        *,
        builder: FormContractBuilder | None = None,
    ) -> None:
        self.fields = {f.key: f for f in fields}
        self.contract = (builder or FormContractBuilder()).build(name, self.fields.values())
        initial = default_values(self.fields.values(), record)
        self.arrays: dict[str, list[Any]] = {}
        self.values: dict[str, Any] = {}
        for key, value in initial.items():
            if self.fields[key].semantic_type is SemanticType.array:
                self.arrays[key] = list(value or [])
            else:
                self.values[key] = value
        self.drafts: dict[str, str] = {}

    def _field(self, key: str) -> FieldDescriptor:
        try:
            return self.fields[key]
        except KeyError:
            raise KeyError(f"Unknown form field '{key}'") from None

    def set_value(self, key: str, value: Any) -> None:
        field = self._field(key)
        if field.semantic_type is SemanticType.array:
            self.arrays[key] = list(value or [])
        else:
            self.values[key] = value

    def set_object_text(self, key: str, text: str) -> bool:
        """Store JSON ``text`` for an object field.

        Text that does not parse to a mapping becomes the value itself, so the
        submission contract rejects it. The raw text is kept in ``drafts``.
        """
        self._field(key)
        self.drafts[key] = text
        parsed = _parse_mapping(text)
        if parsed is None:
            self.values[key] = text
            return False
        self.values[key] = parsed
        return True

    def add_array_item(self, key: str, text: str) -> bool:
        """Append trimmed input; object items are parsed as JSON mappings."""
        field = self._field(key)
        item: Any = text.strip()
        if not item:
            return False
        if field.array_item_type is SemanticType.object:
            parsed = _parse_mapping(item)
            item = item if parsed is None else parsed
        self.arrays.setdefault(key, []).append(item)
        return True

    def remove_array_item(self, key: str, index: int) -> None:
        items = self.arrays.get(key, [])
        if 0 <= index < len(items):
            del items[index]

    def merged(self) -> dict[str, Any]:
        return {**self.values, **self.arrays}

    def submission_payload(self) -> dict[str, Any]:
        """Return the validated payload or raise :class:`ValidationFailedError`."""
        payload = {
            key: value
            for key, value in self.merged().items()
            if self.fields[key].required or value not in ("", None)
        }
        try:
            model = self.contract.model_validate(payload)
        except ValidationError as exc:
            errors: dict[str, str] = {}
            for error in exc.errors():
                key = str(error["loc"][0]) if error["loc"] else "__root__"
                errors.setdefault(key, error["msg"])
            raise ValidationFailedError("Form validation failed", errors=errors) from exc
        return model.model_dump(mode="json", exclude_unset=True)


__all__ = ["ANNOTATIONS", "FormContractBuilder", "FormState", "default_values"]


# The End
