# -*- coding: utf-8 -*-
"""
validation

Validate and coerce record payloads against Tortoise model definitions.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from tortoise import fields
from tortoise.exceptions import ValidationError
from tortoise.models import Model

from ..adapters.tortoise.adapter import SOFT_DELETE_FIELD
from ..core.exceptions import ValidationFailedError

_INT_FIELDS = (fields.IntField, fields.BigIntField, fields.SmallIntField)
_TEXT_FIELDS = (fields.CharField, fields.TextField, fields.UUIDField)
_SKIPPED = (
    fields.relational.BackwardFKRelation,
    fields.relational.BackwardOneToOneRelation,
    fields.relational.ManyToManyFieldInstance,
)
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class CoercionError(ValueError):
    """Raised when a raw value cannot be converted to the column type."""


def _parse_datetime(value: str) -> dt.datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return dt.datetime.fromisoformat(text)


def coerce_value(field: fields.Field, value: Any) -> Any:
    """Return ``value`` converted to the Python type stored in ``field``.

    Raises:
        CoercionError: If the value does not fit the column type.
    """
    enum_type = getattr(field, "enum_type", None)
    if enum_type is not None:
        if isinstance(value, enum_type):
            return value
        try:
            if isinstance(field, fields.data.IntEnumFieldInstance):
                return enum_type(int(value))
            return enum_type(value)
        except (TypeError, ValueError) as exc:
            allowed = ", ".join(str(member.value) for member in enum_type)
            raise CoercionError(f"must be one of: {allowed}") from exc
    if isinstance(field, fields.JSONField):
        return value
    if isinstance(field, fields.BooleanField):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in _TRUE | _FALSE:
            return value.strip().lower() in _TRUE
        raise CoercionError("must be a boolean")
    if isinstance(field, _INT_FIELDS):
        if isinstance(value, bool):
            raise CoercionError("must be an integer")
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise CoercionError("must be an integer") from exc
        if number != number.to_integral_value():
            raise CoercionError("must be an integer")
        return int(number)
    if isinstance(field, fields.FloatField):
        if isinstance(value, bool):
            raise CoercionError("must be a number")
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise CoercionError("must be a number") from exc
    if isinstance(field, fields.DecimalField):
        if isinstance(value, bool):
            raise CoercionError("must be a number")
        try:
            return Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise CoercionError("must be a number") from exc
    if isinstance(field, fields.DatetimeField):
        if isinstance(value, dt.datetime):
            return value
        try:
            return _parse_datetime(str(value))
        except ValueError as exc:
            raise CoercionError("must be a valid date") from exc
    if isinstance(field, fields.DateField):
        if isinstance(value, dt.date):
            return value
        try:
            return dt.date.fromisoformat(str(value).strip()[:10])
        except ValueError as exc:
            raise CoercionError("must be a valid date") from exc
    if isinstance(field, _TEXT_FIELDS):
        if isinstance(value, (dict, list)):
            raise CoercionError("must be a string")
        return str(value)
    return value


class RecordValidator:
    """Check payloads against a model without touching the database."""

    def check(
        self,
        model: type[Model],
        data: Mapping[str, Any],
        *,
        partial: bool = False,
    ) -> tuple[dict[str, Any], dict[str, str]]:
        """Return the cleaned payload together with per-field errors.

        Keys outside the model, the primary key and store-managed columns
        are dropped. With ``partial`` only supplied keys are checked, as in
        updates.
        """
        meta = model._meta
        cleaned: dict[str, Any] = {}
        errors: dict[str, str] = {}
        fk_columns = {
            getattr(f, "source_field", None) or f"{name}_id": name
            for name, f in meta.fields_map.items()
            if isinstance(f, fields.relational.ForeignKeyFieldInstance)
        }
        for name, field in meta.fields_map.items():
            if name in (meta.pk_attr, SOFT_DELETE_FIELD) or name in fk_columns:
                continue
            if isinstance(field, _SKIPPED):
                continue
            if getattr(field, "auto_now", False) or getattr(field, "auto_now_add", False):
                continue
            if isinstance(field, fields.relational.ForeignKeyFieldInstance):
                source = getattr(field, "source_field", None) or f"{name}_id"
                present = name in data or source in data
                value = data.get(name, data.get(source))
                target = meta.fields_map.get(source)
            else:
                present = name in data
                value = data.get(name)
                target = field
                source = name

            if not present and partial:
                continue
            if value is None or (isinstance(value, str) and not value.strip()):
                if self._required(field):
                    if present or not partial:
                        errors[name] = "This field is required"
                    continue
                if present:
                    cleaned[source] = None if not isinstance(field, _TEXT_FIELDS) else value
                continue

            try:
                value = coerce_value(target, value) if target is not None else value
            except CoercionError as exc:
                errors[name] = str(exc)
                continue

            max_length = getattr(field, "max_length", None)
            if max_length and isinstance(value, str) and len(value) > max_length:
                errors[name] = f"must be at most {max_length} characters"
                continue

            try:
                field.validate(value)
            except ValidationError as exc:
                errors[name] = self._message(name, exc)
                continue
            cleaned[source] = value
        return cleaned, errors

    def errors(
        self,
        model: type[Model],
        data: Mapping[str, Any],
        *,
        partial: bool = False,
    ) -> dict[str, str]:
        """Return only the per-field error messages for ``data``."""
        return self.check(model, data, partial=partial)[1]

    def clean(
        self,
        model: type[Model],
        data: Mapping[str, Any],
        *,
        partial: bool = False,
    ) -> dict[str, Any]:
        """Return the cleaned payload or raise ``ValidationFailedError``."""
        cleaned, errors = self.check(model, data, partial=partial)
        if errors:
            raise ValidationFailedError(errors=errors)
        return cleaned

    @staticmethod
    def _required(field: fields.Field) -> bool:
        if getattr(field, "null", False) or getattr(field, "generated", False):
            return False
        return getattr(field, "default", None) is None

    @staticmethod
    def _message(name: str, exc: ValidationError) -> str:
        text = str(exc)
        prefix = f"{name}: "
        return text[len(prefix):] if text.startswith(prefix) else text


__all__ = ["CoercionError", "RecordValidator", "coerce_value"]


# The End
