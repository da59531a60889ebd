# -*- coding: utf-8 -*-
"""
tortoise

Tortoise ORM adapter utilities.

This module defines :class:`Adapter`, a light abstraction over
Tortoise ORM that exposes the database operations used by the schema and
CRUD services through an object oriented interface. It keeps the rest of the
package decoupled from Tortoise internals.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from tortoise import Tortoise, fields
from tortoise.exceptions import (
    BaseORMException,
    DoesNotExist as TortoiseDoesNotExist,
    IntegrityError as TortoiseIntegrityError,
)
from tortoise.expressions import Q as TortoiseQ
from tortoise.models import Model as TortoiseModel
from tortoise.queryset import QuerySet


Model = TortoiseModel

SOFT_DELETE_FIELD = "deleted"


class Adapter:
    """Facade for Tortoise ORM providing instance-based helpers.

    All interactions are offered as instance methods to keep calling code
    decoupled from Tortoise internals while still exposing familiar query
    patterns.
    """

    name = "tortoise"
    QuerySet = QuerySet
    Model = Model
    Q = TortoiseQ
    DoesNotExist = TortoiseDoesNotExist
    IntegrityError = TortoiseIntegrityError
    StoreError = BaseORMException

    def get_model(self, model_name: str) -> type[Model] | None:
        """Return the registered model class called ``model_name``.

        Args:
            model_name: Class name such as ``"Bank"`` or a dotted
                ``app.Model`` path.

        Returns:
            type[Model] | None: Resolved model class or ``None``.
        """
        if "." in model_name:
            app_label, name = model_name.rsplit(".", 1)
            return Tortoise.apps.get(app_label, {}).get(name)
        for models in Tortoise.apps.values():
            model = models.get(model_name)
            if model is not None:
                return model
        return None

    def available_models(self) -> list[str]:
        """Return the class names of every registered model."""
        names: list[str] = []
        for models in Tortoise.apps.values():
            names.extend(models.keys())
        return names

    def get_pk_attr(self, model: type[Any]) -> str:
        """Return the primary-key attribute name for ``model``.

        The method tolerates models without Tortoise metadata and defaults
        to ``id`` when the information is unavailable.
        """
        meta = getattr(model, "_meta", None)
        return getattr(meta, "pk_attr", "id") if meta else "id"

    def fields_map(self, model: type[Model]) -> dict[str, fields.Field]:
        """Return the Tortoise field map of ``model``."""
        return model._meta.fields_map

    def supports_soft_delete(self, model: type[Model]) -> bool:
        """Return ``True`` when ``model`` carries the soft-delete flag."""
        return SOFT_DELETE_FIELD in model._meta.fields_map

    def active_q(self) -> TortoiseQ:
        """Return the condition matching rows that are not soft-deleted.

        A missing flag and an explicit ``False`` both count as active.
        """
        return TortoiseQ(**{f"{SOFT_DELETE_FIELD}__isnull": True}) | TortoiseQ(
            **{SOFT_DELETE_FIELD: False}
        )

    def trash_q(self) -> TortoiseQ:
        """Return the condition matching soft-deleted rows."""
        return TortoiseQ(**{SOFT_DELETE_FIELD: True})

    def all(self, model: type[Model]) -> QuerySet[Model]:
        """Build a queryset for all records of ``model``."""
        return model.all()

    def filter(
        self,
        model_or_qs: type[Model] | QuerySet[Model],
        *expressions: TortoiseQ,
        **filters: Any,
    ) -> QuerySet[Model]:
        """Build a queryset applying Tortoise filters.

        Args:
            model_or_qs: Model class or queryset.
            *expressions: Additional ``TortoiseQ`` expressions.
            **filters: Field lookups passed to ``filter``.

        Returns:
            QuerySet[Model]: Filtered queryset for deferred evaluation.
        """
        return model_or_qs.filter(*expressions, **filters)

    def normalize_data(self, model: type[Model], data: dict[str, Any]) -> dict[str, Any]:
        """Convert raw payload values into ORM-friendly keyword arguments."""
        meta = getattr(model, "_meta", None)
        if not meta:
            return data
        cleaned: dict[str, Any] = {}
        for name, value in data.items():
            field = meta.fields_map.get(name)
            if not field:
                cleaned[name] = value
                continue
            if isinstance(field, fields.relational.ForeignKeyFieldInstance):
                if getattr(value, "_saved_in_db", False):
                    cleaned[name] = value
                else:
                    source = getattr(field, "source_field", None) or f"{name}_id"
                    cleaned[source] = value
                continue
            if getattr(field, "enum_type", None) and isinstance(value, str):
                if value.isdigit():
                    cleaned[name] = int(value)
                    continue
            cleaned[name] = value
        return cleaned

    def assign(self, obj: Model, data: dict[str, Any]) -> None:
        """Set attributes on ``obj`` handling relation keys."""
        cleaned = self.normalize_data(type(obj), data)
        for field, value in cleaned.items():
            setattr(obj, field, value)

    def serialize(self, obj: Model) -> dict[str, Any]:
        """Return ``obj`` as a plain mapping keyed by field name.

        Foreign keys are rendered as the referenced primary key under the
        relation name, and an unset soft-delete flag is omitted.
        """
        meta = obj._meta
        fk_columns = {
            getattr(f, "source_field", None) or f"{name}_id"
            for name, f in meta.fields_map.items()
            if isinstance(f, fields.relational.ForeignKeyFieldInstance)
        }
        out: dict[str, Any] = {}
        for name, field in meta.fields_map.items():
            if name in fk_columns:
                continue
            if isinstance(
                field,
                (
                    fields.relational.BackwardFKRelation,
                    fields.relational.ManyToManyFieldInstance,
                ),
            ):
                continue
            if isinstance(field, fields.relational.ForeignKeyFieldInstance):
                source = getattr(field, "source_field", None) or f"{name}_id"
                out[name] = getattr(obj, source, None)
                continue
            value = getattr(obj, name, None)
            if name == SOFT_DELETE_FIELD and value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            out[name] = value
        return out

    async def create(self, model_cls: type[Model], **data: Any) -> Model:
        """Create and persist a model instance.

        This coroutine must be awaited.
        """
        data = self.normalize_data(model_cls, data)
        return await model_cls.create(**data)

    async def get_or_none(
        self,
        model_or_qs: type[Model] | QuerySet[Model],
        *expressions: TortoiseQ,
        **filters: Any,
    ) -> Model | None:
        """Return a single matching instance or ``None``."""
        return await model_or_qs.filter(*expressions, **filters).first()

    async def save(self, obj: Model, *, update_fields: list[str] | None = None) -> Model:
        """Persist changes made to ``obj``."""
        await obj.save(update_fields=update_fields)
        return obj

    async def count(self, qs: QuerySet[Model]) -> int:
        """Return the number of rows matching ``qs``."""
        return await qs.count()

    async def fetch(
        self,
        qs: QuerySet[Model],
        *,
        order_by: tuple[str, ...] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Model]:
        """Evaluate ``qs`` applying ordering and a page window."""
        if order_by:
            qs = qs.order_by(*order_by)
        if offset:
            qs = qs.offset(offset)
        if limit is not None:
            qs = qs.limit(limit)
        return await qs


__all__ = ["Adapter", "Model", "SOFT_DELETE_FIELD"]


# The End
