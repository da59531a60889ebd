# -*- coding: utf-8 -*-
"""
service

Generic CRUD operations over registered collections.

Every public coroutine checks the collection's feature flag before touching
the database and raises the domain errors from
:mod:`autoadmin.core.exceptions`; the HTTP layer turns them into envelopes.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from tortoise.exceptions import BaseORMException, ValidationError
from tortoise.models import Model

from ..adapters.tortoise.adapter import Adapter
from ..core.configuration import Feature, ModelConfig, ModelRegistry
from ..core.exceptions import (
    BadRequestError,
    FeatureDisabledError,
    NotFoundError,
    UnexpectedFailureError,
    ValidationFailedError,
)
from .export import ExportFormat, ExportResult, render_csv
from .query import EXPORT_PARAMS, ListParams, Pagination, QueryBuilder
from .validation import CoercionError, RecordValidator, coerce_value

logger = logging.getLogger(__name__)

_DENIED_MESSAGES: Mapping[Feature, str] = {
    Feature.create: "Create operation not allowed for this model",
    Feature.read: "Read operation not allowed for this model",
    Feature.update: "Update operation not allowed for this model",
    Feature.delete: "Delete operation not allowed for this model",
    Feature.restore: "Restore operation not allowed for this model",
    Feature.export: "Export operation not allowed for this model",
    Feature.import_: "Import operation not allowed for this model",
    Feature.bulk_operations: "Bulk operations not allowed for this model",
    Feature.view_trash: "View trash operation not allowed for this model",
}


def _tortoise_errors(exc: ValidationError) -> dict[str, str]:
    """Split a Tortoise ``"field: message"`` error into an errors mapping."""
    name, sep, message = str(exc).partition(": ")
    if sep and name.isidentifier():
        return {name: message}
    return {"record": str(exc)}


@dataclass(frozen=True)
class Page:
    """One page of serialised records with its pagination metadata."""

    records: list[dict[str, Any]]
    pagination: Pagination


@dataclass(frozen=True)
class BulkValidation:
    """Dry-run validation outcome of a batch."""

    errors: list[str]

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_public(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


class CrudService:
    """Run list, read, write, trash and transfer operations for collections."""

    def __init__(
        self,
        registry: ModelRegistry,
        *,
        adapter: Adapter | None = None,
        validator: RecordValidator | None = None,
    ) -> None:
        self.registry = registry
        self.adapter = adapter or Adapter()
        self.validator = validator or RecordValidator()

    # --- resolution --------------------------------------------------------

    def config(self, collection: str) -> ModelConfig:
        config = self.registry.get(collection)
        if config is None:
            raise NotFoundError(f"Collection '{collection}' not found")
        return config

    def model(self, config: ModelConfig) -> type[Model]:
        model = self.adapter.get_model(config.model_name)
        if model is None:
            raise NotFoundError(f"Model '{config.model_name}' not found")
        return model

    def require(self, collection: str, *features: Feature) -> tuple[ModelConfig, type[Model]]:
        """Resolve ``collection`` and check that all ``features`` are enabled.

        Raises:
            NotFoundError: If the collection is unknown.
            FeatureDisabledError: If any feature is switched off.
        """
        config = self.config(collection)
        for feature in features:
            if not config.is_enabled(feature):
                raise FeatureDisabledError(_DENIED_MESSAGES[feature])
        return config, self.model(config)

    def _pk(self, model: type[Model], pk: Any) -> Any:
        pk_field = model._meta.pk
        try:
            return coerce_value(pk_field, pk)
        except CoercionError as exc:
            raise NotFoundError(f"{model.__name__} not found") from exc

    # --- reads -------------------------------------------------------------

    async def get_all(self, collection: str, query: Mapping[str, Any] | None = None) -> Page:
        """Return one page of active records."""
        config, model = self.require(collection, Feature.read)
        return await self._list(config, model, query or {}, trash=False)

    async def get_deleted(self, collection: str, query: Mapping[str, Any] | None = None) -> Page:
        """Return one page of soft-deleted records."""
        config, model = self.require(collection, Feature.view_trash)
        return await self._list(config, model, query or {}, trash=True)

    async def _list(
        self,
        config: ModelConfig,
        model: type[Model],
        query: Mapping[str, Any],
        *,
        trash: bool,
    ) -> Page:
        params = ListParams.from_query(query)
        builder = QueryBuilder(self.adapter, config, model)
        condition = builder.condition(
            params,
            trash=trash,
            use_filters=config.is_enabled(Feature.filters),
            use_search=config.is_enabled(Feature.search),
        )
        ordering = (
            builder.ordering(params)
            if config.is_enabled(Feature.sort)
            else builder.default_ordering()
        )
        qs = self.adapter.filter(model, condition)
        try:
            rows, total = await asyncio.gather(
                self.adapter.fetch(
                    qs, order_by=ordering, offset=params.offset, limit=params.limit
                ),
                self.adapter.count(qs),
            )
        except BaseORMException as exc:
            logger.exception("Listing %s failed", config.name)
            raise UnexpectedFailureError(
                f"Error fetching {config.plural_name}", error=str(exc)
            ) from exc
        return Page(
            records=[self.adapter.serialize(row) for row in rows],
            pagination=Pagination(page=params.page, limit=params.limit, total=total),
        )

    async def get_by_id(self, collection: str, pk: Any) -> dict[str, Any]:
        """Return the active record identified by ``pk``."""
        config, model = self.require(collection, Feature.read)
        obj = await self._active(config, model, pk)
        return self.adapter.serialize(obj)

    async def _active(self, config: ModelConfig, model: type[Model], pk: Any) -> Model:
        pk_attr = self.adapter.get_pk_attr(model)
        conditions = []
        if self.adapter.supports_soft_delete(model):
            conditions.append(self.adapter.active_q())
        try:
            obj = await self.adapter.get_or_none(
                model, *conditions, **{pk_attr: self._pk(model, pk)}
            )
        except BaseORMException as exc:
            logger.exception("Fetching %s %s failed", config.name, pk)
            raise UnexpectedFailureError(
                f"Error fetching {config.model_name}", error=str(exc)
            ) from exc
        if obj is None:
            raise NotFoundError(f"{config.model_name} not found")
        return obj

    # --- writes ------------------------------------------------------------

    async def create(self, collection: str, data: Any) -> dict[str, Any]:
        """Validate ``data`` and persist it as a new record."""
        config, model = self.require(collection, Feature.create)
        if not isinstance(data, Mapping):
            raise BadRequestError("Request body must be an object")
        cleaned = self.validator.clean(model, data)
        try:
            obj = await self.adapter.create(model, **cleaned)
        except ValidationError as exc:
            raise ValidationFailedError(errors=_tortoise_errors(exc)) from exc
        except BaseORMException as exc:
            logger.exception("Creating %s failed", config.name)
            raise BadRequestError(
                f"Error creating {config.model_name}", error=str(exc)
            ) from exc
        return self.adapter.serialize(obj)

    async def update(self, collection: str, pk: Any, data: Any) -> dict[str, Any]:
        """Apply ``data`` to an active record and refresh its update timestamp."""
        config, model = self.require(collection, Feature.update)
        if not isinstance(data, Mapping):
            raise BadRequestError("Request body must be an object")
        obj = await self._active(config, model, pk)
        cleaned = self.validator.clean(model, data, partial=True)
        self.adapter.assign(obj, cleaned)
        try:
            await self.adapter.save(obj)
        except ValidationError as exc:
            raise ValidationFailedError(errors=_tortoise_errors(exc)) from exc
        except BaseORMException as exc:
            logger.exception("Updating %s %s failed", config.name, pk)
            raise BadRequestError(
                f"Error updating {config.model_name}", error=str(exc)
            ) from exc
        return self.adapter.serialize(obj)

    async def delete(self, collection: str, pk: Any) -> dict[str, Any]:
        """Mark an active record as deleted."""
        config, model = self.require(collection, Feature.delete)
        obj = await self._active(config, model, pk)
        return await self._set_deleted(config, obj, True)

    async def restore(self, collection: str, pk: Any) -> dict[str, Any]:
        """Clear the deleted mark of a soft-deleted record."""
        config, model = self.require(collection, Feature.restore)
        pk_attr = self.adapter.get_pk_attr(model)
        try:
            obj = await self.adapter.get_or_none(
                model, self.adapter.trash_q(), **{pk_attr: self._pk(model, pk)}
            )
        except BaseORMException as exc:
            logger.exception("Fetching deleted %s %s failed", config.name, pk)
            raise UnexpectedFailureError(
                f"Error restoring {config.model_name}", error=str(exc)
            ) from exc
        if obj is None:
            raise NotFoundError(f"Deleted {config.model_name} not found")
        return await self._set_deleted(config, obj, None)

    async def _set_deleted(self, config: ModelConfig, obj: Model, flag: bool | None) -> dict[str, Any]:
        obj.deleted = flag
        try:
            await self.adapter.save(obj)
        except BaseORMException as exc:
            logger.exception("Changing deleted state of %s %s failed", config.name, obj.pk)
            raise UnexpectedFailureError(
                f"Error updating {config.model_name}", error=str(exc)
            ) from exc
        return self.adapter.serialize(obj)

    # --- bulk --------------------------------------------------------------

    async def bulk_create(self, collection: str, records: Any) -> list[dict[str, Any]]:
        """Insert each record independently and return the ones that succeeded."""
        config, model = self.require(collection, Feature.bulk_operations, Feature.import_)
        if not isinstance(records, list) or not records:
            raise BadRequestError("Records array is required")
        created: list[dict[str, Any]] = []
        for index, record in enumerate(records, start=1):
            if not isinstance(record, Mapping):
                logger.warning("Skipping %s row %s: not an object", config.name, index)
                continue
            try:
                cleaned = self.validator.clean(model, record)
                obj = await self.adapter.create(model, **cleaned)
            except ValidationFailedError as exc:
                logger.warning("Skipping %s row %s: %s", config.name, index, exc.error)
                continue
            except BaseORMException as exc:
                logger.warning("Skipping %s row %s: %s", config.name, index, exc)
                continue
            created.append(self.adapter.serialize(obj))
        return created

    async def bulk_validate(self, collection: str, records: Any) -> BulkValidation:
        """Check every record without persisting and collect row messages."""
        config, model = self.require(collection, Feature.bulk_operations)
        if not isinstance(records, list):
            return BulkValidation(errors=["Records must be an array"])
        messages: list[str] = []
        for index, record in enumerate(records, start=1):
            if not isinstance(record, Mapping):
                messages.append(f"Row {index}: must be an object")
                continue
            for field_name, message in self.validator.errors(model, record).items():
                messages.append(f"Row {index}, {field_name}: {message}")
        return BulkValidation(errors=messages)

    # --- export ------------------------------------------------------------

    async def export(self, collection: str, query: Mapping[str, Any] | None = None) -> ExportResult:
        """Select records and render them in the requested format."""
        config, model = self.require(collection, Feature.export)
        query = query or {}
        raw_format = str(query.get("format") or ExportFormat.json.value).lower()
        try:
            fmt = ExportFormat(raw_format)
        except ValueError as exc:
            raise BadRequestError(f"Unsupported export format '{raw_format}'") from exc
        use_filters = str(query.get("useFilters", "")).lower() == "true"

        builder = QueryBuilder(self.adapter, config, model)
        params = ListParams.from_query(query, reserved=EXPORT_PARAMS)
        condition = builder.condition(
            params,
            use_filters=use_filters and config.is_enabled(Feature.filters),
            use_search=use_filters and config.is_enabled(Feature.search),
        )
        try:
            rows = await self.adapter.fetch(
                self.adapter.filter(model, condition), order_by=builder.default_ordering()
            )
        except BaseORMException as exc:
            logger.exception("Exporting %s failed", config.name)
            raise UnexpectedFailureError(
                f"Error exporting {config.plural_name}", error=str(exc)
            ) from exc
        records = [self.adapter.serialize(row) for row in rows]
        if fmt is ExportFormat.json:
            return ExportResult(format=fmt, records=records)
        columns = [c.strip() for c in str(query.get("fields") or "").split(",") if c.strip()]
        return ExportResult(
            format=fmt,
            records=records,
            content=render_csv(records, columns or None),
            filename=f"{config.model_name}_export.csv",
        )

    # --- statistics --------------------------------------------------------

    async def stats(self) -> dict[str, dict[str, int]]:
        """Return total, active and deleted counts per collection."""
        result: dict[str, dict[str, int]] = {}
        for config in self.registry:
            model = self.adapter.get_model(config.model_name)
            if model is None:
                continue
            qs = self.adapter.all(model)
            try:
                if self.adapter.supports_soft_delete(model):
                    total, active, deleted = await asyncio.gather(
                        self.adapter.count(qs),
                        self.adapter.count(self.adapter.filter(model, self.adapter.active_q())),
                        self.adapter.count(self.adapter.filter(model, self.adapter.trash_q())),
                    )
                else:
                    total = await self.adapter.count(qs)
                    active, deleted = total, 0
            except BaseORMException as exc:
                logger.exception("Counting %s failed", config.name)
                raise UnexpectedFailureError(
                    "Error fetching statistics", error=str(exc)
                ) from exc
            result[config.name] = {"total": total, "active": active, "deleted": deleted}
        return result


__all__ = ["BulkValidation", "CrudService", "Page"]


# The End
