# -*- coding: utf-8 -*-
"""
schema

Cached client for the schema endpoints.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx

from ..schema.descriptors import FieldDescriptor, ModelSchema
from ..schema.semantics import SORTABLE
from .transport import ApiTransport

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = frozenset({"password", "token"})


class ColumnField(FieldDescriptor):
    """Field descriptor decorated with table presentation flags."""

    sortable: bool = True
    visible: bool = True


class ClientSchema(ModelSchema):
    """Model schema whose fields carry presentation flags."""

    fields: list[ColumnField] = []


def decorate(field: FieldDescriptor) -> ColumnField:
    """Return ``field`` with ``sortable`` and ``visible`` computed."""
    return ColumnField(
        **field.model_dump(),
        sortable=SORTABLE[field.semantic_type],
        visible=not field.hidden and field.key.lower() not in SENSITIVE_KEYS,
    )


class SchemaClient:
    """Fetch and cache model schemas from the dashboard API.

    Schemas are cached per model for ``ttl`` seconds. Concurrent misses are
    not de-duplicated; each one fetches and the last write wins.
    """

    def __init__(
        self,
        transport: ApiTransport | httpx.Client,
        *,
        ttl: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if isinstance(transport, httpx.Client):
            transport = ApiTransport(transport)
        self.transport = transport
        self.ttl = ttl
        self.clock = clock
        self._cache: dict[str, tuple[float, ClientSchema]] = {}

    def _cached(self, model: str) -> ClientSchema | None:
        entry = self._cache.get(model)
        if entry is None:
            return None
        stored_at, schema = entry
        if self.clock() - stored_at >= self.ttl:
            del self._cache[model]
            return None
        return schema

    def _parse(self, payload: dict[str, Any]) -> ClientSchema:
        schema = ModelSchema.model_validate(payload)
        return ClientSchema(
            **schema.model_dump(exclude={"fields"}),
            fields=[decorate(f) for f in schema.fields],
        )

    def get_model_schema(self, model: str) -> ClientSchema:
        key = model.lower()
        cached = self._cached(key)
        if cached is not None:
            return cached
        body = self.transport.request("GET", f"schemas/{model}")
        schema = self._parse(body["data"])
        self._cache[key] = (self.clock(), schema)
        logger.debug("Cached schema for %s", key)
        return schema

    def get_all_schemas(self) -> dict[str, ClientSchema]:
        """Fetch every schema, refreshing the per-model cache."""
        body = self.transport.request("GET", "schemas")
        now = self.clock()
        schemas = {}
        for key, payload in body["data"].items():
            schema = self._parse(payload)
            schemas[key] = schema
            self._cache[key.lower()] = (now, schema)
        return schemas

    def get_model_names(self) -> list[dict[str, Any]]:
        body = self.transport.request("GET", "schemas/models")
        return list(body["data"])

    def clear_cache(self, model: str | None = None) -> None:
        if model is None:
            self._cache.clear()
        else:
            self._cache.pop(model.lower(), None)

    @staticmethod
    def fields_to_columns(fields: list[ColumnField]) -> list[dict[str, Any]]:
        """Return table column configs for the visible ``fields``."""
        return [
            {
                "key": f.key,
                "label": f.label,
                "type": f.semantic_type.value,
                "sortable": f.sortable,
            }
            for f in fields
            if f.visible
        ]


__all__ = ["ClientSchema", "ColumnField", "SchemaClient", "decorate"]


# The End
