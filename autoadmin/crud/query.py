# -*- coding: utf-8 -*-
"""
query

Translate list query parameters into Tortoise conditions.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel
from tortoise import fields
from tortoise.expressions import Q
from tortoise.models import Model

from ..adapters.tortoise.adapter import Adapter
from ..core.configuration import ModelConfig
from ..core.exceptions import BadRequestError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SEARCH_FIELDS: tuple[str, ...] = ("name", "title", "description")
RESERVED_PARAMS = frozenset({"search", "page", "limit", "sort", "order"})
EXPORT_PARAMS = frozenset({"format", "useFilters", "fields"})

_TEXT_FIELDS = (fields.CharField, fields.TextField)
_INT_FIELDS = (fields.IntField, fields.BigIntField, fields.SmallIntField)
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass(frozen=True)
class ListParams:
    """Paging, ordering, search and filter inputs of a list request."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: str | None = None
    order: str = "asc"
    search: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_query(
        cls,
        query: Mapping[str, Any],
        *,
        reserved: frozenset[str] = RESERVED_PARAMS,
    ) -> "ListParams":
        """Parse raw query parameters; invalid numbers fall back to defaults."""
        order = str(query.get("order") or "asc").lower()
        search = query.get("search")
        sort = query.get("sort")
        return cls(
            page=_positive_int(query.get("page"), DEFAULT_PAGE),
            limit=_positive_int(query.get("limit"), DEFAULT_LIMIT),
            sort=sort if isinstance(sort, str) and sort else None,
            order="desc" if order == "desc" else "asc",
            search=search.strip() if isinstance(search, str) and search.strip() else None,
            filters={
                key: value
                for key, value in query.items()
                if key not in reserved and key not in RESERVED_PARAMS
            },
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Pagination metadata returned with list results."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @computed_field(alias="hasNext")
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @computed_field(alias="hasPrev")
    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_public(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class QueryBuilder:
    """Build the condition and ordering of list queries for one model."""

    def __init__(self, adapter: Adapter, config: ModelConfig, model: type[Model]) -> None:
        self.adapter = adapter
        self.config = config
        self.model = model
        self.fields_map = adapter.fields_map(model)

    def condition(
        self,
        params: ListParams,
        *,
        trash: bool = False,
        use_filters: bool = True,
        use_search: bool = True,
    ) -> Q:
        """Return one condition combining soft-delete state, filters and search."""
        groups: list[Q] = []
        if self.adapter.supports_soft_delete(self.model):
            groups.append(self.adapter.trash_q() if trash else self.adapter.active_q())
        if use_filters:
            lookups = self.filter_lookups(params.filters)
            if lookups:
                groups.append(Q(**lookups))
        if use_search and params.search:
            search_q = self.search_q(params.search)
            if search_q is not None:
                groups.append(search_q)
        if not groups:
            return Q()
        if len(groups) == 1:
            return groups[0]
        return Q(*groups, join_type=Q.AND)

    def filter_lookups(self, filters: Mapping[str, Any]) -> dict[str, Any]:
        """Return lookups for known columns with non-blank values.

        A list value matches any of its members.
        """
        lookups: dict[str, Any] = {}
        for key, raw in filters.items():
            if isinstance(raw, (list, tuple)):
                raw = [item for item in raw if not _blank(item)]
                if not raw:
                    continue
            elif _blank(raw):
                continue
            field_obj = self.fields_map.get(key)
            if field_obj is None or isinstance(
                field_obj,
                (fields.JSONField, fields.relational.BackwardFKRelation,
                 fields.relational.ManyToManyFieldInstance),
            ):
                continue
            name, target = key, field_obj
            if isinstance(field_obj, fields.relational.ForeignKeyFieldInstance):
                name = getattr(field_obj, "source_field", None) or f"{key}_id"
                target = self.fields_map.get(name)
            if isinstance(raw, list):
                lookups[f"{name}__in"] = [self._coerce(target, key, item) for item in raw]
            else:
                lookups[name] = self._coerce(target, key, raw)
        return lookups

    def search_fields(self) -> list[str]:
        """Return the configured text columns searched by substring."""
        names = self.config.search_fields or DEFAULT_SEARCH_FIELDS
        return [
            name
            for name in names
            if isinstance(self.fields_map.get(name), _TEXT_FIELDS)
        ]

    def search_q(self, term: str) -> Q | None:
        names = self.search_fields()
        if not names:
            return None
        return Q(
            *(Q(**{f"{name}__icontains": term}) for name in names),
            join_type=Q.OR,
        )

    def ordering(self, params: ListParams | None = None) -> tuple[str, ...]:
        """Return the ``order_by`` arguments for ``params``."""
        if params is not None and params.sort:
            field_obj = self.fields_map.get(params.sort)
            if field_obj is not None and not isinstance(
                field_obj,
                (fields.JSONField, fields.relational.BackwardFKRelation,
                 fields.relational.ManyToManyFieldInstance),
            ):
                name = params.sort
                if isinstance(field_obj, fields.relational.ForeignKeyFieldInstance):
                    name = getattr(field_obj, "source_field", None) or f"{name}_id"
                prefix = "-" if params.order == "desc" else ""
                return (f"{prefix}{name}",)
        return self.default_ordering()

    def default_ordering(self) -> tuple[str, ...]:
        if "created_at" in self.fields_map:
            return ("-created_at",)
        return (f"-{self.adapter.get_pk_attr(self.model)}",)

    @staticmethod
    def _coerce(field_obj: fields.Field | None, key: str, raw: Any) -> Any:
        if field_obj is None or not isinstance(raw, str):
            return raw
        value = raw.strip()
        try:
            enum_type = getattr(field_obj, "enum_type", None)
            if enum_type is not None:
                if isinstance(field_obj, fields.data.IntEnumFieldInstance):
                    return enum_type(int(value))
                return enum_type(value)
            if isinstance(field_obj, fields.BooleanField):
                lowered = value.lower()
                if lowered in _TRUE:
                    return True
                if lowered in _FALSE:
                    return False
                raise ValueError(value)
            if isinstance(field_obj, _INT_FIELDS):
                return int(value)
            if isinstance(field_obj, fields.FloatField):
                return float(value)
            if isinstance(field_obj, fields.DecimalField):
                return Decimal(value)
        except (ValueError, InvalidOperation) as exc:
            raise BadRequestError(f"Invalid value for filter '{key}'") from exc
        return value


__all__ = [
    "DEFAULT_SEARCH_FIELDS",
    "EXPORT_PARAMS",
    "ListParams",
    "Pagination",
    "QueryBuilder",
    "RESERVED_PARAMS",
]


# The End
