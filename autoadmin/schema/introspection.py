# -*- coding: utf-8 -*-
"""
introspection

Derive :class:`ModelSchema` descriptions from registered Tortoise models.

The service walks every user-facing column of a model, classifies it into a
:class:`SemanticType`, merges its declared constraints and recurses into
embedded sub-records up to the configured depth.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

from tortoise.exceptions import BaseORMException
from tortoise.models import Model

from ..adapters.tortoise.adapter import Adapter
from ..conf import AutoAdminSettings, current_settings
from ..core.configuration import ModelConfig, ModelRegistry
from ..core.exceptions import NotFoundError
from .descriptors import (
    FieldDescriptor,
    FieldOption,
    FieldValidation,
    ModelSchema,
    SemanticType,
)
from .semantics import capitalize_first, generate_label, placeholder_for
from .sources import FieldSource, StorageType, TortoiseFieldSource

logger = logging.getLogger(__name__)

_EMAIL_NAME_HINTS = ("email",)
_URL_NAME_HINTS = ("url", "website", "link", "logo")

_STORAGE_SEMANTICS: Mapping[StorageType, SemanticType] = {
    StorageType.number: SemanticType.number,
    StorageType.boolean: SemanticType.boolean,
    StorageType.date: SemanticType.date,
    StorageType.array: SemanticType.array,
    StorageType.reference: SemanticType.select,
    StorageType.mixed: SemanticType.object,
    StorageType.embedded: SemanticType.object,
}


class MergePolicy(str, Enum):
    """Precedence applied when validators and schema options disagree."""

    SCHEMA_OPTIONS_WIN = "schema_options_win"
    VALIDATORS_WIN = "validators_win"


# === Semantic type ===

def _string_semantics(source: FieldSource) -> SemanticType:
    for spec in source.validators():
        if spec.kind != "regexp":
            continue
        pattern = str(spec.limit).lower()
        if "email" in pattern or "@" in pattern:
            return SemanticType.email
        if "http" in pattern or "url" in pattern:
            return SemanticType.url
    lowered = source.name.lower()
    if any(hint in lowered for hint in _EMAIL_NAME_HINTS):
        return SemanticType.email
    if any(hint in lowered for hint in _URL_NAME_HINTS):
        return SemanticType.url
    return SemanticType.text


def resolve_semantic_type(source: FieldSource, override: str | None = None) -> SemanticType:
    """Return the semantic type of ``source``.

    A configured ``override`` wins. Embedded and untyped JSON values map to
    ``object``, enumerations to ``select``; everything else follows the
    storage type.
    """
    if override:
        return SemanticType(override)
    storage = source.storage_type
    if storage in (StorageType.embedded, StorageType.mixed):
        return SemanticType.object
    if source.options.enum:
        return SemanticType.select
    if storage is StorageType.string:
        return _string_semantics(source)
    return _STORAGE_SEMANTICS[storage]


# === Validation ===

def _from_validators(source: FieldSource) -> dict[str, Any]:
    rules: dict[str, Any] = {}
    for spec in source.validators():
        if spec.kind in ("min", "minlength"):
            rules["min"] = spec.limit
        elif spec.kind in ("max", "maxlength"):
            rules["max"] = spec.limit
        elif spec.kind == "regexp":
            rules["pattern"] = spec.limit
        elif spec.kind == "required":
            rules["required"] = True
        elif spec.kind == "enum":
            rules["enum"] = list(spec.limit)
    return rules


def _from_options(source: FieldSource) -> dict[str, Any]:
    opts = source.options
    rules: dict[str, Any] = {}
    if opts.required:
        rules["required"] = True
    for name in ("min", "minlength"):
        value = getattr(opts, name)
        if value is not None:
            rules["min"] = value
    for name in ("max", "maxlength"):
        value = getattr(opts, name)
        if value is not None:
            rules["max"] = value
    if opts.enum:
        rules["enum"] = list(opts.enum)
    return rules


def extract_validation(
    source: FieldSource,
    policy: MergePolicy = MergePolicy.SCHEMA_OPTIONS_WIN,
) -> FieldValidation:
    """Merge validator-derived and option-derived rules under ``policy``."""
    validators = _from_validators(source)
    options = _from_options(source)
    if policy is MergePolicy.SCHEMA_OPTIONS_WIN:
        merged = {**validators, **options}
    else:
        merged = {**options, **validators}
    return FieldValidation(**merged)


# === Reference options ===

@dataclass(frozen=True)
class OptionsSampled:
    """Reference options read from the related collection."""

    options: list[FieldOption] = field(default_factory=list)


@dataclass(frozen=True)
class OptionsUnavailable:
    """Reference options could not be read; ``reason`` says why."""

    model: str
    reason: str

    @property
    def options(self) -> list[FieldOption]:
        return []


OptionsResult = OptionsSampled | OptionsUnavailable


def _option_label(row: Model) -> str:
    for attr in ("name", "title"):
        value = getattr(row, attr, None)
        if value:
            return str(value)
    return str(row.pk)


class ReferenceOptionSampler:
    """Read a bounded set of active rows to offer as select options."""

    def __init__(self, adapter: Adapter, limit: int = 100) -> None:
        self.adapter = adapter
        self.limit = limit

    async def sample(self, model: type[Model]) -> OptionsResult:
        try:
            qs = self.adapter.all(model)
            if self.adapter.supports_soft_delete(model):
                qs = self.adapter.filter(qs, self.adapter.active_q())
            rows = await self.adapter.fetch(qs, limit=self.limit)
        except BaseORMException as exc:
            return OptionsUnavailable(model=model.__name__, reason=str(exc))
        return OptionsSampled(
            options=[FieldOption(value=str(row.pk), label=_option_label(row)) for row in rows]
        )


# === Service ===

class SchemaIntrospectionService:
    """Build schema descriptions for the collections in a registry."""

    def __init__(
        self,
        registry: ModelRegistry,
        *,
        adapter: Adapter | None = None,
        settings: AutoAdminSettings | None = None,
        policy: MergePolicy = MergePolicy.SCHEMA_OPTIONS_WIN,
    ) -> None:
        self.registry = registry
        self.adapter = adapter or Adapter()
        self.settings = settings or current_settings()
        self.policy = policy
        self.sampler = ReferenceOptionSampler(
            self.adapter, limit=self.settings.reference_options_limit
        )

    def resolve(self, identifier: str) -> tuple[ModelConfig, type[Model]]:
        """Return the config and model class behind ``identifier``.

        Raises:
            NotFoundError: If the identifier or its model is unknown.
        """
        config = self.registry.resolve(identifier)
        if config is None:
            raise NotFoundError(
                f"Collection/Model '{identifier}' not found. "
                f"Available: {self.registry.describe_available()}"
            )
        model = self.adapter.get_model(config.model_name)
        if model is None:
            available = ", ".join(self.adapter.available_models())
            raise NotFoundError(
                f"Model '{config.model_name}' not found. Available models: {available}"
            )
        return config, model

    async def describe_model(self, identifier: str) -> ModelSchema:
        """Return the schema of the collection or model named ``identifier``."""
        config, model = self.resolve(identifier)
        return await self.build_schema(config, model)

    async def describe_all(self) -> dict[str, ModelSchema]:
        """Return schemas of every registered collection keyed by lowercase model name."""
        schemas: dict[str, ModelSchema] = {}
        for config in self.registry:
            model = self.adapter.get_model(config.model_name)
            if model is None:
                logger.warning("No model registered for collection %s", config.name)
                continue
            schemas[config.model_name.lower()] = await self.build_schema(config, model)
        return schemas

    def model_names(self) -> list[dict[str, Any]]:
        """Return the identifiers clients may use to address collections."""
        return [
            {
                "name": config.name,
                "displayName": config.display_name,
                "collection": config.name,
                "modelName": config.model_name,
                "pluralName": config.plural_name,
                "features": config.features.model_dump(by_alias=True),
            }
            for config in self.registry
        ]

    async def build_schema(self, config: ModelConfig, model: type[Model]) -> ModelSchema:
        """Describe ``model`` applying the overrides held by ``config``."""
        meta = model._meta
        descriptors = await self.describe_fields(
            TortoiseFieldSource.iter_model(model),
            depth=0,
            overrides=config.field_overrides,
            hidden=config.hidden_fields,
        )
        return ModelSchema(
            name=config.model_name.lower(),
            display_name=config.display_name,
            primary_key=meta.pk_attr,
            timestamps="created_at" in meta.fields_map and "updated_at" in meta.fields_map,
            fields=descriptors,
        )

    async def describe_fields(
        self,
        sources: Iterable[FieldSource],
        *,
        depth: int,
        overrides: Mapping[str, str] | None = None,
        hidden: Iterable[str] = (),
    ) -> list[FieldDescriptor]:
        overrides = overrides or {}
        hidden = set(hidden)
        return [
            await self.describe_field(
                source,
                depth=depth,
                override=overrides.get(source.name),
                hidden=source.name in hidden,
            )
            for source in sources
        ]

    async def describe_field(
        self,
        source: FieldSource,
        *,
        depth: int = 0,
        override: str | None = None,
        hidden: bool = False,
    ) -> FieldDescriptor:
        """Build the descriptor of one field, recursing into sub-records."""
        semantic = resolve_semantic_type(source, override)
        validation = extract_validation(source, self.policy)
        options: list[FieldOption] | None = None

        if semantic is SemanticType.select:
            if source.reference is not None:
                result = await self.sampler.sample(source.reference)
                if isinstance(result, OptionsUnavailable):
                    logger.warning(
                        "Options for %s from %s unavailable: %s",
                        source.name,
                        result.model,
                        result.reason,
                    )
                options = result.options
            if validation.enum:
                options = [
                    FieldOption(value=value, label=capitalize_first(value))
                    for value in validation.enum
                ]

        array_item_type = None
        if semantic is SemanticType.array:
            array_item_type = (
                SemanticType.object if source.has_structured_items() else SemanticType.text
            )

        nested = None
        if semantic is SemanticType.object:
            children = source.sub_fields()
            if children and depth < self.settings.max_nesting_depth:
                nested = await self.describe_fields(children, depth=depth + 1)
            elif children:
                logger.debug("Nesting of %s truncated at depth %s", source.name, depth)

        label = generate_label(source.name)
        opts = source.options
        return FieldDescriptor(
            key=source.name,
            label=label,
            semantic_type=semantic,
            required=bool(validation.required),
            placeholder=placeholder_for(source.name, semantic, label),
            description=opts.description,
            options=options or None,
            validation=None if validation.is_empty() else validation,
            default_value=opts.default,
            readonly=source.readonly,
            hidden=hidden,
            array_item_type=array_item_type,
            nested=nested or None,
        )


__all__ = [
    "MergePolicy",
    "OptionsResult",
    "OptionsSampled",
    "OptionsUnavailable",
    "ReferenceOptionSampler",
    "SchemaIntrospectionService",
    "extract_validation",
    "resolve_semantic_type",
]


# The End
