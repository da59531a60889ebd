# -*- coding: utf-8 -*-
"""
models

Static per-collection configuration: feature flags, search fields and UI metadata.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ConfigurationError


class Feature(str, Enum):
    """Operations that can be switched on or off per collection."""

    create = "create"
    read = "read"
    update = "update"
    delete = "delete"
    restore = "restore"
    export = "export"
    import_ = "import"
    bulk_operations = "bulkOperations"
    search = "search"
    filters = "filters"
    sort = "sort"
    view_trash = "viewTrash"


class ModelFeatures(BaseModel):
    """Feature flag set of a collection; every flag defaults to enabled."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    create: bool = True
    read: bool = True
    update: bool = True
    delete: bool = True
    restore: bool = True
    export: bool = True
    import_: bool = Field(True, alias="import")
    bulk_operations: bool = Field(True, alias="bulkOperations")
    search: bool = True
    filters: bool = True
    sort: bool = True
    view_trash: bool = Field(True, alias="viewTrash")

    def enabled(self, feature: Feature | str) -> bool:
        """Return whether ``feature`` is switched on."""
        key = Feature(feature)
        attr = key.name
        return getattr(self, attr) is True

    def with_overrides(self, **flags: bool) -> "ModelFeatures":
        """Return a copy with selected flags replaced."""
        return self.model_copy(update=flags)


class ModelUIConfig(BaseModel):
    """Navigation metadata for a collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    icon: str = "Circle"
    color: str = "gray"
    group: str = "Other"
    description: str | None = None


class ModelConfig(BaseModel):
    """Immutable configuration of one collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    model_name: str = Field(alias="modelName")
    display_name: str = Field(alias="displayName")
    plural_name: str = Field(alias="pluralName")
    search_fields: tuple[str, ...] = Field(default=(), alias="searchFields")
    features: ModelFeatures = Field(default_factory=ModelFeatures)
    ui: ModelUIConfig = Field(default_factory=ModelUIConfig)
    priority: int = 999
    hidden: bool = False
    admin_only: bool = Field(False, alias="adminOnly")
    field_overrides: Mapping[str, str] = Field(default_factory=dict, alias="fieldOverrides")
    hidden_fields: tuple[str, ...] = Field(default=(), alias="hiddenFields")

    @classmethod
    def build(
        cls,
        collection_name: str,
        model_name: str,
        *,
        plural_name: str | None = None,
        search_fields: Iterable[str] | None = None,
        features: ModelFeatures | None = None,
        ui: ModelUIConfig | None = None,
        **extra,
    ) -> "ModelConfig":
        """Assemble a config filling derived names and UI defaults."""
        plural = plural_name or pluralize(model_name)
        base_ui = ui or ModelUIConfig()
        if base_ui.description is None:
            base_ui = base_ui.model_copy(
                update={"description": f"Manage {plural.lower()}"}
            )
        return cls(
            name=collection_name,
            model_name=model_name,
            display_name=model_name,
            plural_name=plural,
            search_fields=tuple(search_fields or ()),
            features=features or ModelFeatures(),
            ui=base_ui,
            **extra,
        )

    def is_enabled(self, feature: Feature | str) -> bool:
        """Return whether ``feature`` is enabled for this collection."""
        return self.features.enabled(feature)

    def to_public(self) -> dict:
        """Return the camelCase representation served to clients."""
        return self.model_dump(by_alias=True, mode="json")


def pluralize(model_name: str) -> str:
    """Return the English plural used for navigation labels."""
    if model_name.endswith("y"):
        return model_name[:-1] + "ies"
    if model_name.endswith("s"):
        return model_name + "es"
    return model_name + "s"


class ModelRegistry:
    """Read-only registry of collection configurations built at startup."""

    def __init__(self, configs: Iterable[ModelConfig]) -> None:
        """Index ``configs`` by collection name."""
        self._configs: dict[str, ModelConfig] = {}
        for config in configs:
            key = config.name.lower()
            if key in self._configs:
                raise ConfigurationError(f"Duplicate collection '{config.name}'")
            self._configs[key] = config

    def __iter__(self):
        return iter(self._configs.values())

    def __len__(self) -> int:
        return len(self._configs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._configs

    def get(self, name: str) -> ModelConfig | None:
        """Return the config registered under collection ``name``."""
        return self._configs.get(name.lower())

    def get_by_model_name(self, model_name: str) -> ModelConfig | None:
        """Return the config whose model name matches exactly."""
        for config in self._configs.values():
            if config.model_name == model_name:
                return config
        return None

    def resolve(self, identifier: str) -> ModelConfig | None:
        """Resolve ``identifier`` against collection and model names.

        Collection names are matched case-insensitively first, then the exact
        model name, then the model name ignoring case.
        """
        config = self.get(identifier)
        if config is not None:
            return config
        config = self.get_by_model_name(identifier)
        if config is not None:
            return config
        lowered = identifier.lower()
        for candidate in self._configs.values():
            if candidate.model_name.lower() == lowered:
                return candidate
        return None

    def is_feature_enabled(self, name: str, feature: Feature | str) -> bool:
        """Return ``False`` for unknown collections or disabled features."""
        config = self.get(name)
        return bool(config and config.is_enabled(feature))

    def visible(self) -> list[ModelConfig]:
        """Return non-hidden configs ordered by priority."""
        return sorted(
            (config for config in self._configs.values() if not config.hidden),
            key=lambda config: config.priority,
        )

    def grouped(self) -> dict[str, list[ModelConfig]]:
        """Return visible configs grouped by their UI group."""
        groups: dict[str, list[ModelConfig]] = {}
        for config in self.visible():
            groups.setdefault(config.ui.group or "Other", []).append(config)
        return groups

    def describe_available(self) -> str:
        """Return the ``collection (Model)`` list used in lookup errors."""
        return ", ".join(
            f"{config.name} ({config.model_name})" for config in self._configs.values()
        )


__all__ = [
    "Feature",
    "ModelConfig",
    "ModelFeatures",
    "ModelRegistry",
    "ModelUIConfig",
    "pluralize",
]


# The End
