# -*- coding: utf-8 -*-
"""
config

Per-collection configuration of the catalogue.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from ...core.configuration import ModelConfig, ModelFeatures, ModelRegistry, ModelUIConfig

MODULES: tuple[str, ...] = ("autoadmin.apps.catalog.models",)


def catalog_configs() -> list[ModelConfig]:
    """Return the configuration of every catalogue collection."""
    defaults = ModelFeatures()
    return [
        ModelConfig.build(
            "users",
            "User",
            search_fields=("name", "email", "phone"),
            ui=ModelUIConfig(
                icon="Users", color="blue", group="Core",
                description="Manage application users",
            ),
            priority=1,
        ),
        ModelConfig.build(
            "trackings",
            "Tracking",
            search_fields=("action", "resource"),
            features=defaults.with_overrides(
                create=False, update=False, import_=False, bulk_operations=False
            ),
            ui=ModelUIConfig(
                icon="Activity", color="cyan", group="Analytics",
                description="View user activity tracking",
            ),
            priority=9,
            admin_only=True,
        ),
        ModelConfig.build(
            "pois",
            "Poi",
            search_fields=("name", "address", "description", "category"),
            ui=ModelUIConfig(
                icon="MapPin", color="emerald", group="Location",
                description="Manage points of interest",
            ),
            priority=10,
        ),
        ModelConfig.build(
            "categories",
            "Category",
            search_fields=("name", "description"),
            ui=ModelUIConfig(
                icon="Tags", color="purple", group="Core",
                description="Manage offer categories",
            ),
            priority=3,
        ),
        ModelConfig.build(
            "stores",
            "Store",
            search_fields=("name", "address", "phone", "url"),
            ui=ModelUIConfig(
                icon="Store", color="teal", group="Business",
                description="Manage partner stores",
            ),
            priority=6,
        ),
        ModelConfig.build(
            "offers",
            "Offer",
            search_fields=("title", "description"),
            ui=ModelUIConfig(
                icon="Gift", color="red", group="Business",
                description="Manage offers and promotions",
            ),
            priority=7,
            field_overrides={"availability": "weekdays"},
        ),
        ModelConfig.build(
            "comments",
            "Comment",
            search_fields=("content", "author"),
            features=defaults.with_overrides(import_=False, bulk_operations=False),
            ui=ModelUIConfig(
                icon="MessageCircle", color="gray", group="Content",
                description="Manage user comments and reviews",
            ),
            priority=8,
        ),
        ModelConfig.build(
            "cards",
            "Card",
            search_fields=("name", "card_number"),
            ui=ModelUIConfig(
                icon="CreditCard", color="indigo", group="Financial",
                description="Manage credit and debit cards",
            ),
            priority=5,
        ),
        ModelConfig.build(
            "brands",
            "Brand",
            search_fields=("name", "logo"),
            ui=ModelUIConfig(
                icon="Award", color="orange", group="Financial",
                description="Manage card brands",
            ),
            priority=4,
        ),
        ModelConfig.build(
            "banks",
            "Bank",
            search_fields=("name", "code"),
            ui=ModelUIConfig(
                icon="Building2", color="green", group="Financial",
                description="Manage partner banks and financial institutions",
            ),
            priority=2,
        ),
    ]


def build_registry() -> ModelRegistry:
    """Return the immutable registry used by the catalogue application."""
    return ModelRegistry(catalog_configs())


__all__ = ["MODULES", "build_registry", "catalog_configs"]


# The End
