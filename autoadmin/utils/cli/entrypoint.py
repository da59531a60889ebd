# -*- coding: utf-8 -*-
"""
cli

Click entry point for the autoadmin toolkit.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import click

from ...apps.catalog import build_registry
from ...conf import AutoAdminSettings, current_settings
from ...core.configuration import ModelRegistry
from ...orm import ORMLifecycle
from ...schema.introspection import SchemaIntrospectionService
from .commands import ModelsCommand, SchemaCommand, SeedCommand


class AutoAdminCLI:
    """Aggregate all CLI commands exposed by the package."""

    def __init__(
        self,
        *,
        settings: AutoAdminSettings | None = None,
        registry: ModelRegistry | None = None,
        orm: ORMLifecycle | None = None,
    ) -> None:
        """Create command instances required to build the CLI group."""
        settings = settings or current_settings()
        registry = registry or build_registry()
        orm = orm or ORMLifecycle(settings=settings)
        service = SchemaIntrospectionService(registry, settings=settings)
        self._seed_command = SeedCommand(orm)
        self._schema_command = SchemaCommand(orm, service)
        self._models_command = ModelsCommand(registry)

    def create_cli(self) -> click.Group:
        """Build the Click group with all registered commands."""
        group = click.Group(
            name="autoadmin",
            help="Command line tools for the autoadmin dashboard backend.",
        )
        group.add_command(self._seed_command.to_click_command())
        group.add_command(self._schema_command.to_click_command())
        group.add_command(self._models_command.to_click_command())
        return group


cli = AutoAdminCLI().create_cli()


# The End
