# -*- coding: utf-8 -*-
"""
commands

Click command factories for the autoadmin CLI.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable

import click

from ...apps.catalog.seed import seed_catalog
from ...core.configuration import ModelRegistry
from ...core.exceptions import NotFoundError
from ...orm import ORMLifecycle
from ...schema.introspection import SchemaIntrospectionService


async def _with_orm(orm: ORMLifecycle, action: Callable[[], Awaitable[Any]]) -> Any:
    await orm.startup()
    try:
        return await action()
    finally:
        await orm.shutdown()


class SeedCommand:
    """Produce the `seed` command populating the sample catalogue."""

    def __init__(
        self,
        orm: ORMLifecycle,
        *,
        seeder: Callable[..., Awaitable[dict[str, int]]] = seed_catalog,
    ) -> None:
        """Store the ORM lifecycle and the seeding coroutine."""
        self._orm = orm
        self._seeder = seeder

    def execute(self, keep: bool) -> None:
        """Seed the database and report the inserted rows."""
        counts = asyncio.run(_with_orm(self._orm, lambda: self._seeder(clear=not keep)))
        for collection, count in counts.items():
            click.echo(f"{collection}: {count}")
        click.secho("Sample data seeded.", fg="green")

    def to_click_command(self) -> click.Command:
        """Return a Click command configured for seeding."""
        return click.Command(
            name="seed",
            callback=self.execute,
            params=[
                click.Option(
                    ["--keep"],
                    is_flag=True,
                    help="Keep existing catalogue rows instead of clearing them",
                ),
            ],
            help="Populate the catalogue with sample categories, banks, brands and cards.",
        )


class SchemaCommand:
    """Produce the `schema` command printing an introspected schema."""

    def __init__(self, orm: ORMLifecycle, service: SchemaIntrospectionService) -> None:
        """Store the ORM lifecycle and the introspection service."""
        self._orm = orm
        self._service = service

    def execute(self, model: str) -> None:
        """Print the schema of ``model`` as JSON."""
        try:
            schema = asyncio.run(
                _with_orm(self._orm, lambda: self._service.describe_model(model))
            )
        except NotFoundError as error:
            click.secho(str(error), fg="red", err=True)
            raise click.exceptions.Exit(1)
        click.echo(json.dumps(schema.to_public(), indent=2, ensure_ascii=False))

    def to_click_command(self) -> click.Command:
        """Return a Click command configured for schema output."""
        return click.Command(
            name="schema",
            callback=self.execute,
            params=[click.Argument(["model"], required=True)],
            help="Print the introspected schema of a collection or model as JSON.",
        )


class ModelsCommand:
    """Produce the `models` command listing collections by UI group."""

    def __init__(self, registry: ModelRegistry) -> None:
        self._registry = registry

    def execute(self) -> None:
        for group, configs in self._registry.grouped().items():
            click.secho(group, bold=True)
            for config in configs:
                disabled = [name for name, on in config.features.model_dump(by_alias=True).items() if not on]
                suffix = f" (disabled: {', '.join(disabled)})" if disabled else ""
                click.echo(f"  {config.name:<12} {config.model_name}{suffix}")

    def to_click_command(self) -> click.Command:
        """Return a Click command configured for listing collections."""
        return click.Command(
            name="models",
            callback=self.execute,
            help="List registered collections grouped by navigation group.",
        )


# The End
