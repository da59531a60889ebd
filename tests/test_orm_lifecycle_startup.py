# -*- coding: utf-8 -*-
"""Tests for Tortoise initialisation performed by the ORM lifecycle."""

from __future__ import annotations

from autoadmin import orm as orm_module
from autoadmin.apps.catalog import MODULES
from autoadmin.conf import AutoAdminSettings
from autoadmin.orm import ORMLifecycle
from tests.conftest import DatabaseState


class RecordingTortoise:
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    async def init(self, *, config):
        self.calls.append(("init", config))

    async def generate_schemas(self, *, safe):
        self.calls.append(("generate_schemas", safe))

    async def close_connections(self):
        self.calls.append(("close_connections", None))


def test_config_lists_catalogue_modules() -> None:
    lifecycle = ORMLifecycle(settings=AutoAdminSettings(database_url="sqlite://db.sqlite3"))
    assert lifecycle.config == {
        "connections": {"default": "sqlite://db.sqlite3"},
        "apps": {"models": {"models": list(MODULES), "default_connection": "default"}},
    }


def test_startup_generates_schemas_when_enabled(monkeypatch) -> None:
    recorder = RecordingTortoise()
    monkeypatch.setattr(orm_module, "Tortoise", recorder)
    lifecycle = ORMLifecycle(settings=AutoAdminSettings())

    DatabaseState.run(lifecycle.startup())
    DatabaseState.run(lifecycle.shutdown())

    assert [name for name, _ in recorder.calls] == [
        "init",
        "generate_schemas",
        "close_connections",
    ]
    assert recorder.calls[1] == ("generate_schemas", True)


def test_startup_without_schema_generation(monkeypatch) -> None:
    recorder = RecordingTortoise()
    monkeypatch.setattr(orm_module, "Tortoise", recorder)
    lifecycle = ORMLifecycle(settings=AutoAdminSettings(generate_schemas=False))

    DatabaseState.run(lifecycle.startup())

    assert [name for name, _ in recorder.calls] == ["init"]


# The End
