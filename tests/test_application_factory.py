# -*- coding: utf-8 -*-
"""Tests for the FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from autoadmin.application import ApplicationFactory
from autoadmin.conf import AutoAdminSettings
from autoadmin.core.configuration import ModelConfig, ModelRegistry
from autoadmin.orm import ORMLifecycle


class DummyLifecycle(ORMLifecycle):
    def __init__(self) -> None:
        super().__init__()
        self.events: list[str] = []

    async def startup(self) -> None:
        self.events.append("startup")

    async def shutdown(self) -> None:
        self.events.append("shutdown")


def test_application_factory_builds_configured_app() -> None:
    settings = AutoAdminSettings(project_title="Test Admin", api_prefix="admin/")
    registry = ModelRegistry([ModelConfig.build("banks", "Bank")])
    lifecycle = DummyLifecycle()

    app = ApplicationFactory(settings=settings, registry=registry, orm=lifecycle).build()

    assert isinstance(app, FastAPI)
    assert app.title == "Test Admin"
    assert app.state.registry is registry
    paths = {route.path for route in app.routes}
    assert "/admin/banks" in paths
    assert "/admin/banks/{pk}/restore" in paths
    assert "/admin/cards" not in paths
    assert "/admin/schemas/models" in paths

    with TestClient(app) as client:
        assert lifecycle.events == ["startup"]
        resp = client.get("/admin/schemas/models")
        assert resp.status_code == 200
        assert [entry["name"] for entry in resp.json()["data"]] == ["banks"]
    assert lifecycle.events == ["startup", "shutdown"]


def test_unmanaged_orm_skips_lifespan() -> None:
    lifecycle = DummyLifecycle()
    app = ApplicationFactory(
        settings=AutoAdminSettings(), orm=lifecycle
    ).build(manage_orm=False)

    with TestClient(app):
        pass
    assert lifecycle.events == []


# The End
