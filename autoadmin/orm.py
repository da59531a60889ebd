# -*- coding: utf-8 -*-
"""
orm

Tortoise ORM startup and shutdown for the FastAPI application.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from fastapi import FastAPI
from tortoise import Tortoise

from .apps.catalog import MODULES
from .conf import AutoAdminSettings, current_settings

logger = logging.getLogger(__name__)


class ORMLifecycle:
    """Manage ORM startup and shutdown hooks for FastAPI."""

    def __init__(
        self,
        *,
        settings: AutoAdminSettings | None = None,
        modules: Iterable[str] = MODULES,
        app_label: str = "models",
    ) -> None:
        """Persist settings required to initialise Tortoise."""
        self._settings = settings
        self._modules = list(modules)
        self._app_label = app_label

    @property
    def settings(self) -> AutoAdminSettings:
        return self._settings or current_settings()

    @property
    def config(self) -> dict:
        """Return the Tortoise configuration mapping."""
        return {
            "connections": {"default": self.settings.database_url},
            "apps": {
                self._app_label: {
                    "models": list(self._modules),
                    "default_connection": "default",
                }
            },
        }

    async def startup(self) -> None:
        """Initialise Tortoise and create missing tables when configured."""
        await Tortoise.init(config=self.config)
        if self.settings.generate_schemas:
            await Tortoise.generate_schemas(safe=True)
        logger.info("ORM initialised for %s", self.settings.database_url)

    async def shutdown(self) -> None:
        """Close every Tortoise connection."""
        await Tortoise.close_connections()
        logger.info("ORM connections closed")

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        """Run :meth:`startup` and :meth:`shutdown` around the application."""
        await self.startup()
        try:
            yield
        finally:
            await self.shutdown()


__all__ = ["ORMLifecycle"]


# The End
