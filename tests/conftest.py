# -*- coding: utf-8 -*-
"""conftest

Shared testing utilities for autoadmin test-suite fixtures.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import asyncio
from typing import Any

from autoadmin.conf import AutoAdminSettings, reset_settings
from autoadmin.orm import ORMLifecycle


class SettingsState:
    """Manage the global settings singleton during tests."""

    def reset(self) -> None:
        """Restore settings built from the environment."""

        reset_settings()


class DatabaseState:
    """Start and stop an in-memory catalogue database outside FastAPI."""

    def __init__(self) -> None:
        """Prepare a lifecycle bound to an in-memory SQLite database."""

        self.settings = AutoAdminSettings(database_url="sqlite://:memory:")
        self.lifecycle = ORMLifecycle(settings=self.settings)

    def start(self) -> None:
        """Initialise Tortoise and create the catalogue tables."""

        asyncio.run(self.lifecycle.startup())

    def stop(self) -> None:
        """Close every connection opened by :meth:`start`."""

        asyncio.run(self.lifecycle.shutdown())

    @staticmethod
    def run(coro: Any) -> Any:
        """Run ``coro`` to completion and return its result."""

        return asyncio.run(coro)


settings_state = SettingsState()


__all__ = ["DatabaseState", "settings_state"]


# The End
