# -*- coding: utf-8 -*-
"""
conf

Runtime configuration utilities for the autoadmin package.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from threading import RLock
from typing import Callable, Mapping


@dataclass
class AutoAdminSettings:
    """Container for dashboard configuration derived from environment variables."""

    environment: str = "development"
    database_url: str = "sqlite://:memory:"
    api_prefix: str = "/api"
    auth_enabled: bool = False
    jwt_secret_key: str | None = None
    jwt_algorithm: str = "HS256"
    schema_cache_ttl: int = 300
    reference_options_limit: int = 100
    max_nesting_depth: int = 8
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    generate_schemas: bool = True
    project_title: str = "AutoAdmin"

    def __post_init__(self) -> None:
        """Normalize values that arrive in loosely formatted shapes."""
        self.environment = (self.environment or "development").strip().lower()
        self.api_prefix = self._normalize_prefix(self.api_prefix)
        if self.auth_enabled and not self.jwt_secret_key:
            raise ValueError("jwt_secret_key is required when auth is enabled")
        if self.max_nesting_depth < 1:
            self.max_nesting_depth = 1

    @property
    def is_production(self) -> bool:
        """Return ``True`` when error details must be hidden from clients."""
        return self.environment == "production"

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        prefix: str = "AUTOADMIN_",
    ) -> "AutoAdminSettings":
        """Build a settings instance from environment variables."""
        source = env if env is not None else os.environ
        data = {key[len(prefix) :]: value for key, value in source.items() if key.startswith(prefix)}
        environment = data.get("ENVIRONMENT") or source.get("APP_ENV") or "development"
        database_url = data.get("DATABASE_URL") or source.get("DATABASE_URL") or "sqlite://:memory:"
        origins_raw = data.get("CORS_ORIGINS")
        origins = (
            [item.strip() for item in origins_raw.split(",") if item.strip()]
            if origins_raw
            else ["*"]
        )
        return cls(
            environment=environment,
            database_url=database_url,
            api_prefix=data.get("API_PREFIX") or "/api",
            auth_enabled=cls._to_bool(data.get("AUTH_ENABLED")),
            jwt_secret_key=data.get("JWT_SECRET_KEY") or None,
            jwt_algorithm=data.get("JWT_ALGORITHM") or "HS256",
            schema_cache_ttl=cls._to_int(data.get("SCHEMA_CACHE_TTL"), default=300),
            reference_options_limit=cls._to_int(
                data.get("REFERENCE_OPTIONS_LIMIT"), default=100
            ),
            max_nesting_depth=cls._to_int(data.get("MAX_NESTING_DEPTH"), default=8),
            cors_origins=origins,
            generate_schemas=cls._to_bool(data.get("GENERATE_SCHEMAS"), default=True),
            project_title=data.get("PROJECT_TITLE") or "AutoAdmin",
        )

    @staticmethod
    def _to_int(value: str | None, *, default: int) -> int:
        """Return an integer from ``value`` or ``default`` when conversion fails."""
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _to_bool(value: str | None, *, default: bool = False) -> bool:
        """Return a boolean parsed from ``value`` with a ``default`` fallback."""

        if value is None:
            return default
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        return default

    @staticmethod
    def _normalize_prefix(value: str) -> str:
        """Ensure the prefix has one leading slash and no trailing slash."""
        stripped = (value or "").strip().strip("/")
        if not stripped:
            return ""
        return "/" + stripped


class SettingsManager:
    """Central storage for the active ``AutoAdminSettings`` instance."""

    def __init__(self, initial: AutoAdminSettings | None = None) -> None:
        """Prepare storage with an optional preconfigured ``initial`` settings."""

        self._lock = RLock()
        self._settings = initial
        self._callbacks: list[Callable[[AutoAdminSettings], None]] = []

    def configure(self, settings: AutoAdminSettings) -> None:
        """Install a new settings instance and notify observers."""
        with self._lock:
            self._settings = settings
            for callback in list(self._callbacks):
                callback(settings)

    def current(self) -> AutoAdminSettings:
        """Return the active settings, lazily initializing from the environment."""
        with self._lock:
            if self._settings is None:
                self._settings = AutoAdminSettings.from_env()
            return self._settings

    def reset(self) -> None:
        """Forget the active settings so the next access rereads the environment."""
        with self._lock:
            self._settings = None

    def register(self, callback: Callable[[AutoAdminSettings], None]) -> None:
        """Register a callback invoked whenever settings change."""
        with self._lock:
            self._callbacks.append(callback)

    def unregister(self, callback: Callable[[AutoAdminSettings], None]) -> None:
        """Remove a previously registered settings change callback if present."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


_settings_manager = SettingsManager()


def configure(settings: AutoAdminSettings) -> None:
    """Public entry point to install application specific settings."""
    _settings_manager.configure(settings)


def current_settings() -> AutoAdminSettings:
    """Return the active settings instance used by autoadmin components."""
    return _settings_manager.current()


def reset_settings() -> None:
    """Drop the active settings instance."""
    _settings_manager.reset()


def register_settings_observer(callback: Callable[[AutoAdminSettings], None]) -> None:
    """Subscribe to configuration changes."""
    _settings_manager.register(callback)


def unregister_settings_observer(callback: Callable[[AutoAdminSettings], None]) -> None:
    """Unsubscribe from configuration changes previously registered."""
    _settings_manager.unregister(callback)


__all__ = [
    "AutoAdminSettings",
    "SettingsManager",
    "configure",
    "current_settings",
    "reset_settings",
    "register_settings_observer",
    "unregister_settings_observer",
]


# The End
