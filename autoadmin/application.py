# -*- coding: utf-8 -*-
"""
application

Factory assembling the FastAPI application serving the dashboard API.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from tortoise.exceptions import BaseORMException

from .adapters.tortoise.adapter import Adapter
from .api.responses import envelope, error_response
from .api.schemas import SchemaAPI
from .api.stats import StatsAPI
from .apps.catalog import build_registry
from .conf import AutoAdminSettings, current_settings
from .core.auth import BearerAuthService
from .core.configuration import ModelRegistry
from .core.exceptions import HTTPError
from .crud.router import CrudRouterBuilder
from .crud.service import CrudService
from .orm import ORMLifecycle
from .schema.introspection import SchemaIntrospectionService

logger = logging.getLogger(__name__)


class ApplicationFactory:
    """Create configured FastAPI applications for a collection registry."""

    def __init__(
        self,
        *,
        settings: AutoAdminSettings | None = None,
        registry: ModelRegistry | None = None,
        adapter: Adapter | None = None,
        orm: ORMLifecycle | None = None,
        auth: BearerAuthService | None = None,
    ) -> None:
        """Persist configuration and supporting services for application builds."""
        self.settings = settings or current_settings()
        self.registry = registry or build_registry()
        self.adapter = adapter or Adapter()
        self.orm = orm or ORMLifecycle(settings=self.settings)
        self.auth = auth or BearerAuthService(self.settings)
        self.crud_service = CrudService(self.registry, adapter=self.adapter)
        self.schema_service = SchemaIntrospectionService(
            self.registry, adapter=self.adapter, settings=self.settings
        )

    def build(self, *, manage_orm: bool = True) -> FastAPI:
        """Return a FastAPI instance with routers, handlers and middleware.

        With ``manage_orm`` disabled the caller owns Tortoise initialisation.
        """
        app = FastAPI(
            title=self.settings.project_title,
            lifespan=self.orm.lifespan if manage_orm else None,
        )
        app.state.registry = self.registry
        app.state.settings = self.settings
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self.settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        self._register_exception_handlers(app)
        self._mount_routers(app)
        return app

    def _mount_routers(self, app: FastAPI) -> None:
        dependencies = [Depends(self.auth)]
        prefix = self.settings.api_prefix
        app.include_router(
            SchemaAPI(self.schema_service, dependencies=dependencies).router, prefix=prefix
        )
        app.include_router(
            StatsAPI(self.crud_service, dependencies=dependencies).router, prefix=prefix
        )
        app.include_router(
            CrudRouterBuilder(
                self.crud_service, self.registry, dependencies=dependencies
            ).build(),
            prefix=prefix,
        )

    def _register_exception_handlers(self, app: FastAPI) -> None:
        settings = self.settings

        async def handle_http_error(request: Request, exc: HTTPError):
            return error_response(exc, settings)

        async def handle_orm_error(request: Request, exc: BaseORMException):
            logger.exception("Unhandled ORM error on %s", request.url.path)
            return JSONResponse(
                envelope(
                    success=False,
                    message="Internal server error",
                    error=None if settings.is_production else str(exc),
                ),
                status_code=500,
            )

        app.add_exception_handler(HTTPError, handle_http_error)
        app.add_exception_handler(BaseORMException, handle_orm_error)


def create_app(settings: AutoAdminSettings | None = None) -> FastAPI:
    """Build the default catalogue application."""
    return ApplicationFactory(settings=settings).build()


__all__ = ["ApplicationFactory", "create_app"]


# The End
