# -*- coding: utf-8 -*-
"""
schemas

Endpoints serving introspected collection schemas.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Sequence

from fastapi import APIRouter
from fastapi.params import Depends as DependsParam

from ..schema.introspection import SchemaIntrospectionService
from .responses import success_response


class SchemaAPI:
    """Expose :class:`SchemaIntrospectionService` over HTTP."""

    def __init__(
        self,
        service: SchemaIntrospectionService,
        *,
        dependencies: Sequence[DependsParam] = (),
    ) -> None:
        self.logger = logging.getLogger(__name__)
        self.service = service
        self.router = APIRouter(
            prefix="/schemas", tags=["schemas"], dependencies=list(dependencies)
        )
        # ``/models`` must precede ``/{model}``.
        self.router.get("", name="schemas.all")(self.all_schemas)
        self.router.get("/models", name="schemas.models")(self.model_names)
        self.router.get("/{model}", name="schemas.model")(self.model_schema)

    async def all_schemas(self):
        schemas = await self.service.describe_all()
        return success_response(
            {name: schema.to_public() for name, schema in schemas.items()}
        )

    async def model_names(self):
        return success_response(self.service.model_names())

    async def model_schema(self, model: str):
        schema = await self.service.describe_model(model)
        self.logger.debug("Served schema for %s", model)
        return success_response(schema.to_public())


__all__ = ["SchemaAPI"]


# The End
