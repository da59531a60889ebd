# -*- coding: utf-8 -*-
"""
router

Mount the generic CRUD endpoints for every registered collection.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Sequence

from fastapi import APIRouter, Body, Request
from fastapi.params import Depends as DependsParam
from starlette.responses import Response

from ..api.responses import success_response
from ..core.configuration import ModelConfig, ModelRegistry
from .export import ExportFormat
from .service import CrudService


def query_params(request: Request) -> dict[str, Any]:
    """Return the query string as a mapping; repeated keys become lists."""
    query: dict[str, Any] = {}
    for key, value in request.query_params.multi_items():
        if key not in query:
            query[key] = value
        elif isinstance(query[key], list):
            query[key].append(value)
        else:
            query[key] = [query[key], value]
    return query


class CollectionEndpoints:
    """Request handlers bound to one collection."""

    def __init__(self, service: CrudService, config: ModelConfig) -> None:
        self.service = service
        self.config = config
        self.collection = config.name

    async def list(self, request: Request):
        page = await self.service.get_all(self.collection, query_params(request))
        return success_response(page.records, pagination=page.pagination.to_public())

    async def deleted(self, request: Request):
        page = await self.service.get_deleted(self.collection, query_params(request))
        return success_response(page.records, pagination=page.pagination.to_public())

    async def export(self, request: Request):
        result = await self.service.export(self.collection, query_params(request))
        if result.format is ExportFormat.csv and result.content:
            return Response(
                content=result.content,
                media_type="text/csv",
                headers={
                    "Content-Disposition": f'attachment; filename="{result.filename}"'
                },
            )
        if result.format is ExportFormat.csv:
            return success_response("")
        return success_response(result.records)

    async def get(self, pk: str):
        record = await self.service.get_by_id(self.collection, pk)
        return success_response(record)

    async def create(self, payload: Any = Body(None)):
        record = await self.service.create(self.collection, payload)
        return success_response(
            record,
            message=f"{self.config.model_name} created successfully",
            status_code=201,
        )

    async def bulk(self, payload: Any = Body(None)):
        records = payload.get("records") if isinstance(payload, dict) else payload
        created = await self.service.bulk_create(self.collection, records)
        return success_response(
            created,
            message=f"{len(created)} {self.config.model_name} records created successfully",
        )

    async def validate(self, payload: Any = Body(None)):
        records = payload.get("records") if isinstance(payload, dict) else payload
        result = await self.service.bulk_validate(self.collection, records)
        return success_response(result.to_public())

    async def update(self, pk: str, payload: Any = Body(None)):
        record = await self.service.update(self.collection, pk, payload)
        return success_response(
            record, message=f"{self.config.model_name} updated successfully"
        )

    async def delete(self, pk: str):
        record = await self.service.delete(self.collection, pk)
        return success_response(
            record, message=f"{self.config.model_name} deleted successfully"
        )

    async def restore(self, pk: str):
        record = await self.service.restore(self.collection, pk)
        return success_response(
            record, message=f"{self.config.model_name} restored successfully"
        )


class CrudRouterBuilder:
    """Build one ``APIRouter`` per collection of a registry."""

    def __init__(
        self,
        service: CrudService,
        registry: ModelRegistry,
        *,
        dependencies: Sequence[DependsParam] = (),
    ) -> None:
        self.service = service
        self.registry = registry
        self.dependencies = list(dependencies)

    def build_collection(self, config: ModelConfig) -> APIRouter:
        """Return the router serving ``config``.

        Literal sub-paths are registered before ``/{pk}`` so they are not
        captured as identifiers.
        """
        endpoints = CollectionEndpoints(self.service, config)
        name = config.name
        router = APIRouter(
            prefix=f"/{name}",
            tags=[config.plural_name],
            dependencies=self.dependencies,
        )
        router.get("", name=f"{name}.list")(endpoints.list)
        router.get("/deleted", name=f"{name}.deleted")(endpoints.deleted)
        router.get("/export", name=f"{name}.export")(endpoints.export)
        router.post("", name=f"{name}.create", status_code=201)(endpoints.create)
        router.post("/bulk", name=f"{name}.bulk")(endpoints.bulk)
        router.post("/validate", name=f"{name}.validate")(endpoints.validate)
        router.get("/{pk}", name=f"{name}.get")(endpoints.get)
        router.put("/{pk}", name=f"{name}.update")(endpoints.update)
        router.delete("/{pk}", name=f"{name}.delete")(endpoints.delete)
        router.patch("/{pk}/restore", name=f"{name}.restore")(endpoints.restore)
        return router

    def build(self) -> APIRouter:
        """Return a router aggregating every collection router."""
        router = APIRouter()
        for config in self.registry:
            router.include_router(self.build_collection(config))
        return router


__all__ = ["CollectionEndpoints", "CrudRouterBuilder", "query_params"]


# The End
