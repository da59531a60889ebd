# -*- coding: utf-8 -*-
"""
records

Client for the generic collection endpoints.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

import httpx

from .transport import ApiTransport


@dataclass
class RecordPage:
    """One page of records with its pagination metadata."""

    records: list[dict[str, Any]]
    pagination: dict[str, Any] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return int(self.pagination.get("total", len(self.records)))


@dataclass
class ExportPayload:
    """Downloaded export: CSV text or JSON records."""

    format: str
    records: list[dict[str, Any]] = field(default_factory=list)
    content: str = ""
    filename: str | None = None


class RecordsClient:
    """Call the CRUD endpoints of the registered collections."""

    def __init__(self, transport: ApiTransport | httpx.Client) -> None:
        if isinstance(transport, httpx.Client):
            transport = ApiTransport(transport)
        self.transport = transport

    def list(
        self,
        collection: str,
        params: Mapping[str, Any] | None = None,
        *,
        deleted: bool = False,
    ) -> RecordPage:
        path = f"{collection}/deleted" if deleted else collection
        body = self.transport.request("GET", path, params=dict(params or {}))
        return RecordPage(list(body.get("data") or []), dict(body.get("pagination") or {}))

    def get(self, collection: str, pk: Any) -> dict[str, Any]:
        return self.transport.request("GET", f"{collection}/{pk}")["data"]

    def create(self, collection: str, data: Mapping[str, Any]) -> dict[str, Any]:
        return self.transport.request("POST", collection, json=dict(data))["data"]

    def update(self, collection: str, pk: Any, data: Mapping[str, Any]) -> dict[str, Any]:
        return self.transport.request("PUT", f"{collection}/{pk}", json=dict(data))["data"]

    def delete(self, collection: str, pk: Any) -> dict[str, Any]:
        return self.transport.request("DELETE", f"{collection}/{pk}")["data"]

    def restore(self, collection: str, pk: Any) -> dict[str, Any]:
        return self.transport.request("PATCH", f"{collection}/{pk}/restore")["data"]

    def bulk_create(
        self, collection: str, records: Iterable[Mapping[str, Any]]
    ) -> list[dict[str, Any]]:
        payload = {"records": [dict(record) for record in records]}
        return list(self.transport.request("POST", f"{collection}/bulk", json=payload)["data"])

    def validate(
        self, collection: str, records: Iterable[Mapping[str, Any]]
    ) -> dict[str, Any]:
        payload = {"records": [dict(record) for record in records]}
        return self.transport.request("POST", f"{collection}/validate", json=payload)["data"]

    def export(
        self,
        collection: str,
        *,
        format: str = "json",
        filters: Mapping[str, Any] | None = None,
        fields: Iterable[str] | None = None,
    ) -> ExportPayload:
        """Download an export; ``filters`` are applied server side when given."""
        params: dict[str, Any] = {"format": format}
        if filters:
            params.update(filters)
            params["useFilters"] = "true"
        if fields:
            params["fields"] = ",".join(fields)
        response = self.transport.send("GET", f"{collection}/export", params=params)
        if response.headers.get("content-type", "").startswith("text/csv"):
            disposition = response.headers.get("content-disposition", "")
            filename = disposition.split("filename=")[-1].strip('"') if "filename=" in disposition else None
            return ExportPayload(format, content=response.text, filename=filename)
        data = response.json().get("data")
        if isinstance(data, list):
            return ExportPayload(format, records=data)
        return ExportPayload(format, content=data or "")


__all__ = ["ExportPayload", "RecordPage", "RecordsClient"]


# The End
