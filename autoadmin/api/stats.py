# -*- coding: utf-8 -*-
"""
stats

Per-collection record counters.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Sequence

from fastapi import APIRouter
from fastapi.params import Depends as DependsParam

from ..crud.service import CrudService
from .responses import success_response


class StatsAPI:
    """Serve ``GET /stats`` with total, active and deleted counts."""

    def __init__(
        self,
        service: CrudService,
        *,
        dependencies: Sequence[DependsParam] = (),
    ) -> None:
        self.service = service
        self.router = APIRouter(tags=["stats"], dependencies=list(dependencies))
        self.router.get("/stats", name="stats")(self.stats)

    async def stats(self):
        return success_response(await self.service.stats())


__all__ = ["StatsAPI"]


# The End
