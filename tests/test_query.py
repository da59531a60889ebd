# -*- coding: utf-8 -*-
"""
Test list parameter parsing and query building.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import pytest

from autoadmin.adapters.tortoise.adapter import Adapter
from autoadmin.apps.catalog import build_registry
from autoadmin.apps.catalog.models import Bank, Card
from autoadmin.core.configuration import ModelConfig
from autoadmin.core.exceptions import BadRequestError
from autoadmin.crud.query import EXPORT_PARAMS, ListParams, Pagination, QueryBuilder
from tests.conftest import DatabaseState


class TestListParams:
    def test_defaults(self) -> None:
        params = ListParams.from_query({})
        assert (params.page, params.limit, params.sort, params.order) == (1, 10, None, "asc")
        assert params.search is None
        assert params.filters == {}
        assert params.offset == 0

    def test_invalid_numbers_fall_back(self) -> None:
        params = ListParams.from_query({"page": "0", "limit": "many"})
        assert (params.page, params.limit) == (1, 10)

    def test_parsing(self) -> None:
        params = ListParams.from_query(
            {
                "page": "3",
                "limit": "5",
                "sort": "name",
                "order": "DESC",
                "search": "  visa ",
                "is_active": "true",
            }
        )
        assert params.offset == 10
        assert params.order == "desc"
        assert params.search == "visa"
        assert params.filters == {"is_active": "true"}

    def test_blank_search_is_ignored(self) -> None:
        assert ListParams.from_query({"search": "   "}).search is None

    def test_export_parameters_are_not_filters(self) -> None:
        params = ListParams.from_query(
            {"format": "csv", "useFilters": "true", "fields": "name", "code": "AB"},
            reserved=EXPORT_PARAMS,
        )
        assert params.filters == {"code": "AB"}


class TestPagination:
    def test_metadata(self) -> None:
        assert Pagination(page=2, limit=10, total=25).to_public() == {
            "page": 2,
            "limit": 10,
            "total": 25,
            "totalPages": 3,
            "hasNext": True,
            "hasPrev": True,
        }

    def test_empty(self) -> None:
        public = Pagination(page=1, limit=10, total=0).to_public()
        assert public["totalPages"] == 0
        assert public["hasNext"] is False


class TestQueryBuilder:
    db: DatabaseState
    adapter: Adapter

    @classmethod
    def setup_class(cls) -> None:
        cls.db = DatabaseState()
        cls.db.start()
        cls.adapter = Adapter()
        registry = build_registry()
        cls.banks = QueryBuilder(cls.adapter, registry.get("banks"), Bank)
        cls.cards = QueryBuilder(cls.adapter, registry.get("cards"), Card)

    @classmethod
    def teardown_class(cls) -> None:
        cls.db.stop()

    def test_filter_lookups(self) -> None:
        lookups = self.banks.filter_lookups(
            {"is_active": "false", "code": "AB", "unknown": "x", "name": "  "}
        )
        assert lookups == {"is_active": False, "code": "AB"}

    def test_foreign_key_filter_uses_source_column(self) -> None:
        assert self.cards.filter_lookups({"bank": "3"}) == {"bank_id": 3}

    def test_list_values_match_any_member(self) -> None:
        assert self.banks.filter_lookups({"code": ["AB", " ", "CD"]}) == {
            "code__in": ["AB", "CD"]
        }
        assert self.cards.filter_lookups({"bank": ["1", "2"]}) == {"bank_id__in": [1, 2]}
        assert self.banks.filter_lookups({"code": [""]}) == {}

    def test_json_columns_are_not_filterable(self) -> None:
        assert self.cards.filter_lookups({"benefits": "x"}) == {}

    def test_invalid_filter_value(self) -> None:
        with pytest.raises(BadRequestError) as info:
            self.cards.filter_lookups({"credit_limit": "lots"})
        assert str(info.value) == "Invalid value for filter 'credit_limit'"

    def test_search_fields_are_limited_to_text_columns(self) -> None:
        config = ModelConfig.build("banks", "Bank", search_fields=("name", "is_active"))
        builder = QueryBuilder(self.adapter, config, Bank)
        assert builder.search_fields() == ["name"]
        default = QueryBuilder(self.adapter, ModelConfig.build("banks", "Bank"), Bank)
        assert default.search_fields() == ["name"]
        assert self.cards.search_fields() == ["name", "card_number"]

    def test_ordering(self) -> None:
        desc = ListParams(sort="name", order="desc")
        assert self.banks.ordering(desc) == ("-name",)
        assert self.cards.ordering(ListParams(sort="bank")) == ("bank_id",)
        assert self.cards.ordering(ListParams(sort="benefits")) == ("-created_at",)
        assert self.banks.ordering(ListParams(sort="missing")) == ("-created_at",)
        assert self.banks.ordering() == ("-created_at",)

    def test_active_condition_accepts_null_and_false(self) -> None:
        async def scenario() -> tuple[int, int]:
            await Bank.all().delete()
            await Bank.create(name="Unset", code="UN")
            await Bank.create(name="Explicit", code="EX", deleted=False)
            await Bank.create(name="Gone", code="GO", deleted=True)
            active = self.banks.condition(ListParams())
            trash = self.banks.condition(ListParams(), trash=True)
            return (
                await self.adapter.count(self.adapter.filter(Bank, active)),
                await self.adapter.count(self.adapter.filter(Bank, trash)),
            )

        assert self.db.run(scenario()) == (2, 1)

    def test_condition_combines_filters_and_search(self) -> None:
        async def scenario() -> list[str]:
            await Bank.all().delete()
            await Bank.create(name="North Savings", code="NS", is_active=True)
            await Bank.create(name="North Credit", code="NC", is_active=False)
            await Bank.create(name="South Savings", code="SS", is_active=True)
            params = ListParams.from_query({"search": "north", "is_active": "true"})
            rows = await self.adapter.fetch(
                self.adapter.filter(Bank, self.banks.condition(params))
            )
            return [row.name for row in rows]

        assert self.db.run(scenario()) == ["North Savings"]

    def test_disabled_filters_and_search(self) -> None:
        params = ListParams.from_query({"search": "north", "code": "NS"})
        condition = self.banks.condition(params, use_filters=False, use_search=False)

        async def scenario() -> int:
            return await self.adapter.count(self.adapter.filter(Bank, condition))

        active_total = self.db.run(
            self.adapter.count(self.adapter.filter(Bank, self.adapter.active_q()))
        )
        assert self.db.run(scenario()) == active_total


# The End
