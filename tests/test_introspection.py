# -*- coding: utf-8 -*-
"""
Test schema introspection of the catalogue models.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging

import pytest
from tortoise.exceptions import OperationalError

from autoadmin.adapters.tortoise.adapter import Adapter
from autoadmin.apps.catalog import build_registry
from autoadmin.apps.catalog.models import Bank
from autoadmin.conf import AutoAdminSettings
from autoadmin.core.configuration import ModelConfig, ModelRegistry
from autoadmin.core.exceptions import NotFoundError
from autoadmin.schema import (
    FieldOption,
    MergePolicy,
    SchemaIntrospectionService,
    SemanticType,
)
from autoadmin.schema.introspection import extract_validation
from autoadmin.schema.sources import (
    FieldSource,
    SchemaOptions,
    StorageType,
    ValidatorSpec,
)
from tests.conftest import DatabaseState


class LengthSource(FieldSource):
    """Field declaring conflicting minimum lengths."""

    name = "nickname"

    @property
    def storage_type(self) -> StorageType:
        return StorageType.string

    def validators(self) -> list[ValidatorSpec]:
        return [ValidatorSpec("minlength", 3), ValidatorSpec("maxlength", 40)]

    @property
    def options(self) -> SchemaOptions:
        return SchemaOptions(required=True, minlength=5)

    def sub_fields(self) -> None:
        return None

    def has_structured_items(self) -> bool:
        return False


class FailingAdapter(Adapter):
    """Adapter whose reads always fail."""

    async def fetch(self, qs, **kwargs):
        raise OperationalError("no such table")


class TestSchemaIntrospection:
    db: DatabaseState
    service: SchemaIntrospectionService
    bank: Bank

    @classmethod
    def setup_class(cls) -> None:
        cls.db = DatabaseState()
        cls.db.start()
        cls.bank = cls.db.run(Bank.create(name="Sampled Bank", code="SB"))
        cls.service = SchemaIntrospectionService(build_registry(), settings=cls.db.settings)

    @classmethod
    def teardown_class(cls) -> None:
        cls.db.stop()

    def describe(self, identifier: str, service: SchemaIntrospectionService | None = None):
        return self.db.run((service or self.service).describe_model(identifier))

    def test_schema_header(self) -> None:
        schema = self.describe("banks")
        assert schema.name == "bank"
        assert schema.display_name == "Bank"
        assert schema.primary_key == "id"
        assert schema.timestamps is True
        assert "id" not in schema.fields_map

    def test_string_semantics(self) -> None:
        bank = self.describe("banks").fields_map
        assert bank["name"].semantic_type is SemanticType.text
        assert bank["email"].semantic_type is SemanticType.email
        assert bank["website"].semantic_type is SemanticType.url
        assert bank["logo"].semantic_type is SemanticType.url
        assert bank["is_active"].semantic_type is SemanticType.boolean
        assert bank["is_active"].default_value is True

        user = self.describe("users").fields_map
        assert user["email"].semantic_type is SemanticType.email
        assert user["avatar_url"].semantic_type is SemanticType.url

    def test_validation_is_merged(self) -> None:
        code = self.describe("banks").field("code")
        assert code.required is True
        assert code.validation.min == 2
        assert code.validation.max == 10
        assert code.placeholder == "Enter code"

        discount = self.describe("offers").field("discount")
        assert discount.semantic_type is SemanticType.number
        assert discount.required is False
        assert (discount.validation.min, discount.validation.max) == (0, 100)

    def test_merge_policy_decides_conflicts(self) -> None:
        source = LengthSource()
        assert extract_validation(source, MergePolicy.SCHEMA_OPTIONS_WIN).min == 5
        assert extract_validation(source, MergePolicy.VALIDATORS_WIN).min == 3
        assert extract_validation(source).max == 40

    def test_timestamps_are_readonly_dates(self) -> None:
        created = self.describe("banks").field("created_at")
        assert created.semantic_type is SemanticType.date
        assert created.readonly is True
        assert created.required is False

    def test_enum_becomes_select_with_options(self) -> None:
        card_type = self.describe("cards").field("type")
        assert card_type.semantic_type is SemanticType.select
        assert card_type.options == [
            FieldOption(value="credit", label="Credit"),
            FieldOption(value="debit", label="Debit"),
            FieldOption(value="prepaid", label="Prepaid"),
        ]
        assert card_type.validation.enum == ["credit", "debit", "prepaid"]
        assert card_type.default_value == "credit"

    def test_reference_options_are_sampled(self) -> None:
        bank = self.describe("cards").field("bank")
        assert bank.semantic_type is SemanticType.select
        assert bank.required is True
        assert FieldOption(value=str(self.bank.pk), label="Sampled Bank") in bank.options

    def test_unavailable_reference_options_degrade(self, caplog) -> None:
        service = SchemaIntrospectionService(
            build_registry(), adapter=FailingAdapter(), settings=self.db.settings
        )
        caplog.set_level(logging.WARNING, logger="autoadmin.schema.introspection")
        card = self.describe("cards", service).fields_map
        assert card["bank"].semantic_type is SemanticType.select
        assert card["bank"].options is None
        assert card["type"].options is not None
        assert "no such table" in caplog.text

    def test_arrays(self) -> None:
        offer = self.describe("offers").fields_map
        assert offer["terms"].semantic_type is SemanticType.array
        assert offer["terms"].array_item_type is SemanticType.text
        assert offer["conditions"].array_item_type is SemanticType.object
        assert offer["terms"].placeholder == "Enter terms and press Enter"

    def test_field_override_to_weekdays(self) -> None:
        availability = self.describe("offers").field("availability")
        assert availability.semantic_type is SemanticType.weekdays
        assert availability.nested is None

    def test_untyped_json_is_object_without_nested(self) -> None:
        preferences = self.describe("users").field("preferences")
        assert preferences.semantic_type is SemanticType.object
        assert preferences.nested is None

    def test_nested_sub_records(self) -> None:
        contact = self.describe("stores").field("contact")
        assert contact.semantic_type is SemanticType.object
        nested = {f.key: f for f in contact.nested}
        assert list(nested) == ["name", "email", "phone", "address"]
        assert nested["email"].semantic_type is SemanticType.email
        address = {f.key: f for f in nested["address"].nested}
        assert address["street"].required is True
        assert address["street"].validation.max == 200
        assert address["country"].required is False

    def test_nesting_depth_is_bounded(self) -> None:
        settings = AutoAdminSettings(max_nesting_depth=1)
        service = SchemaIntrospectionService(build_registry(), settings=settings)
        contact = self.describe("stores", service).field("contact")
        nested = {f.key: f for f in contact.nested}
        assert nested["address"].semantic_type is SemanticType.object
        assert nested["address"].nested is None

    def test_hidden_fields(self) -> None:
        registry = ModelRegistry(
            [ModelConfig.build("banks", "Bank", hidden_fields=("code",))]
        )
        service = SchemaIntrospectionService(registry, settings=self.db.settings)
        schema = self.describe("banks", service)
        assert schema.field("code").hidden is True
        assert schema.field("name").hidden is False

    def test_public_form_uses_camel_case(self) -> None:
        public = self.describe("offers").to_public()
        assert public["displayName"] == "Offer"
        assert public["primaryKey"] == "id"
        terms = next(f for f in public["fields"] if f["key"] == "terms")
        assert terms["semanticType"] == "array"
        assert terms["arrayItemType"] == "text"
        assert "options" not in terms

    def test_resolution_by_collection_or_model_name(self) -> None:
        for identifier in ("banks", "BANKS", "Bank", "bank"):
            assert self.describe(identifier).name == "bank"

    def test_unknown_identifier(self) -> None:
        with pytest.raises(NotFoundError) as info:
            self.service.resolve("unknown")
        message = str(info.value)
        assert message.startswith("Collection/Model 'unknown' not found. Available: ")
        assert "banks (Bank)" in message

    def test_model_names(self) -> None:
        names = {entry["name"]: entry for entry in self.service.model_names()}
        assert len(names) == 10
        tracking = names["trackings"]
        assert tracking["modelName"] == "Tracking"
        assert tracking["features"]["create"] is False
        assert tracking["features"]["bulkOperations"] is False
        assert names["banks"]["features"]["import"] is True

    def test_describe_all(self) -> None:
        schemas = self.db.run(self.service.describe_all())
        assert {"bank", "card", "offer", "store", "user"} <= set(schemas)


# The End
