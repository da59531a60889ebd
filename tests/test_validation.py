# -*- coding: utf-8 -*-
"""
Test payload coercion and record validation against model definitions.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from autoadmin.apps.catalog.models import Bank, Card, CardType, Poi
from autoadmin.core.exceptions import ValidationFailedError
from autoadmin.crud.validation import CoercionError, RecordValidator, coerce_value
from tests.conftest import DatabaseState


class TestCoercion:
    db: DatabaseState

    @classmethod
    def setup_class(cls) -> None:
        cls.db = DatabaseState()
        cls.db.start()

    @classmethod
    def teardown_class(cls) -> None:
        cls.db.stop()

    def field(self, model, name):
        return model._meta.fields_map[name]

    def test_booleans(self) -> None:
        is_active = self.field(Bank, "is_active")
        assert coerce_value(is_active, "true") is True
        assert coerce_value(is_active, "0") is False
        assert coerce_value(is_active, False) is False
        with pytest.raises(CoercionError):
            coerce_value(is_active, "perhaps")

    def test_integers(self) -> None:
        pk = self.field(Bank, "id")
        assert coerce_value(pk, "42") == 42
        assert coerce_value(pk, 3.0) == 3
        with pytest.raises(CoercionError, match="must be an integer"):
            coerce_value(pk, "3.5")
        with pytest.raises(CoercionError):
            coerce_value(pk, True)

    def test_numbers(self) -> None:
        assert coerce_value(self.field(Card, "interest_rate"), "18.5") == 18.5
        assert coerce_value(self.field(Card, "credit_limit"), "1000.50") == Decimal("1000.50")
        with pytest.raises(CoercionError, match="must be a number"):
            coerce_value(self.field(Card, "annual_fee"), "free")

    def test_enums(self) -> None:
        card_type = self.field(Card, "type")
        assert coerce_value(card_type, "debit") is CardType.debit
        with pytest.raises(CoercionError) as info:
            coerce_value(card_type, "gold")
        assert str(info.value) == "must be one of: credit, debit, prepaid"

    def test_datetimes(self) -> None:
        created = self.field(Bank, "created_at")
        value = coerce_value(created, "2024-05-01T10:30:00Z")
        assert value == dt.datetime(2024, 5, 1, 10, 30, tzinfo=dt.timezone.utc)
        with pytest.raises(CoercionError, match="must be a valid date"):
            coerce_value(created, "yesterday")

    def test_text_rejects_structures(self) -> None:
        name = self.field(Bank, "name")
        assert coerce_value(name, 12) == "12"
        with pytest.raises(CoercionError, match="must be a string"):
            coerce_value(name, {"a": 1})

    def test_json_is_passed_through(self) -> None:
        benefits = self.field(Card, "benefits")
        assert coerce_value(benefits, ["a", "b"]) == ["a", "b"]


class TestRecordValidator:
    db: DatabaseState
    validator: RecordValidator

    @classmethod
    def setup_class(cls) -> None:
        cls.db = DatabaseState()
        cls.db.start()
        cls.validator = RecordValidator()

    @classmethod
    def teardown_class(cls) -> None:
        cls.db.stop()

    def test_unknown_and_managed_keys_are_dropped(self) -> None:
        cleaned, errors = self.validator.check(
            Bank,
            {
                "id": 5,
                "name": "Bank",
                "code": "BK",
                "deleted": True,
                "created_at": "2020-01-01",
                "colour": "red",
            },
        )
        assert errors == {}
        assert cleaned == {"name": "Bank", "code": "BK"}

    def test_required_fields(self) -> None:
        errors = self.validator.errors(Bank, {"code": "BK"})
        assert errors == {"name": "This field is required"}
        errors = self.validator.errors(Bank, {"name": "  ", "code": "BK"})
        assert errors == {"name": "This field is required"}

    def test_partial_checks_supplied_keys_only(self) -> None:
        cleaned, errors = self.validator.check(Bank, {"country": "Spain"}, partial=True)
        assert errors == {}
        assert cleaned == {"country": "Spain"}
        errors = self.validator.errors(Bank, {"name": None}, partial=True)
        assert errors == {"name": "This field is required"}

    def test_nullable_fields_accept_null(self) -> None:
        cleaned, errors = self.validator.check(
            Card,
            {"name": "Card", "card_number": "1234567890123", "bank": 1, "credit_limit": None},
        )
        assert errors == {}
        assert cleaned["credit_limit"] is None

    def test_max_length(self) -> None:
        errors = self.validator.errors(Bank, {"name": "x" * 101, "code": "BK"})
        assert errors == {"name": "must be at most 100 characters"}

    def test_declared_validators(self) -> None:
        errors = self.validator.errors(Bank, {"name": "Bank", "code": "B"})
        assert set(errors) == {"code"}
        errors = self.validator.errors(
            Card, {"name": "Card", "card_number": "12ab", "bank": 1}
        )
        assert set(errors) == {"card_number"}

    def test_foreign_keys_map_to_source_column(self) -> None:
        cleaned = self.validator.clean(
            Card, {"name": "Card", "card_number": "1234567890123", "bank": "7"}
        )
        assert cleaned["bank_id"] == 7
        assert "bank" not in cleaned
        cleaned = self.validator.clean(
            Card, {"name": "Card", "card_number": "1234567890123", "bank_id": 8}
        )
        assert cleaned["bank_id"] == 8

    def test_missing_foreign_key(self) -> None:
        errors = self.validator.errors(Card, {"name": "Card", "card_number": "1234567890123"})
        assert errors == {"bank": "This field is required"}

    def test_embedded_structure(self) -> None:
        errors = self.validator.errors(Poi, {"name": "Peak", "location": {"lat": 95, "lng": 0}})
        assert errors["location"].startswith("lat:")
        cleaned = self.validator.clean(Poi, {"name": "Peak", "location": {"lat": 45, "lng": 7}})
        assert cleaned["location"] == {"lat": 45, "lng": 7}

    def test_array_items(self) -> None:
        errors = self.validator.errors(
            Card,
            {"name": "Card", "card_number": "1234567890123", "bank": 1, "benefits": [{"x": 1}]},
        )
        assert set(errors) == {"benefits"}

    def test_clean_raises_with_field_errors(self) -> None:
        with pytest.raises(ValidationFailedError) as info:
            self.validator.clean(Bank, {})
        assert info.value.errors == {
            "name": "This field is required",
            "code": "This field is required",
        }
        assert info.value.status_code == 400


# The End
