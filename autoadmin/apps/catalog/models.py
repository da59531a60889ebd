# -*- coding: utf-8 -*-
"""
models

Tortoise models of the discount catalogue administered by the dashboard.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import re
from enum import Enum

from tortoise import fields
from tortoise.validators import (
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
    RegexValidator,
)

from ...fields import ArrayField, EmbeddedField
from ...models import SoftDeleteModel
from .schemas import Contact, GeoPoint, OfferCondition, WeeklyAvailability

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class CategoryType(str, Enum):
    shopping = "shopping"
    transport = "transport"
    entertainment = "entertainment"
    travel = "travel"
    technology = "technology"
    other = "other"


class CardType(str, Enum):
    credit = "credit"
    debit = "debit"
    prepaid = "prepaid"


class User(SoftDeleteModel):
    name = fields.CharField(max_length=100)
    email = fields.CharField(
        max_length=255,
        unique=True,
        validators=[RegexValidator(EMAIL_PATTERN, re.IGNORECASE)],
    )
    phone = fields.CharField(max_length=30, null=True)
    role = fields.CharEnumField(UserRole, default=UserRole.user)
    avatar_url = fields.CharField(max_length=500, null=True)
    is_active = fields.BooleanField(default=True)
    preferences = fields.JSONField(null=True)
    tags = ArrayField(str)

    class Meta:
        table = "users"

    def __str__(self) -> str:
        return self.name


class Tracking(SoftDeleteModel):
    """User activity entry."""

    user: fields.ForeignKeyNullableRelation[User] = fields.ForeignKeyField(
        "models.User", related_name="trackings", null=True, on_delete=fields.SET_NULL
    )
    action = fields.CharField(max_length=100)
    resource = fields.CharField(max_length=200, null=True)
    user_agent = fields.CharField(max_length=300, null=True)
    metadata = fields.JSONField(null=True)

    class Meta:
        table = "trackings"


class Category(SoftDeleteModel):
    name = fields.CharField(max_length=100)
    description = fields.TextField(null=True)
    type = fields.CharEnumField(CategoryType, default=CategoryType.other)
    icon = fields.CharField(max_length=20, null=True)
    color = fields.CharField(max_length=20, null=True)

    class Meta:
        table = "categories"

    def __str__(self) -> str:
        return self.name


class Poi(SoftDeleteModel):
    """Point of interest shown on the map."""

    name = fields.CharField(max_length=150)
    description = fields.TextField(null=True)
    address = fields.CharField(max_length=300, null=True)
    category = fields.CharField(max_length=100, null=True)
    location = EmbeddedField(GeoPoint, null=True)

    class Meta:
        table = "pois"


class Store(SoftDeleteModel):
    name = fields.CharField(max_length=150)
    address = fields.CharField(max_length=300, null=True)
    phone = fields.CharField(max_length=30, null=True)
    url = fields.CharField(max_length=500, null=True)
    logo = fields.CharField(max_length=500, null=True)
    category: fields.ForeignKeyNullableRelation[Category] = fields.ForeignKeyField(
        "models.Category", related_name="stores", null=True, on_delete=fields.SET_NULL
    )
    contact = EmbeddedField(Contact, null=True)
    tags = ArrayField(str)

    class Meta:
        table = "stores"

    def __str__(self) -> str:
        return self.name


class Offer(SoftDeleteModel):
    title = fields.CharField(max_length=200)
    description = fields.TextField(null=True)
    store: fields.ForeignKeyNullableRelation[Store] = fields.ForeignKeyField(
        "models.Store", related_name="offers", null=True, on_delete=fields.SET_NULL
    )
    category: fields.ForeignKeyNullableRelation[Category] = fields.ForeignKeyField(
        "models.Category", related_name="offers", null=True, on_delete=fields.SET_NULL
    )
    discount = fields.FloatField(
        null=True, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    valid_from = fields.DatetimeField(null=True)
    valid_until = fields.DatetimeField(null=True)
    availability = EmbeddedField(WeeklyAvailability, null=True)
    terms = ArrayField(str)
    conditions = ArrayField(OfferCondition)

    class Meta:
        table = "offers"

    def __str__(self) -> str:
        return self.title


class Comment(SoftDeleteModel):
    content = fields.TextField()
    author = fields.CharField(max_length=100)
    rating = fields.IntField(
        null=True, validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    offer: fields.ForeignKeyNullableRelation[Offer] = fields.ForeignKeyField(
        "models.Offer", related_name="comments", null=True, on_delete=fields.SET_NULL
    )

    class Meta:
        table = "comments"


class Brand(SoftDeleteModel):
    name = fields.CharField(max_length=100)
    logo = fields.CharField(max_length=500, null=True)
    website = fields.CharField(max_length=500, null=True)
    is_active = fields.BooleanField(default=True)

    class Meta:
        table = "brands"

    def __str__(self) -> str:
        return self.name


class Bank(SoftDeleteModel):
    name = fields.CharField(max_length=100)
    code = fields.CharField(max_length=10, validators=[MinLengthValidator(2)])
    country = fields.CharField(max_length=100, null=True)
    email = fields.CharField(max_length=255, null=True)
    phone = fields.CharField(max_length=30, null=True)
    website = fields.CharField(max_length=500, null=True)
    logo = fields.CharField(max_length=500, null=True)
    is_active = fields.BooleanField(default=True)

    class Meta:
        table = "banks"

    def __str__(self) -> str:
        return self.name


class Card(SoftDeleteModel):
    name = fields.CharField(max_length=100)
    card_number = fields.CharField(
        max_length=19, validators=[RegexValidator(r"^\d{13,19}$", 0)]
    )
    bank: fields.ForeignKeyRelation[Bank] = fields.ForeignKeyField(
        "models.Bank", related_name="cards", on_delete=fields.CASCADE
    )
    brand: fields.ForeignKeyNullableRelation[Brand] = fields.ForeignKeyField(
        "models.Brand", related_name="cards", null=True, on_delete=fields.SET_NULL
    )
    category: fields.ForeignKeyNullableRelation[Category] = fields.ForeignKeyField(
        "models.Category", related_name="cards", null=True, on_delete=fields.SET_NULL
    )
    type = fields.CharEnumField(CardType, default=CardType.credit)
    credit_limit = fields.DecimalField(max_digits=12, decimal_places=2, null=True)
    annual_fee = fields.DecimalField(max_digits=10, decimal_places=2, null=True)
    interest_rate = fields.FloatField(null=True)
    rewards = fields.TextField(null=True)
    benefits = ArrayField(str)
    is_active = fields.BooleanField(default=True)

    class Meta:
        table = "cards"

    def __str__(self) -> str:
        return self.name


__all__ = [
    "Bank",
    "Brand",
    "Card",
    "CardType",
    "Category",
    "CategoryType",
    "Comment",
    "Offer",
    "Poi",
    "Store",
    "Tracking",
    "User",
    "UserRole",
]


# The End
