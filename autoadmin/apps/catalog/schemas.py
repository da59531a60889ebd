# -*- coding: utf-8 -*-
"""
schemas

Pydantic shapes of the sub-records stored in catalog JSON columns.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class Address(BaseModel):
    street: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    country: Optional[str] = None
    postal_code: Optional[str] = Field(None, max_length=20)


class Contact(BaseModel):
    """Store contact person with a postal address."""

    name: Optional[str] = None
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = None
    address: Optional[Address] = None


class GeoPoint(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class WeeklyAvailability(BaseModel):
    """Days of the week on which an offer applies."""

    mon: bool = False
    tue: bool = False
    wed: bool = False
    thu: bool = False
    fri: bool = False
    sat: bool = False
    sun: bool = False


class OfferCondition(BaseModel):
    kind: Literal["min_amount", "max_uses", "card_only", "other"] = "other"
    value: Optional[str] = None
    note: Optional[str] = Field(None, max_length=200)


__all__ = ["Address", "Contact", "GeoPoint", "OfferCondition", "WeeklyAvailability"]


# The End
