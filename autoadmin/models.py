# -*- coding: utf-8 -*-
"""
models

Base model shared by every administered collection.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from tortoise import fields
from tortoise.models import Model


class SoftDeleteModel(Model):
    """Abstract base with identity, soft-delete flag and timestamps.

    ``deleted`` stays NULL while a row is active; ``False`` is accepted as
    active too.
    """

    id = fields.IntField(pk=True)
    deleted = fields.BooleanField(null=True, default=None, index=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True


__all__ = ["SoftDeleteModel"]


# The End
