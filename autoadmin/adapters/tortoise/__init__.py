# -*- coding: utf-8 -*-
"""
tortoise

Tortoise ORM adapter package.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .adapter import Adapter, SOFT_DELETE_FIELD

__all__ = ["Adapter", "SOFT_DELETE_FIELD"]

# The End
