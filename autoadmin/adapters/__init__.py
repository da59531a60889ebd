# -*- coding: utf-8 -*-
"""
adapters

Persistence adapters.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .tortoise import Adapter

__all__ = ["Adapter"]

# The End
