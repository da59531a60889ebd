# -*- coding: utf-8 -*-
"""
catalog

Discount catalogue: banks, cards, stores, offers and related collections.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .config import MODULES, build_registry, catalog_configs

__all__ = ["MODULES", "build_registry", "catalog_configs"]

# The End
