# -*- coding: utf-8 -*-
"""
configuration

Collection configuration registry.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .models import (
    Feature,
    ModelConfig,
    ModelFeatures,
    ModelRegistry,
    ModelUIConfig,
    pluralize,
)

__all__ = [
    "Feature",
    "ModelConfig",
    "ModelFeatures",
    "ModelRegistry",
    "ModelUIConfig",
    "pluralize",
]


# The End
