# -*- coding: utf-8 -*-
"""
schema

Schema introspection and descriptor types.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .descriptors import (
    FieldDescriptor,
    FieldOption,
    FieldValidation,
    ModelSchema,
    SemanticType,
)
from .introspection import (
    MergePolicy,
    OptionsSampled,
    OptionsUnavailable,
    SchemaIntrospectionService,
)

__all__ = [
    "FieldDescriptor",
    "FieldOption",
    "FieldValidation",
    "MergePolicy",
    "ModelSchema",
    "OptionsSampled",
    "OptionsUnavailable",
    "SchemaIntrospectionService",
    "SemanticType",
]

# The End
