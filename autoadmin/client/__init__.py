# -*- coding: utf-8 -*-
"""
client

Python client deriving tables, forms, filters and imports from schemas.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .filters import FilterState
from .forms import FormContractBuilder, FormState, default_values
from .importing import ImportSession, detect_format, parse_file
from .records import RecordsClient
from .schema import SchemaClient
from .transport import ApiError, ApiTransport
from .views import get_detail_fields, get_form_fields, get_table_fields

__all__ = [
    "ApiError",
    "ApiTransport",
    "FilterState",
    "FormContractBuilder",
    "FormState",
    "ImportSession",
    "RecordsClient",
    "SchemaClient",
    "default_values",
    "detect_format",
    "get_detail_fields",
    "get_form_fields",
    "get_table_fields",
    "parse_file",
]

# The End
