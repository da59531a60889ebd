# -*- coding: utf-8 -*-
"""
crud

Generic list, read, write, trash and transfer operations.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .query import ListParams, Pagination, QueryBuilder
from .service import BulkValidation, CrudService, Page
from .validation import RecordValidator

__all__ = [
    "BulkValidation",
    "CrudService",
    "ListParams",
    "Page",
    "Pagination",
    "QueryBuilder",
    "RecordValidator",
]

# The End
