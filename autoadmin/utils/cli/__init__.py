# -*- coding: utf-8 -*-
"""
cli

CLI utilities for the autoadmin toolkit.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from .commands import ModelsCommand, SchemaCommand, SeedCommand
from .entrypoint import AutoAdminCLI, cli

__all__ = [
    "AutoAdminCLI",
    "ModelsCommand",
    "SchemaCommand",
    "SeedCommand",
    "cli",
]


# The End
