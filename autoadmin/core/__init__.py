# -*- coding: utf-8 -*-
"""
core

Core primitives shared by the schema and CRUD layers.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
