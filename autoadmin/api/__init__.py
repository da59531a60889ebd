# -*- coding: utf-8 -*-
"""
api

HTTP routers for schemas and statistics.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
