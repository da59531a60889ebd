# -*- coding: utf-8 -*-
"""
meta

Package metadata.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

__version__ = "0.1.0"

# The End
