# -*- coding: utf-8 -*-
"""
utils

Utility subpackages for autoadmin.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
