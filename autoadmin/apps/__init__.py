# -*- coding: utf-8 -*-
"""
apps

Administered application packages.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
