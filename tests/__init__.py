# -*- coding: utf-8 -*-
"""
Test suite for the autoadmin package.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
