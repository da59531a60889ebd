"""
__init__

Dashboard backend entry point.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .application import ApplicationFactory, create_app
from .conf import AutoAdminSettings, configure, current_settings
from .core.configuration import ModelConfig, ModelRegistry
from .meta import __version__

# The End
