# cached_externals/plugins/builtin/__init__.py
"""Built-in plugins for cached-externals"""

from .externals import ExternalsPlugin
from .hooks import LifecycleHooksPlugin

__all__ = [
    'ExternalsPlugin',
    'LifecycleHooksPlugin',
]
