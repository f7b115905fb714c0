# cached_externals/plugins/__init__.py
"""Plugin system for cached-externals"""

from .base import (
    Plugin,
    PluginInfo,
    PluginContext,
    PluginManager,
    PluginPriority,
    HookPoint,
    TaskInfo,
    plugin_manager,
)
from .loader import PluginLoader, load_all_plugins

__all__ = [
    # Base classes
    'Plugin',
    'PluginInfo',
    'PluginContext',
    'PluginManager',
    'PluginPriority',
    'HookPoint',
    'TaskInfo',

    # Global instance
    'plugin_manager',

    # Loader
    'PluginLoader',
    'load_all_plugins',
]
