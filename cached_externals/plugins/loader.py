# cached_externals/plugins/loader.py
"""Plugin loader and discovery"""

import importlib
import inspect
import logging

from .base import Plugin, PluginManager


class PluginLoader:
    """Load plugins from modules"""

    BUILTIN_MODULES = [
        'cached_externals.plugins.builtin.externals',
        'cached_externals.plugins.builtin.hooks',
    ]

    def __init__(self, plugin_manager: PluginManager):
        """
        Initialize plugin loader

        Args:
            plugin_manager: Plugin manager instance
        """
        self.plugin_manager = plugin_manager
        self.logger = logging.getLogger("PluginLoader")
        self._loaded_modules = set()

    def load_builtin_plugins(self) -> int:
        """
        Load all built-in plugins

        Returns:
            Number of plugins loaded
        """
        return sum(self.load_from_module(name) for name in self.BUILTIN_MODULES)

    def load_from_module(self, module_name: str) -> int:
        """
        Load plugins from a Python module

        Args:
            module_name: Fully qualified module name

        Returns:
            Number of plugins loaded
        """
        if module_name in self._loaded_modules:
            self.logger.info(f"Module {module_name} already loaded")
            return 0

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            self.logger.error(f"Failed to import module {module_name}: {e}")
            return 0

        self._loaded_modules.add(module_name)
        return self._load_plugins_from_module(module)

    def _load_plugins_from_module(self, module) -> int:
        """Register every concrete Plugin class defined in a module"""
        count = 0

        for name, obj in inspect.getmembers(module, inspect.isclass):
            if (issubclass(obj, Plugin) and
                    obj is not Plugin and
                    obj.__module__ == module.__name__ and
                    not inspect.isabstract(obj)):

                try:
                    self.plugin_manager.register(obj())
                    count += 1
                except Exception as e:
                    self.logger.error(f"Failed to instantiate plugin {name}: {e}")

        return count


def load_all_plugins(plugin_manager: PluginManager = None) -> int:
    """
    Load all built-in plugins

    Args:
        plugin_manager: Plugin manager instance (uses global if not provided)

    Returns:
        Total number of plugins loaded
    """
    from .base import plugin_manager as global_pm

    return PluginLoader(plugin_manager or global_pm).load_builtin_plugins()
