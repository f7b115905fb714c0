"""SCM implementation discovery"""

import importlib
import inspect
import logging
from importlib.metadata import entry_points
from typing import Iterable

from ..constants import SCM_ENTRY_POINT_GROUP
from .base import SCM, ScmRegistry, scm_registry


class ScmLoader:
    """Load SCM implementations from modules and entry points"""

    def __init__(self, registry: ScmRegistry = None):
        self.registry = registry or scm_registry
        self.logger = logging.getLogger("ScmLoader")
        self._loaded_modules = set()

    def load_from_module(self, module_name: str) -> int:
        """
        Register every concrete SCM subclass defined in a module

        Args:
            module_name: Fully qualified module name

        Returns:
            Number of SCMs registered
        """
        if module_name in self._loaded_modules:
            return 0

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            self.logger.error(f"Failed to import SCM module {module_name}: {e}")
            return 0

        self._loaded_modules.add(module_name)

        count = 0
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if issubclass(obj, SCM) and obj is not SCM and not inspect.isabstract(obj):
                if not obj.name:
                    self.logger.warning(f"SCM class {obj.__qualname__} has no name, skipping")
                    continue
                self.registry.register(obj.name, obj)
                count += 1

        return count

    def load_from_modules(self, module_names: Iterable[str]) -> int:
        return sum(self.load_from_module(name) for name in module_names)

    def load_entry_points(self) -> int:
        """Register SCMs advertised under the ``cached_externals.scm`` group"""
        count = 0
        for ep in entry_points(group=SCM_ENTRY_POINT_GROUP):
            try:
                scm_class = ep.load()
            except Exception as e:
                self.logger.error(f"Failed to load SCM entry point {ep.name}: {e}")
                continue
            if not (inspect.isclass(scm_class) and issubclass(scm_class, SCM)):
                self.logger.warning(f"SCM entry point {ep.name} does not provide an SCM subclass, skipping")
                continue
            self.registry.register(ep.name, scm_class)
            count += 1
        return count


def load_all_scms(module_names: Iterable[str] = (), registry: ScmRegistry = None) -> int:
    """
    Load SCMs from entry points and the given modules

    Returns:
        Total number of SCMs registered
    """
    loader = ScmLoader(registry)
    return loader.load_entry_points() + loader.load_from_modules(module_names)
