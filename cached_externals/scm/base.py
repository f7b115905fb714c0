"""SCM abstraction used to build checkout and sync commands"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Type

from ..api.exceptions import ScmNotFoundError

logger = logging.getLogger(__name__)

# Runs a shell command and returns its stdout
Executor = Callable[[str], str]


class SCM(ABC):
    """Command builder for one source control system

    Implementations only construct command strings; running them is up to
    the caller. ``name`` is the value used for ``:type`` in the manifest.
    """

    name: str = ""

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = options or {}

    @property
    def repository(self) -> Optional[str]:
        return self.options.get("repository")

    @abstractmethod
    def checkout(self, revision: str, destination: str) -> str:
        """Command that checks out ``revision`` into ``destination``"""
        pass

    @abstractmethod
    def sync(self, revision: str, destination: str) -> str:
        """Command that brings an existing checkout up to ``revision``"""
        pass

    @abstractmethod
    def query_revision(self, revision: str, executor: Executor) -> str:
        """Resolve a symbolic revision to a concrete identifier

        Args:
            revision: Revision as written in the manifest (branch, tag, HEAD)
            executor: Runs a command and returns its output

        Returns:
            Concrete revision identifier
        """
        pass


class ScmRegistry:
    """Maps SCM type names to implementations"""

    def __init__(self):
        self._scms: Dict[str, Type[SCM]] = {}

    def register(self, name: str, scm_class: Type[SCM]) -> None:
        if name in self._scms and self._scms[name] is not scm_class:
            logger.warning(f"SCM {name} already registered, replacing")
        self._scms[name] = scm_class
        logger.debug(f"Registered SCM: {name}")

    def unregister(self, name: str) -> None:
        self._scms.pop(name, None)

    def get(self, name: Optional[str]) -> Type[SCM]:
        if name is None or name not in self._scms:
            raise ScmNotFoundError(name)
        return self._scms[name]

    def list_scms(self) -> List[str]:
        return sorted(self._scms)

    def create(self, name: Optional[str], options: Optional[Dict[str, Any]] = None) -> SCM:
        """Instantiate the SCM registered under ``name``"""
        return self.get(name)(options)


# Global registry instance
scm_registry = ScmRegistry()


def register_scm(name: str, scm_class: Type[SCM]) -> None:
    """Register an SCM implementation with the global registry"""
    scm_registry.register(name, scm_class)


def new_scm(scm_type: Optional[str], options: Optional[Dict[str, Any]] = None) -> SCM:
    """Create an SCM client for a manifest entry's ``:type``"""
    return scm_registry.create(scm_type, options)
