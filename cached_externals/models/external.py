"""External module data models"""

import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..constants import DEFAULT_REVISION


@dataclass
class ExternalModule:
    """A manifest entry: local path mapped to SCM options

    Option keys are stored without their leading symbol marker, so
    ``:type: git`` in the manifest becomes ``options["type"] == "git"``.
    """

    path: str
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def scm_type(self) -> Optional[str]:
        """SCM type name (git, subversion, ...)"""
        return self.options.get("type")

    @property
    def revision(self) -> str:
        """Requested revision, defaults to HEAD"""
        return str(self.options.get("revision") or DEFAULT_REVISION)

    @property
    def repository(self) -> Optional[str]:
        return self.options.get("repository")

    @property
    def working_dir(self) -> Optional[str]:
        """Explicit local checkout directory, if configured"""
        return self.options.get("working_dir")

    @property
    def name(self) -> str:
        """Last component of the module path"""
        return posixpath.basename(self.path.rstrip("/"))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "path": self.path,
            "options": dict(self.options),
        }


@dataclass
class ExternalState:
    """Deploy-time state derived for one external module"""

    module: ExternalModule
    target: Union[str, Path]
    destination: Union[str, Path]
    revision: Optional[str] = None
    command: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "path": self.module.path,
            "target": str(self.target),
            "destination": str(self.destination),
        }
        if self.revision:
            data["revision"] = self.revision
        if self.command:
            data["command"] = self.command
        return data
