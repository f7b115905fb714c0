"""Path resolution for external module checkouts and links"""

import os
import posixpath
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import ConfigError
from ..constants import SHARED_EXTERNALS_DIR
from ..models.config import ExternalsConfig
from ..models.external import ExternalModule


class ExternalsPathResolver:
    """Resolves where external modules are checked out and linked

    Local paths are resolved against the project root and returned as
    :class:`~pathlib.Path`. Remote paths live on the deployment target and are
    returned as POSIX strings.
    """

    def __init__(self, project_root: Union[str, Path], config: ExternalsConfig):
        """Initialize path resolver

        Args:
            project_root: Root directory of the application
            config: Externals configuration
        """
        self.project_root = Path(project_root).absolute()
        self.config = config

    # Local mode

    def target_path(self, module: ExternalModule) -> Path:
        """Symlink location inside the local working copy"""
        return self.project_root / module.path

    def local_destination(self, module: ExternalModule) -> Path:
        """Local checkout directory for a module

        Uses the module's ``working_dir`` when set, otherwise a directory named
        after the last path component under the externals directory.
        """
        if module.working_dir:
            destination = self.project_root / os.path.expanduser(module.working_dir)
        else:
            destination = self.project_root / self.config.externals_dir / module.name
        return Path(os.path.abspath(destination))

    # Remote mode

    def shared_dir(self, module: ExternalModule) -> str:
        """Directory on the target caching checkouts of a module by revision"""
        return posixpath.join(self._require("shared_path"), SHARED_EXTERNALS_DIR, module.path)

    def revision_destination(self, module: ExternalModule, revision: str) -> str:
        """Revision-addressed checkout directory on the target"""
        return posixpath.join(self.shared_dir(module), revision)

    def release_target(self, module: ExternalModule) -> str:
        """Symlink location inside the latest release on the target"""
        return posixpath.join(self._require("latest_release"), module.path)

    def _require(self, name: str) -> str:
        value: Optional[str] = getattr(self.config, name)
        if not value:
            raise ConfigError(
                f"'{name}' must be configured to manage externals on a deployment target"
            )
        return value
