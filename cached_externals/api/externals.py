"""Externals API for setting up and updating external modules"""

import logging
import shlex
from pathlib import Path
from typing import Callable, List, Optional, Union

from rich.console import Console

from ..constants import (
    DEFAULT_REVISION,
    MSG_CONFIGURING,
    MSG_LINKED,
    MSG_UPDATING,
)
from ..core import CommandRunner, ExternalsPathResolver, LocalRunner, ManifestLoader, SSHRunner
from ..models import (
    ExternalModule,
    ExternalResult,
    ExternalsConfig,
    ExternalsResult,
    ExternalState,
    OperationStatus,
)
from ..scm import SCM, new_scm
from ..utils.file_utils import force_symlink, remove_path
from .exceptions import CheckoutError, ExternalMissingError, ExternalsError, SyncError

logger = logging.getLogger(__name__)

ScmFactory = Callable[[Optional[str], dict], SCM]


class Externals:
    """Set up and update the external modules declared in the manifest

    In local mode modules are checked out next to the project (see
    ``externals_dir``) and symlinked into the working copy. Otherwise each
    module is checked out on the deployment target under
    ``<shared_path>/externals/<path>/<revision>`` and symlinked into the
    latest release.
    """

    def __init__(self,
                 config: Optional[ExternalsConfig] = None,
                 project_root: Union[str, Path, None] = None,
                 runner: Optional[CommandRunner] = None,
                 local_runner: Optional[CommandRunner] = None,
                 scm_factory: ScmFactory = new_scm,
                 console: Optional[Console] = None):
        """
        Initialize externals manager

        Args:
            config: Externals configuration
            project_root: Application root, defaults to the current directory
            runner: Runner for commands on the deployment target
            local_runner: Runner for commands on this machine
            scm_factory: Creates SCM clients from ``(type, options)``
            console: Console for progress output
        """
        self.config = config or ExternalsConfig()
        self.project_root = Path(project_root or Path.cwd()).absolute()
        self.path_resolver = ExternalsPathResolver(self.project_root, self.config)
        self.local_runner = local_runner or LocalRunner(cwd=self.project_root)
        self._runner = runner
        self.scm_factory = scm_factory
        self.console = console or Console()
        self._modules: Optional[List[ExternalModule]] = None

    @property
    def runner(self) -> CommandRunner:
        """Runner for the deployment target, ssh when a host is configured"""
        if self._runner is None:
            if self.config.host:
                self._runner = SSHRunner(
                    self.config.host,
                    user=self.config.ssh_user,
                    port=self.config.ssh_port,
                    local=self.local_runner
                )
            else:
                self._runner = self.local_runner
        return self._runner

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.config.manifest_path

    @property
    def modules(self) -> List[ExternalModule]:
        """External modules from the manifest (loaded on first access)"""
        if self._modules is None:
            self._modules = ManifestLoader().load(self.manifest_path)
        return self._modules

    @modules.setter
    def modules(self, modules: List[ExternalModule]) -> None:
        self._modules = list(modules)

    def setup(self) -> ExternalsResult:
        """
        Check out any missing external modules and link them into place

        Returns:
            ExternalsResult: one entry per manifest module

        Raises:
            CheckoutError: If a local clone fails
            CommandError: If the remote command fails
            ConfigError: If remote paths are not configured
        """
        result = self._new_result("setup")

        for module in self.modules:
            self.console.print(MSG_CONFIGURING.format(path=module.path))
            scm = self.scm_factory(module.scm_type, module.options)

            try:
                if self.config.is_local:
                    entry = self._setup_local(module, scm)
                else:
                    entry = self._setup_remote(module, scm)
            except ExternalsError as e:
                logger.error(f"Failed to set up {module.path}: {e}")
                raise

            result.externals.append(entry)

        result.complete(OperationStatus.SUCCESS)
        return result

    def update(self) -> ExternalsResult:
        """
        Synchronize local checkouts to HEAD, or re-run setup remotely

        Returns:
            ExternalsResult: one entry per manifest module

        Raises:
            ExternalMissingError: If a local checkout does not exist yet
            SyncError: If synchronizing a checkout fails
        """
        if not self.config.is_local:
            result = self.setup()
            result.operation = "update"
            return result

        result = self._new_result("update")

        for module in self.modules:
            self.console.print(MSG_UPDATING.format(path=module.path))
            scm = self.scm_factory(module.scm_type, module.options)

            destination = self.path_resolver.local_destination(module)
            if not destination.exists():
                raise ExternalMissingError(str(destination))

            if not self.local_runner.succeeds(scm.sync(DEFAULT_REVISION, str(destination))):
                logger.error(f"Sync failed for {module.path}")
                raise SyncError(str(destination))

            state = ExternalState(
                module=module,
                target=self.path_resolver.target_path(module),
                destination=destination
            )
            result.externals.append(
                ExternalResult(status=OperationStatus.SUCCESS, message="synchronized", state=state)
            )

        result.complete(OperationStatus.SUCCESS)
        return result

    def plan(self) -> List[ExternalState]:
        """
        Compute targets and destinations without touching anything

        Remote revisions are not resolved, so remote destinations point at
        the shared directory of each module.
        """
        states = []
        for module in self.modules:
            if self.config.is_local:
                states.append(ExternalState(
                    module=module,
                    target=self.path_resolver.target_path(module),
                    destination=self.path_resolver.local_destination(module)
                ))
            else:
                states.append(ExternalState(
                    module=module,
                    target=self.path_resolver.release_target(module),
                    destination=self.path_resolver.shared_dir(module)
                ))
        return states

    def _setup_local(self, module: ExternalModule, scm: SCM) -> ExternalResult:
        target = self.path_resolver.target_path(module)
        remove_path(target)

        destination = self.path_resolver.local_destination(module)
        cloned = False

        if not destination.exists():
            command = scm.checkout(DEFAULT_REVISION, str(destination))
            if not self.local_runner.succeeds(command):
                remove_path(destination)
                raise CheckoutError(module.repository or scm.repository, str(destination))
            cloned = True

        force_symlink(destination, target)
        logger.info(MSG_LINKED.format(target=target, destination=destination))

        entry = ExternalResult(
            status=OperationStatus.SUCCESS,
            message="cloned and linked" if cloned else "linked",
            state=ExternalState(module=module, target=target, destination=destination)
        )
        entry.metadata["cloned"] = cloned
        return entry

    def _setup_remote(self, module: ExternalModule, scm: SCM) -> ExternalResult:
        revision = scm.query_revision(module.revision, self.local_runner.capture)
        shared = self.path_resolver.shared_dir(module)
        destination = self.path_resolver.revision_destination(module, revision)
        target = self.path_resolver.release_target(module)

        command = build_remote_setup_command(
            target=target,
            shared=shared,
            destination=destination,
            checkout=scm.checkout(revision, destination)
        )
        self.runner.run(command)
        logger.info(MSG_LINKED.format(target=target, destination=destination))

        return ExternalResult(
            status=OperationStatus.SUCCESS,
            message=f"linked revision {revision}",
            state=ExternalState(
                module=module,
                target=target,
                destination=destination,
                revision=revision,
                command=command
            )
        )

    def _new_result(self, operation: str) -> ExternalsResult:
        return ExternalsResult(
            status=OperationStatus.IN_PROGRESS,
            operation=operation,
            stage=self.config.stage.value
        )


def build_remote_setup_command(target: str, shared: str, destination: str, checkout: str) -> str:
    """
    Build the composite command that installs one module on a target

    Removes the release-local path, ensures the shared directory exists,
    checks out the revision unless it is already cached (cleaning up a
    partial checkout on failure) and links it into the release.
    """
    target = shlex.quote(target)
    shared = shlex.quote(shared)
    destination = shlex.quote(destination)
    return (
        f"rm -rf {target} && mkdir -p {shared} && "
        f"if [ ! -d {destination} ]; then ({checkout}) || rm -rf {destination}; fi && "
        f"ln -nsf {destination} {target}"
    )


def setup(config: Optional[ExternalsConfig] = None,
          project_root: Union[str, Path, None] = None,
          **kwargs) -> ExternalsResult:
    """Set up all external modules (convenience function)"""
    return Externals(config, project_root, **kwargs).setup()


def update(config: Optional[ExternalsConfig] = None,
           project_root: Union[str, Path, None] = None,
           **kwargs) -> ExternalsResult:
    """Update all external modules (convenience function)"""
    return Externals(config, project_root, **kwargs).update()
