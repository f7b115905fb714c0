"""Shared test fixtures for cached-externals tests."""
import shlex
import subprocess
import textwrap

import pytest

from cached_externals.core.runner import CommandRunner
from cached_externals.scm import SCM, scm_registry


class FakeSCM(SCM):
    """SCM whose commands only touch the filesystem.

    Options understood (as written in the manifest):
        :fail_checkout: true   checkout creates the directory, then fails
        :fail_sync: true       sync fails
        :resolved: <rev>       revision returned by query_revision
    """

    name = "fake"

    def checkout(self, revision, destination):
        dest = shlex.quote(destination)
        command = f"mkdir -p {dest} && echo {revision} > {dest}/REVISION"
        if self.options.get("fail_checkout"):
            command += " && echo 'fatal: repository not found' >&2 && false"
        return command

    def sync(self, revision, destination):
        if self.options.get("fail_sync"):
            return "false"
        return f"echo {revision} > {shlex.quote(destination)}/SYNCED"

    def query_revision(self, revision, executor):
        return executor(f"echo {self.options.get('resolved', 'abc123')}")


class RecordingRunner(CommandRunner):
    """Runner that records commands instead of executing them."""

    def __init__(self, returncode=0, stdout=""):
        self.commands = []
        self.returncode = returncode
        self.stdout = stdout

    def execute(self, command):
        self.commands.append(command)
        return subprocess.CompletedProcess(command, self.returncode, stdout=self.stdout, stderr="")


@pytest.fixture
def fake_scm():
    """Register FakeSCM under the 'fake' type."""
    scm_registry.register(FakeSCM.name, FakeSCM)
    yield FakeSCM
    scm_registry.unregister(FakeSCM.name)


@pytest.fixture
def recording_runner():
    """Runner that only records commands."""
    return RecordingRunner()


@pytest.fixture
def project(tmp_path):
    """Application root with an empty config directory."""
    root = tmp_path / "app"
    (root / "config").mkdir(parents=True)
    return root


@pytest.fixture
def write_manifest(project):
    """Write config/externals.yml in the project."""
    def _write(content):
        path = project / "config" / "externals.yml"
        path.write_text(textwrap.dedent(content))
        return path
    return _write


@pytest.fixture
def fake_manifest(write_manifest):
    """Manifest with two externals handled by FakeSCM."""
    return write_manifest("""\
        vendor/plugins/acts_as_list:
          :type: fake
          :repository: git://example.com/acts_as_list.git
        vendor/rails:
          :type: fake
          :repository: git://example.com/rails.git
          :revision: v2.3
          :resolved: deadbeef
        """)
