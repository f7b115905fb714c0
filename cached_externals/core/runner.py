"""Shell command execution, locally or on a deployment target"""

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from ..api.exceptions import CommandError

logger = logging.getLogger(__name__)


class CommandRunner(ABC):
    """Executes shell command strings"""

    @abstractmethod
    def execute(self, command: str) -> subprocess.CompletedProcess:
        """Execute command and return the completed process"""
        pass

    def run(self, command: str) -> None:
        """Run command, raising CommandError on non-zero exit"""
        result = self.execute(command)
        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr or "")

    def succeeds(self, command: str) -> bool:
        """Run command and report whether it exited cleanly

        Output of a failed command is logged, stderr as an error.
        """
        result = self.execute(command)
        if result.returncode == 0:
            return True

        logger.error(f"Command failed with exit code {result.returncode}: {command}")
        if result.stderr and result.stderr.strip():
            logger.error(result.stderr.strip())
        if result.stdout and result.stdout.strip():
            logger.debug(result.stdout.strip())
        return False

    def capture(self, command: str) -> str:
        """Run command and return its stripped stdout"""
        result = self.execute(command)
        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr or "")
        return (result.stdout or "").strip()


class LocalRunner(CommandRunner):
    """Run commands through the local shell"""

    def __init__(self, cwd: Optional[Union[str, Path]] = None):
        self.cwd = cwd

    def execute(self, command: str) -> subprocess.CompletedProcess:
        logger.debug(f"executing locally: {command}")
        return subprocess.run(
            command,
            shell=True,
            cwd=self.cwd,
            capture_output=True,
            text=True
        )


class SSHRunner(CommandRunner):
    """Run commands on a single deployment target over ssh"""

    def __init__(self,
                 host: str,
                 user: Optional[str] = None,
                 port: Optional[int] = None,
                 local: Optional[LocalRunner] = None):
        """
        Initialize ssh runner

        Args:
            host: Target host name
            user: Login user
            port: ssh port
            local: Runner used to spawn the ssh client
        """
        self.host = host
        self.user = user
        self.port = port
        self.local = local or LocalRunner()

    @property
    def destination(self) -> str:
        return f"{self.user}@{self.host}" if self.user else self.host

    def wrap(self, command: str) -> str:
        """Build the local ssh invocation for a remote command"""
        parts: List[str] = ["ssh"]
        if self.port:
            parts.extend(["-p", str(self.port)])
        parts.append(self.destination)
        parts.append(shlex.quote(command))
        return " ".join(parts)

    def execute(self, command: str) -> subprocess.CompletedProcess:
        logger.debug(f"executing on {self.destination}: {command}")
        return self.local.execute(self.wrap(command))
