"""Exception definitions for cached-externals API"""

from typing import List, Optional

from ..constants import ErrorCode


class ExternalsError(Exception):
    """Base exception for cached-externals"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(ExternalsError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class ManifestKeyError(ExternalsError, ValueError):
    """Manifest entry uses string option keys instead of symbols"""

    def __init__(self, path: str, keys: List[str]):
        message = (
            f"the externals.yml file must use symbols for the option keys "
            f"(found {keys!r} under {path})"
        )
        super().__init__(message, ErrorCode.MANIFEST_KEY_ERROR)
        self.path = path
        self.keys = keys


class ScmNotFoundError(ExternalsError):
    """No SCM implementation registered for a type"""

    def __init__(self, scm_type: Optional[str]):
        message = f"No SCM implementation registered for type: {scm_type!r}"
        super().__init__(message, ErrorCode.SCM_NOT_FOUND)
        self.scm_type = scm_type


class CommandError(ExternalsError):
    """Shell command exited with a non-zero status"""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        message = f"Command failed with exit code {returncode}: {command}"
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message, ErrorCode.COMMAND_FAILED)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class CheckoutError(ExternalsError):
    """Cloning an external module failed"""

    def __init__(self, repository: Optional[str], destination: str):
        message = f"Error cloning {repository} to {destination}"
        super().__init__(message, ErrorCode.CHECKOUT_FAILED)
        self.repository = repository
        self.destination = destination


class SyncError(ExternalsError):
    """Synchronizing an external module failed"""

    def __init__(self, destination: str):
        super().__init__(f"Error synchronizing {destination} with SCM", ErrorCode.SYNC_FAILED)
        self.destination = destination


class ExternalMissingError(ExternalsError):
    """Local checkout missing, setup has not been run"""

    def __init__(self, destination: str):
        message = f"{destination} is missing. Please run 'cached-externals local setup'"
        super().__init__(message, ErrorCode.EXTERNAL_MISSING)
        self.destination = destination
