"""Public API for cached-externals"""

from .externals import Externals, build_remote_setup_command, setup, update
from .exceptions import (
    ExternalsError,
    ConfigError,
    ManifestKeyError,
    ScmNotFoundError,
    CommandError,
    CheckoutError,
    SyncError,
    ExternalMissingError,
)

__all__ = [
    # Main class
    "Externals",

    # Functions
    "setup",
    "update",
    "build_remote_setup_command",

    # Exceptions
    "ExternalsError",
    "ConfigError",
    "ManifestKeyError",
    "ScmNotFoundError",
    "CommandError",
    "CheckoutError",
    "SyncError",
    "ExternalMissingError",
]
