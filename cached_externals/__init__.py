"""Cached Externals - manage vendored SCM checkouts during deployment.

External modules declared in ``config/externals.yml`` are checked out at the
requested revision and symlinked into the working copy or into each release,
with checkouts cached by revision in the deployment target's shared path.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .api.externals import Externals, setup, update

# Data models
from .models import ExternalModule, ExternalState, ExternalsConfig, ExternalsResult

# SCM seam
from .scm import SCM, register_scm, new_scm

# Exceptions
from .api.exceptions import (
    ExternalsError,
    ConfigError,
    ManifestKeyError,
    ScmNotFoundError,
    CommandError,
    CheckoutError,
    SyncError,
    ExternalMissingError,
)

# Utility functions
from .core.manifest_loader import load_manifest

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main class
    "Externals",

    # Core API functions
    "setup",
    "update",

    # Data models
    "ExternalModule",
    "ExternalState",
    "ExternalsConfig",
    "ExternalsResult",

    # SCM
    "SCM",
    "register_scm",
    "new_scm",

    # Exceptions
    "ExternalsError",
    "ConfigError",
    "ManifestKeyError",
    "ScmNotFoundError",
    "CommandError",
    "CheckoutError",
    "SyncError",
    "ExternalMissingError",

    # Utility functions
    "load_manifest",
]
