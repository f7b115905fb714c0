"""Global constants for cached-externals"""

from enum import Enum

APP_NAME = "cached-externals"
LOG_FORMAT = "%(message)s"

# Project identification
PROJECT_CONFIG_FILE = ".cached-externals.yaml"

# Manifest
DEFAULT_MANIFEST_PATH = "config/externals.yml"
SYMBOL_PREFIX = ":"

# Directory structure
DEFAULT_LOCAL_EXTERNALS_DIR = "../externals"
SHARED_EXTERNALS_DIR = "externals"

# SCM
DEFAULT_REVISION = "HEAD"
SCM_ENTRY_POINT_GROUP = "cached_externals.scm"


class Stage(Enum):
    LOCAL = "local"
    REMOTE = "remote"


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "CE001"
    MANIFEST_KEY_ERROR = "CE002"
    SCM_NOT_FOUND = "CE003"
    COMMAND_FAILED = "CE004"
    CHECKOUT_FAILED = "CE005"
    SYNC_FAILED = "CE006"
    EXTERNAL_MISSING = "CE007"


# Environment variables
ENV_STAGE = "CACHED_EXTERNALS_STAGE"
ENV_MANIFEST = "CACHED_EXTERNALS_MANIFEST"
ENV_SHARED_PATH = "CACHED_EXTERNALS_SHARED_PATH"
ENV_RELEASE_PATH = "CACHED_EXTERNALS_RELEASE_PATH"
ENV_LOG_LEVEL = "CACHED_EXTERNALS_LOG_LEVEL"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"
EMOJI_LINK = "🔗"

# Messages templates
MSG_CONFIGURING = "configuring & linking {path}"
MSG_UPDATING = "Updating {path}"
MSG_LINKED = f"{EMOJI_LINK} {{target}} {EMOJI_ARROW} {{destination}}"
