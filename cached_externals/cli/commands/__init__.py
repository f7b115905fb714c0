# cached_externals/cli/commands/__init__.py
"""CLI commands"""

from . import local
from . import setup
from . import update
from . import list_externals
from . import hook
from . import tasks

__all__ = [
    "local",
    "setup",
    "update",
    "list_externals",
    "hook",
    "tasks",
]
