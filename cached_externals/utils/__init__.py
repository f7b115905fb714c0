# cached_externals/utils/__init__.py
"""Utility functions for cached-externals"""

from .file_utils import remove_path, force_symlink
from .async_utils import run_async

__all__ = [
    "remove_path",
    "force_symlink",
    "run_async",
]
