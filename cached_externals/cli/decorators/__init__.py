# cached_externals/cli/decorators/__init__.py
"""CLI decorators"""

from .options import remote_options, handle_errors

__all__ = [
    'remote_options',
    'handle_errors',
]
