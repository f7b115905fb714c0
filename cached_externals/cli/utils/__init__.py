# cached_externals/cli/utils/__init__.py
"""CLI utilities"""

from .output import console, format_externals_result, format_plan, format_errors

__all__ = [
    'console',
    'format_externals_result',
    'format_plan',
    'format_errors',
]
