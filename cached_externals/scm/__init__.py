"""SCM abstraction for cached-externals"""

from .base import SCM, Executor, ScmRegistry, scm_registry, register_scm, new_scm
from .loader import ScmLoader, load_all_scms

__all__ = [
    'SCM',
    'Executor',
    'ScmRegistry',
    'scm_registry',
    'register_scm',
    'new_scm',
    'ScmLoader',
    'load_all_scms',
]
