"""Core functionality for cached-externals"""

from .manifest_loader import ManifestLoader, load_manifest
from .path_resolver import ExternalsPathResolver
from .runner import CommandRunner, LocalRunner, SSHRunner

__all__ = [
    "ManifestLoader",
    "load_manifest",
    "ExternalsPathResolver",
    "CommandRunner",
    "LocalRunner",
    "SSHRunner",
]
