"""Service layer for cached-externals"""

from .config_service import ConfigService, CONFIG_SCHEMA

__all__ = [
    "ConfigService",
    "CONFIG_SCHEMA",
]
