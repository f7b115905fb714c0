"""Configuration management service"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import yaml

from ..api.exceptions import ConfigError
from ..constants import (
    ENV_MANIFEST,
    ENV_RELEASE_PATH,
    ENV_SHARED_PATH,
    ENV_STAGE,
    PROJECT_CONFIG_FILE,
    Stage,
)
from ..models.config import ExternalsConfig

logger = logging.getLogger(__name__)

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "stage": {"enum": [s.value for s in Stage]},
        "manifest_path": {"type": "string"},
        "externals_dir": {"type": "string"},
        "shared_path": {"type": "string"},
        "latest_release": {"type": "string"},
        "host": {"type": "string"},
        "ssh_user": {"type": "string"},
        "ssh_port": {"type": "integer", "minimum": 1, "maximum": 65535},
        "scm_modules": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}

ENV_OVERRIDES = {
    "stage": ENV_STAGE,
    "manifest_path": ENV_MANIFEST,
    "shared_path": ENV_SHARED_PATH,
    "latest_release": ENV_RELEASE_PATH,
}


class ConfigService:
    """Service for loading project configuration

    Precedence, lowest first: defaults, ``.cached-externals.yaml``,
    environment variables, explicit overrides (CLI options).
    """

    def __init__(self, project_root: Path, config_path: Optional[Path] = None):
        """Initialize config service

        Args:
            project_root: Project root directory
            config_path: Explicit config file, defaults to the project one
        """
        self.project_root = Path(project_root)
        self.config_path = Path(config_path) if config_path else self.project_root / PROJECT_CONFIG_FILE
        self._explicit = config_path is not None

    def load_file(self) -> Dict[str, Any]:
        """Load and validate the configuration file

        Returns:
            Configuration mapping, empty if the project has no config file

        Raises:
            ConfigError: If the file is unreadable or invalid
        """
        if not self.config_path.exists():
            if self._explicit:
                raise ConfigError(f"Configuration file not found: {self.config_path}")
            return {}

        with open(self.config_path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}")

        self.validate(data)
        return data

    @staticmethod
    def validate(data: Dict[str, Any]) -> None:
        """Validate configuration against the schema"""
        try:
            jsonschema.validate(data, CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            location = ".".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigError(f"Invalid configuration at {location}: {e.message}")

    @staticmethod
    def load_env() -> Dict[str, Any]:
        """Collect overrides from environment variables"""
        return {
            key: os.environ[env]
            for key, env in ENV_OVERRIDES.items()
            if os.environ.get(env)
        }

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> ExternalsConfig:
        """Build the effective configuration

        Args:
            overrides: Values taking precedence over file and environment

        Returns:
            Effective configuration
        """
        data = self.load_file()
        data.update(self.load_env())
        data.update({k: v for k, v in (overrides or {}).items() if v is not None})

        self.validate(data)

        logger.debug(f"Effective configuration: {data}")
        return ExternalsConfig.from_dict(data)
