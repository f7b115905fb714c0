"""Manifest loading for external module declarations"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..api.exceptions import ConfigError, ManifestKeyError
from ..constants import SYMBOL_PREFIX
from ..models.external import ExternalModule

logger = logging.getLogger(__name__)


class ManifestLoader:
    """Load ``config/externals.yml`` into external module entries

    The manifest maps a path in the application to a mapping of SCM options.
    Option keys must be written as symbols::

        vendor/plugins/acts_as_list:
          :type: git
          :repository: git://example.com/acts_as_list.git
          :revision: v1.2
    """

    def load(self, manifest_path: Union[str, Path]) -> List[ExternalModule]:
        """Load manifest file

        A missing or unparsable manifest yields an empty list.

        Args:
            manifest_path: Path to the manifest file

        Returns:
            External modules in manifest order

        Raises:
            ManifestKeyError: If an entry uses string option keys
        """
        data = self._read(Path(manifest_path))
        return self.parse(data)

    def parse(self, data: Dict[Any, Any]) -> List[ExternalModule]:
        """Validate a loaded manifest document and build entries"""
        modules = []

        for path, options in data.items():
            path = str(path)

            if options is None:
                options = {}
            elif not isinstance(options, dict):
                raise ConfigError(
                    f"Options for external '{path}' must be a mapping, "
                    f"got {type(options).__name__}"
                )

            strings = [k for k in options if isinstance(k, str) and not k.startswith(SYMBOL_PREFIX)]
            if strings:
                raise ManifestKeyError(path, strings)

            modules.append(ExternalModule(path=path, options=self._strip_symbols(options)))

        logger.debug(f"Loaded {len(modules)} external module(s)")
        return modules

    def _read(self, manifest_path: Path) -> Dict[Any, Any]:
        """Read the YAML document, swallowing load failures"""
        try:
            with open(manifest_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.debug(f"No externals manifest at {manifest_path}")
            return {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning(f"Could not load externals manifest {manifest_path}: {e}")
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.warning(f"Externals manifest {manifest_path} is not a mapping, ignoring")
            return {}

        return data

    @staticmethod
    def _strip_symbols(options: Dict[Any, Any]) -> Dict[Any, Any]:
        stripped = {}
        for key, value in options.items():
            if isinstance(key, str):
                key = key[len(SYMBOL_PREFIX):]
            stripped[key] = value
        return stripped


def load_manifest(manifest_path: Union[str, Path]) -> List[ExternalModule]:
    """Convenience wrapper around :class:`ManifestLoader`"""
    return ManifestLoader().load(manifest_path)
