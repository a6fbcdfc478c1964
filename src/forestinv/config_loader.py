"""
Configuration loader for forestinv.
Provides unified access to the YAML and JSON configuration files in cfg/.

Configuration files:
- analysis_defaults.yaml - default confidence level, diameter class width,
  projection horizon and growth model
- volume_equations.yaml - default and species-specific volume coefficients

Files are parsed once per loader and cached.
"""
import json
from pathlib import Path
from typing import Dict, Any, Optional, Union

import yaml

from .exceptions import ConfigurationError, InvalidDataError

ANALYSIS_DEFAULTS_FILE = 'analysis_defaults.yaml'
VOLUME_EQUATIONS_FILE = 'volume_equations.yaml'


class ConfigLoader:
    """Loads and caches forestinv configuration from a cfg/ directory.

    Attributes:
        cfg_dir: Path to the configuration directory
    """

    def __init__(self, cfg_dir: Optional[Path] = None):
        """Initialize the configuration loader.

        Args:
            cfg_dir: Path to the configuration directory. Defaults to the
                cfg/ directory inside the package.
        """
        if cfg_dir is None:
            cfg_dir = Path(__file__).parent / 'cfg'
        self.cfg_dir = Path(cfg_dir)
        self._cache: Dict[str, Dict[str, Any]] = {}

    def _load_config_file(self, file_path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file.

        Args:
            file_path: Path to the configuration file

        Returns:
            Dictionary containing configuration data

        Raises:
            ConfigurationError: If the file is missing or its format is not supported
            InvalidDataError: If the file cannot be parsed or is empty
        """
        if not file_path.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}")

        suffix = file_path.suffix.lower()

        try:
            if suffix in ['.yaml', '.yml']:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f)
            elif suffix == '.json':
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported configuration file format: {suffix}. "
                                         f"Supported formats: .yaml, .yml, .json")
        except yaml.YAMLError as e:
            raise InvalidDataError("YAML configuration", f"parsing error: {e}") from e
        except json.JSONDecodeError as e:
            raise InvalidDataError("JSON configuration", f"parsing error: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration from {file_path}: {e}") from e

        if data is None:
            raise InvalidDataError(f"configuration file {file_path.name}",
                                   "file is empty or contains only comments")
        if not isinstance(data, dict):
            raise InvalidDataError(f"configuration file {file_path.name}",
                                   "top level must be a mapping")
        return data

    def load_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load a configuration file with caching.

        Relative paths are resolved against ``cfg_dir``.

        Args:
            path: File name or path

        Returns:
            Dictionary containing configuration data
        """
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = self.cfg_dir / file_path
        key = str(file_path)
        if key not in self._cache:
            self._cache[key] = self._load_config_file(file_path)
        return self._cache[key]

    def load_analysis_defaults(self, path: Union[str, Path, None] = None) -> Dict[str, Any]:
        """Load analysis defaults, merged over the packaged defaults.

        Args:
            path: Optional user configuration file. Keys it defines override
                the packaged analysis_defaults.yaml.

        Returns:
            Dictionary with 'analysis' and 'growth_model' sections
        """
        base = self.load_file(ANALYSIS_DEFAULTS_FILE)
        merged = {
            'analysis': dict(base.get('analysis', {})),
            'growth_model': dict(base.get('growth_model', {})),
        }
        if path is not None:
            override = self.load_file(path)
            merged['analysis'].update(override.get('analysis', {}) or {})
            if override.get('growth_model'):
                # A user model replaces the default one entirely
                merged['growth_model'] = dict(override['growth_model'])
        return merged

    def load_volume_equations(self) -> Dict[str, Any]:
        """Load the volume coefficient table.

        Returns:
            Dictionary with 'default' and 'species' sections
        """
        data = self.load_file(VOLUME_EQUATIONS_FILE)
        if 'default' not in data:
            raise InvalidDataError(VOLUME_EQUATIONS_FILE, "missing 'default' section")
        return data

    def clear_cache(self) -> None:
        """Clear the file cache.

        Useful for testing or when configuration files may have changed.
        """
        self._cache.clear()


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    """Get the shared configuration loader for the packaged cfg/ directory."""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def load_analysis_defaults(path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """Convenience function to load analysis defaults.

    Args:
        path: Optional user configuration file overriding the defaults
    """
    return get_config_loader().load_analysis_defaults(path)


def load_volume_equations() -> Dict[str, Any]:
    """Convenience function to load the volume coefficient table."""
    return get_config_loader().load_volume_equations()
