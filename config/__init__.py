"""
Configuration Module for the Receipt Reconciliation Engine.

Extraction windows, date limits, reconciliation tolerances, confidence
weights and logging options are read from YAML. The bundled
``settings.yaml`` always supplies the defaults; a user file (``--config``)
is deep-merged on top and only needs the keys it changes.

Usage:
    from config import get_config

    window = get_config("extraction.total.window", 20)
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from src.utils.exceptions import ConfigurationError
from src.utils.helpers import merge_dicts

DEFAULT_SETTINGS = Path(__file__).parent / "settings.yaml"


class ConfigurationManager:
    """
    Process-wide, read-only view of the engine settings.

    The first instantiation loads the settings; later instantiations
    return the same object and ignore their argument. Call reset() to
    load a different user file.

    Attributes:
        default_path (Path): Bundled settings file.
        config_path (Optional[Path]): User file merged over the defaults.

    Example:
        >>> config = ConfigurationManager("my_settings.yaml")
        >>> config.get("reconciliation.min_tolerance")
        100
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Load the settings on first use.

        Args:
            config_path: Optional YAML file overriding the bundled defaults.

        Raises:
            ConfigurationError: If a settings file is missing or malformed.
        """
        if self._initialized:
            return

        self.default_path = DEFAULT_SETTINGS
        self.config_path = Path(config_path) if config_path else None

        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        settings = self._read_yaml(self.default_path)
        if self.config_path is not None:
            settings = merge_dicts(settings, self._read_yaml(self.config_path))
        self._config = settings

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """Read one YAML mapping; an empty file counts as an empty mapping."""
        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}",
                {"path": str(path)}
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid configuration file: {path}",
                {"path": str(path), "reason": str(e)}
            )

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {path}",
                {"path": str(path)}
            )
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key such as "extraction.date.min_year".

        Returns ``default`` when any segment of the key is absent.
        """
        node: Any = self._config
        for segment in key.split('.'):
            if not isinstance(node, dict) or segment not in node:
                return default
            node = node[segment]
        return node

    def get_all(self) -> Dict[str, Any]:
        """Shallow copy of the merged settings."""
        return dict(self._config)

    def reload(self) -> None:
        """Re-read the bundled and user files."""
        self._load_config()

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded settings; the next instantiation reloads them."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ConfigurationManager().get(key, default)."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config', 'DEFAULT_SETTINGS']
