"""Configuration module for textops.

Settings are read from the bundled default.yaml. A user file only needs
the keys it changes; everything else keeps its default value.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'default.yaml'


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    logger.debug(f"Loaded configuration from {path}")
    return data or {}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries.

    Nested dictionaries are merged key by key; any other value in
    ``override`` replaces the one in ``base``. Neither input is modified.

    Args:
        base: Configuration providing the defaults.
        override: Configuration whose values take precedence.

    Returns:
        The merged configuration.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to a config file layered over default.yaml.
            Only the defaults are returned if not specified.

    Returns:
        Dictionary containing configuration values.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If the config file is invalid YAML.
    """
    config = _read_yaml(DEFAULT_CONFIG_PATH)
    if config_path:
        config = merge_config(config, _read_yaml(Path(config_path)))
    return config


def get_config_value(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary.
        key_path: Dot-separated path to the value (e.g., 'wrap.length').
        default: Default value if key is not found or set to null.

    Returns:
        The configuration value or default.
    """
    value = config

    for key in key_path.split('.'):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return default if value is None else value


__all__ = ['load_config', 'merge_config', 'get_config_value', 'DEFAULT_CONFIG_PATH']
