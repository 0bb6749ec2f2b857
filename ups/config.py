"""
ups Configuration Module

Load and manage configuration from config.yaml.
"""

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from ups.errors import ConfigError
from ups.paths import config_path


DEFAULT_CONFIG = {
    "data": {
        "path": None  # defaults to <user data dir>/ups/data
    },
    "refresh": {
        "max_workers": None,
        "timeout": None
    },
    "logging": {
        "level": "WARNING"
    }
}


def find_config_file() -> Path | None:
    """Find the config file, checking $UPS_CONFIG then the user config dir."""
    locations = []
    if os.environ.get("UPS_CONFIG"):
        locations.append(Path(os.environ["UPS_CONFIG"]))
    locations.append(config_path())

    for path in locations:
        if path.exists():
            return path

    return None


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Optional explicit path to config file.

    Returns:
        Configuration dictionary with defaults applied.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
    else:
        path = find_config_file()

    if path and path.exists():
        with open(path) as f:
            try:
                file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid config file {path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Invalid config file {path}: expected a mapping")
        config = _deep_merge(config, file_config)

    # Override with environment variables
    if os.environ.get("UPS_DATA_PATH"):
        config["data"]["path"] = os.environ["UPS_DATA_PATH"]

    if os.environ.get("UPS_MAX_WORKERS"):
        config["refresh"]["max_workers"] = os.environ["UPS_MAX_WORKERS"]

    if os.environ.get("UPS_TIMEOUT"):
        config["refresh"]["timeout"] = os.environ["UPS_TIMEOUT"]

    if os.environ.get("UPS_LOG_LEVEL"):
        config["logging"]["level"] = os.environ["UPS_LOG_LEVEL"]

    config["refresh"]["max_workers"] = _positive_int(config["refresh"]["max_workers"], "refresh.max_workers")
    config["refresh"]["timeout"] = _positive_float(config["refresh"]["timeout"], "refresh.timeout")

    return config


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _positive_int(value: Any, key: str) -> Optional[int]:
    """Coerce an optional positive whole number, raising ConfigError if invalid.

    Booleans and fractional values are rejected rather than truncated.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a whole number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigError(f"{key} must be a whole number, got {value!r}")
        number = int(value)
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            raise ConfigError(f"{key} must be a whole number, got {value!r}") from None
    if number <= 0:
        raise ConfigError(f"{key} must be positive, got {value!r}")
    return number


def _positive_float(value: Any, key: str) -> Optional[float]:
    """Coerce an optional positive number, raising ConfigError if invalid."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number, got {value!r}") from None
    if number <= 0:
        raise ConfigError(f"{key} must be positive, got {value!r}")
    return number
